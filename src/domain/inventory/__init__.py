"""
재고 도메인 (인메모리)

- Item / StockEntry / Notification: 값 객체
- ItemStore: 라벨 기반 실재고 컬렉션
- ExpirationIndex: 유통기한 순 정렬 인덱스
- NotificationLog: 추가 전용 알림 로그
"""

from src.domain.inventory.models import (
    Item,
    StockEntry,
    Notification,
    NotificationKind,
)
from src.domain.inventory.item_store import ItemStore
from src.domain.inventory.expiration_index import ExpirationIndex
from src.domain.inventory.notification_log import NotificationLog
from src.domain.inventory.exceptions import (
    InventoryError,
    InvalidItemError,
    InventoryClosedError,
    IndexInconsistencyError,
)

__all__ = [
    "Item",
    "StockEntry",
    "Notification",
    "NotificationKind",
    "ItemStore",
    "ExpirationIndex",
    "NotificationLog",
    "InventoryError",
    "InvalidItemError",
    "InventoryClosedError",
    "IndexInconsistencyError",
]
