"""
재고 도메인 값 객체 (Value Objects)

I/O 의존성 없이 순수 데이터 구조만 포함합니다.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple

from src.settings.constants import NOTIFICATION_PREFIXES


@dataclass(frozen=True)
class Item:
    """재고 상품 (불변)

    label은 재고 내에서 유일하지 않을 수 있다.
    """
    label: str
    item_type: str
    expiration: datetime

    def __str__(self) -> str:
        return f"{self.label}, {self.item_type}, {self.expiration.isoformat()}"

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리 변환 (API 응답용)"""
        return {
            "label": self.label,
            "type": self.item_type,
            "expiration": self.expiration.isoformat(),
        }


@dataclass(frozen=True)
class StockEntry:
    """재고 등록 1건

    add() 호출마다 새로 생성되며 ItemStore와 ExpirationIndex가
    같은 객체를 공유한다. seq는 단조 증가하는 입고 순번으로,
    같은 유통기한을 가진 상품끼리의 정렬 기준이 된다.
    """
    seq: int
    item: Item = field(compare=False)

    @property
    def label(self) -> str:
        return self.item.label

    @property
    def expiration(self) -> datetime:
        return self.item.expiration

    @property
    def sort_key(self) -> Tuple[datetime, int]:
        return (self.item.expiration, self.seq)


class NotificationKind(str, Enum):
    """알림 종류"""
    REMOVED = "removed"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Notification:
    """알림 레코드

    text 형식:
        "Item removed: <label>, <type>, <expiration>"
        "Item expired: <label>, <type>, <expiration>"
    """
    kind: NotificationKind
    item: Item
    recorded_at: datetime = field(default_factory=datetime.now)

    @property
    def text(self) -> str:
        return f"{NOTIFICATION_PREFIXES[self.kind.value]}: {self.item}"

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리 변환 (API 응답용)"""
        return {
            "kind": self.kind.value,
            "text": self.text,
            "item": self.item.to_dict(),
            "recorded_at": self.recorded_at.isoformat(),
        }
