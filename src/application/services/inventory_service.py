"""
InventoryService -- 재고 관리 퍼사드

ItemStore, ExpirationIndex, NotificationLog, ExpiryScheduler를 하나의
일관성 영역으로 묶는다. add / remove / 만료 처리는 모두 같은 RLock 안에서
수행되므로 서로의 구조 변경이 끼어들지 않는다.

Usage:
    with InventoryService() as inventory:
        inventory.add(Item("milk", "dairy", datetime.now() + timedelta(days=3)))
        inventory.remove("milk")
        inventory.list_notifications()
        # ["Item removed: milk, dairy, 2026-10-22T09:00:00"]
"""

import itertools
import threading
from datetime import datetime
from typing import List, Optional

from src.application.scheduler.expiry_scheduler import ExpiryScheduler, SchedulerState
from src.application.scheduler.wakeup_timer import Clock, ThreadWakeupTimer, WakeupTimer
from src.domain.inventory.exceptions import (
    IndexInconsistencyError,
    InvalidItemError,
    InventoryClosedError,
)
from src.domain.inventory.expiration_index import ExpirationIndex
from src.domain.inventory.item_store import ItemStore
from src.domain.inventory.models import Item, Notification, NotificationKind, StockEntry
from src.domain.inventory.notification_log import NotificationLog
from src.utils.logger import get_logger, log_with_context

logger = get_logger(__name__)


class InventoryService:
    """인메모리 재고 + 만료 알림

    Args:
        timer: WakeupTimer 구현 (기본: 전용 스레드 ThreadWakeupTimer)
        clock: 현재 시각 함수 (기본: datetime.now)
    """

    def __init__(self, timer: Optional[WakeupTimer] = None, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._seq = itertools.count(1)
        self._closed = False

        self._store = ItemStore()
        self._index = ExpirationIndex()
        self._log = NotificationLog()

        self._owns_timer = timer is None
        self._timer = timer if timer is not None else ThreadWakeupTimer(clock=clock)
        self._scheduler = ExpiryScheduler(
            index=self._index,
            on_expired=self._expire_entry,
            timer=self._timer,
            lock=self._lock,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # 공개 API
    # ------------------------------------------------------------------

    def add(self, item: Item) -> None:
        """상품 추가

        Raises:
            InvalidItemError: item이 None / Item이 아님 / 유통기한이 naive datetime이 아님
            InventoryClosedError: close() 이후 호출
        """
        if item is None:
            raise InvalidItemError("추가할 상품이 없습니다 (None)")
        if not isinstance(item, Item):
            raise InvalidItemError(f"Item 타입이 아닙니다: {type(item).__name__}")
        if not isinstance(item.expiration, datetime):
            raise InvalidItemError(f"유통기한은 datetime이어야 합니다: {item.expiration!r}")
        if item.expiration.tzinfo is not None:
            # 시계(datetime.now)와 비교 가능한 로컬 naive 시각만 허용
            raise InvalidItemError(f"timezone 정보가 있는 유통기한은 지원하지 않습니다: {item.expiration}")

        with self._lock:
            self._ensure_open()
            entry = StockEntry(seq=next(self._seq), item=item)
            self._store.insert(entry)
            self._index.insert(entry)

            if self._index.peek_earliest() is entry:
                self._scheduler.reschedule()

        log_with_context(
            logger, "info", "상품 추가",
            label=item.label, type=item.item_type,
            expiration=item.expiration.isoformat(), seq=entry.seq,
        )

    def remove(self, label: str) -> Optional[Item]:
        """라벨로 상품 꺼내기 (중복 라벨이면 가장 먼저 입고된 1건)

        Returns:
            꺼낸 Item, 해당 라벨이 없으면 None (알림 없음)

        Raises:
            InventoryClosedError: close() 이후 호출
        """
        with self._lock:
            self._ensure_open()
            entry = self._store.take_by_label(label)
            if entry is None:
                logger.debug(f"제거 대상 없음: label={label}")
                return None

            was_earliest = self._index.peek_earliest() is entry
            self._index.remove(entry)
            self._log.append(Notification(NotificationKind.REMOVED, entry.item, self._clock()))

            if was_earliest:
                self._scheduler.reschedule()

        log_with_context(logger, "info", "상품 제거", label=label, seq=entry.seq)
        return entry.item

    def list_notifications(self) -> List[str]:
        """알림 텍스트 스냅샷 (발생 순)"""
        return self._log.snapshot()

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------

    def notification_records(self) -> List[Notification]:
        return self._log.records()

    def list_items(self) -> List[Item]:
        """현재 재고 (입고 순)"""
        with self._lock:
            return self._store.items()

    def next_expiration(self) -> Optional[datetime]:
        with self._lock:
            earliest = self._index.peek_earliest()
            return earliest.expiration if earliest else None

    @property
    def scheduler_state(self) -> SchedulerState:
        with self._lock:
            return self._scheduler.state

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def check_consistency(self) -> None:
        """ItemStore / ExpirationIndex / 스케줄러 예약 상태 일치 검증

        Raises:
            IndexInconsistencyError: 불변식 위반
        """
        with self._lock:
            stored = self._store.entries()
            if len(stored) != len(self._index) or any(e not in self._index for e in stored):
                raise IndexInconsistencyError(
                    f"ItemStore({len(stored)})와 ExpirationIndex({len(self._index)}) 불일치"
                )

            earliest = self._index.peek_earliest()
            if earliest is None:
                if self._scheduler.state != SchedulerState.IDLE:
                    raise IndexInconsistencyError(
                        f"빈 인덱스인데 스케줄러 상태가 {self._scheduler.state.value}"
                    )
            elif self._closed:
                # 종료 후에는 남은 재고가 있어도 예약하지 않는다
                if self._scheduler.state != SchedulerState.IDLE:
                    raise IndexInconsistencyError(
                        f"종료된 인벤토리의 스케줄러 상태가 {self._scheduler.state.value}"
                    )
            elif self._scheduler.armed_at != earliest.expiration:
                raise IndexInconsistencyError(
                    f"예약 시각 {self._scheduler.armed_at} != 가장 이른 유통기한 {earliest.expiration}"
                )

    # ------------------------------------------------------------------
    # 수명 관리
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """예약 취소 및 (직접 만든 경우) 타이머 스레드 종료

        이후 add/remove는 InventoryClosedError. 조회는 계속 가능하다.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._scheduler.stop()
        if self._owns_timer:
            self._timer.close()
        logger.info(f"인벤토리 종료 (남은 재고 {len(self)}건)")

    def __enter__(self) -> "InventoryService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # 내부
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise InventoryClosedError("종료된 인벤토리입니다")

    def _expire_entry(self, entry: StockEntry) -> None:
        # 스케줄러가 잠금 보유 상태로 호출. 인덱스에서는 이미 pop 됨
        self._store.remove(entry)
        self._log.append(Notification(NotificationKind.EXPIRED, entry.item, self._clock()))
        log_with_context(
            logger, "info", "상품 만료",
            label=entry.label, expiration=entry.expiration.isoformat(), seq=entry.seq,
        )
