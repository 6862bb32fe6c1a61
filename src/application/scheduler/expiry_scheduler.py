"""
ExpiryScheduler -- 유통기한 만료 스케줄러

항상 0개 또는 1개의 wake-up만 예약되어 있으며,
예약 시각은 ExpirationIndex의 가장 이른 유통기한과 일치한다.

상태 전이:
    IDLE   --가장 이른 항목 추가-->  ARMED
    ARMED  --구조 변경 시 재예약-->  ARMED
    ARMED  --인덱스 비어짐-->        IDLE
    ARMED  --타이머 만료-->          FIRING --재예약--> ARMED | IDLE
    *      --stop()-->               IDLE (종료, 이후 예약 없음)
"""

import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from src.application.scheduler.wakeup_timer import Clock, WakeupTimer
from src.domain.inventory.expiration_index import ExpirationIndex
from src.domain.inventory.models import StockEntry
from src.utils.logger import LoggerMixin, log_with_context


class SchedulerState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    FIRING = "firing"


class ExpiryScheduler(LoggerMixin):
    """만료 스케줄러

    Args:
        index: 공유 ExpirationIndex
        on_expired: 만료 항목 처리 콜백 (ItemStore 제거 + 알림 추가). 잠금 보유 상태로 호출됨
        timer: WakeupTimer 구현
        lock: InventoryService와 공유하는 일관성 잠금 (RLock)
        clock: 현재 시각 함수
    """

    def __init__(
        self,
        index: ExpirationIndex,
        on_expired: Callable[[StockEntry], None],
        timer: WakeupTimer,
        lock: threading.RLock,
        clock: Clock = datetime.now,
    ) -> None:
        self._index = index
        self._on_expired = on_expired
        self._timer = timer
        self._lock = lock
        self._clock = clock
        self._state = SchedulerState.IDLE
        self._armed_at: Optional[datetime] = None
        self._stopped = False

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def armed_at(self) -> Optional[datetime]:
        """예약된 wake-up 시각 (IDLE이면 None)"""
        return self._armed_at

    def reschedule(self) -> None:
        """기존 예약을 취소하고 가장 이른 유통기한으로 다시 예약

        인덱스 구조가 바뀐 직후, 일관성 잠금을 보유한 상태에서 호출해야 한다.
        """
        with self._lock:
            # 이미 소비된 예약이어도 cancel은 무해
            self._timer.cancel()
            self._armed_at = None

            if self._stopped:
                self._state = SchedulerState.IDLE
                return

            earliest = self._index.peek_earliest()
            if earliest is None:
                self._state = SchedulerState.IDLE
                self.logger.debug("[스케줄러] 인덱스 비어있음 → IDLE")
                return

            self._timer.arm(earliest.expiration, self.fire)
            self._armed_at = earliest.expiration
            self._state = SchedulerState.ARMED
            log_with_context(
                self.logger, "debug", "[스케줄러] 예약",
                at=earliest.expiration.isoformat(), label=earliest.label, seq=earliest.seq,
            )

    def fire(self) -> int:
        """만료 일괄 처리 (타이머 스레드에서 호출)

        이미 취소된 예약이 실행 중이었더라도 현재 인덱스 상태를 기준으로
        처리하므로 중복/누락이 생기지 않는다.

        Returns:
            만료 처리한 항목 수
        """
        with self._lock:
            if self._stopped:
                return 0
            self._state = SchedulerState.FIRING
            try:
                now = self._clock()
                due = self._index.pop_all_due_by(now)
                for entry in due:
                    self._on_expired(entry)

                if due:
                    log_with_context(
                        self.logger, "info", "[스케줄러] 만료 처리",
                        count=len(due), watermark=now.isoformat(),
                    )
            finally:
                self.reschedule()
            return len(due)

    def stop(self) -> None:
        """예약 취소 후 IDLE 고정. 이후 reschedule()은 다시 예약하지 않는다"""
        with self._lock:
            self._stopped = True
            self.reschedule()
        self.logger.debug("[스케줄러] 중지")
