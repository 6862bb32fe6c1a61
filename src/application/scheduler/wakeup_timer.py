"""
WakeupTimer -- 단발성 기상(wake-up) 타이머

ExpiryScheduler는 이 좁은 인터페이스 { arm(at, on_fire), cancel() } 에만 의존한다.
테스트에서는 가짜 타이머로 교체하여 실제 시간 없이 만료 알고리즘을 검증한다.

ThreadWakeupTimer:
- 전용 데몬 스레드 1개 (인벤토리 수명 동안 유지)
- threading.Condition 대기로 마감 시각까지 잠든다 (폴링 없음)
- 동시에 대기 중인 wake-up은 최대 1개
"""

import threading
from datetime import datetime
from typing import Callable, Optional, Protocol

from src.settings.constants import SCHEDULER_THREAD_NAME
from src.settings.timing import TIMER_JOIN_TIMEOUT, TIMER_MAX_WAIT_SECONDS
from src.utils.logger import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class WakeupTimer(Protocol):
    """단발성 타이머 포트"""

    def arm(self, at: datetime, on_fire: Callable[[], None]) -> None:
        """at 시각에 on_fire를 1회 호출하도록 예약 (기존 예약은 대체)"""
        ...

    def cancel(self) -> None:
        """대기 중인 예약 취소 (없으면 무시)"""
        ...


class ThreadWakeupTimer:
    """전용 스레드 기반 WakeupTimer

    cancel()은 동기적이다: 반환 시점 이후 대기 중인 예약은 없다.
    단, 이미 실행 중인 콜백은 끝까지 수행된다.

    콜백은 Condition 잠금 밖에서 실행되므로 콜백 안에서
    arm()/cancel()을 다시 호출해도 교착되지 않는다.
    """

    def __init__(self, clock: Clock = datetime.now, name: str = SCHEDULER_THREAD_NAME) -> None:
        self._clock = clock
        self._cond = threading.Condition()
        self._deadline: Optional[datetime] = None
        self._on_fire: Optional[Callable[[], None]] = None
        self._closed = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def pending_at(self) -> Optional[datetime]:
        """대기 중인 예약 시각 (없으면 None)"""
        with self._cond:
            return self._deadline

    def arm(self, at: datetime, on_fire: Callable[[], None]) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("종료된 타이머에는 예약할 수 없습니다")
            self._deadline = at
            self._on_fire = on_fire
            self._cond.notify()

    def cancel(self) -> None:
        with self._cond:
            self._deadline = None
            self._on_fire = None
            self._cond.notify()

    def close(self, timeout: float = TIMER_JOIN_TIMEOUT) -> None:
        """스레드 종료 (대기 중인 예약은 버린다)"""
        with self._cond:
            self._closed = True
            self._deadline = None
            self._on_fire = None
            self._cond.notify()
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while True:
            with self._cond:
                on_fire = self._wait_for_deadline()
                if on_fire is None:
                    return

            try:
                on_fire()
            except Exception as e:
                # 타이머 스레드는 호출자에게 에러를 전달할 수 없으므로 기록 후 계속
                logger.error(f"[타이머] 콜백 실패: {e}", exc_info=True)

    def _wait_for_deadline(self) -> Optional[Callable[[], None]]:
        """마감 시각까지 대기 후 콜백을 꺼낸다. 종료 시 None (cond 보유 상태에서 호출)"""
        while not self._closed:
            if self._deadline is None:
                self._cond.wait()
                continue

            remaining = (self._deadline - self._clock()).total_seconds()
            if remaining <= 0:
                on_fire = self._on_fire
                self._deadline = None
                self._on_fire = None
                return on_fire

            # 재예약/취소 시 notify로 깨어나 마감 시각을 다시 계산.
            # Condition.wait 타임아웃 상한(threading.TIMEOUT_MAX)을 넘지 않도록 나눠 대기
            self._cond.wait(timeout=min(remaining, TIMER_MAX_WAIT_SECONDS))
        return None
