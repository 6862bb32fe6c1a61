"""
테스트용 가짜 시계 / 타이머

- FakeClock: 수동으로 전진시키는 시계
- FakeWakeupTimer: 예약만 기록하고 fire()로 수동 실행
"""

from datetime import datetime, timedelta

from src.domain.inventory.models import Item

BASE_TIME = datetime(2026, 10, 19, 9, 0, 0)


class FakeClock:
    """수동으로 전진시키는 시계"""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class FakeWakeupTimer:
    """WakeupTimer 대역"""

    def __init__(self):
        self.armed_at = None
        self.on_fire = None
        self.arm_calls = []
        self.cancel_count = 0

    def arm(self, at, on_fire):
        self.armed_at = at
        self.on_fire = on_fire
        self.arm_calls.append(at)

    def cancel(self):
        self.armed_at = None
        self.on_fire = None
        self.cancel_count += 1

    @property
    def pending(self) -> bool:
        return self.on_fire is not None

    def fire(self):
        """예약 콜백 실행 (ThreadWakeupTimer처럼 예약을 소비한 뒤 호출)"""
        assert self.on_fire is not None, "예약된 wake-up 없음"
        on_fire = self.on_fire
        self.armed_at = None
        self.on_fire = None
        return on_fire()

    def run_until(self, clock: FakeClock, until: datetime) -> int:
        """until까지 시계를 전진시키며 예약 시각마다 fire

        Returns:
            fire 호출 횟수
        """
        fired = 0
        while self.pending and self.armed_at <= until:
            clock.now = max(clock.now, self.armed_at)
            self.fire()
            fired += 1
        clock.now = max(clock.now, until)
        return fired


def make_item(label="milk", item_type="dairy", expires_at=None, **delta) -> Item:
    """테스트용 Item 생성 (expires_at 미지정 시 BASE_TIME + delta, 기본 1시간)"""
    if expires_at is None:
        expires_at = BASE_TIME + timedelta(**(delta or {"hours": 1}))
    return Item(label=label, item_type=item_type, expiration=expires_at)
