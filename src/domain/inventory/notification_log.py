"""
NotificationLog -- 추가 전용 알림 로그

스케줄러 스레드가 append 하는 동안 호출자 스레드가 읽을 수 있으므로
읽기는 항상 복사본(스냅샷)을 반환한다. 중복 제거/상한/삭제 없음.
"""

import threading
from typing import List

from src.domain.inventory.models import Notification


class NotificationLog:
    """삽입 순서 알림 로그"""

    def __init__(self) -> None:
        self._records: List[Notification] = []
        self._lock = threading.Lock()

    def append(self, notification: Notification) -> None:
        with self._lock:
            self._records.append(notification)

    def snapshot(self) -> List[str]:
        """지금까지 append된 알림 텍스트 (복사본)"""
        with self._lock:
            return [record.text for record in self._records]

    def records(self) -> List[Notification]:
        """지금까지 append된 알림 레코드 (복사본)"""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
