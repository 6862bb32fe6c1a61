"""
ExpirationIndex -- 유통기한 순 정렬 인덱스

ItemStore와 같은 StockEntry 객체를 (expiration, seq) 키로 정렬한다.
seq 타이브레이크 덕분에 유통기한이 같은 상품도 각각 별도 슬롯을 차지한다.

구현: heapq + 지연 삭제(lazy invalidation)
- insert: O(log n)
- remove: O(1) 무효화, 힙 정리는 분할상환 O(log n)
- peek_earliest: 분할상환 O(1)
- pop_all_due_by: 만료 건수 k에 대해 O(k log n)
"""

import heapq
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.domain.inventory.exceptions import IndexInconsistencyError
from src.domain.inventory.models import StockEntry

# 무효 항목이 살아있는 항목보다 이만큼 많아지면 힙 재구성
_COMPACT_RATIO = 2


class ExpirationIndex:
    """유통기한 최소 힙

    thread-safe 하지 않음. 잠금은 InventoryService가 담당한다.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[datetime, int, StockEntry]] = []
        self._live: Dict[int, StockEntry] = {}

    def insert(self, entry: StockEntry) -> None:
        if entry.seq in self._live:
            raise IndexInconsistencyError(f"이미 인덱스에 있는 항목: seq={entry.seq}")
        self._live[entry.seq] = entry
        heapq.heappush(self._heap, (entry.expiration, entry.seq, entry))

    def remove(self, entry: StockEntry) -> None:
        """항목 제거 (identity 기준)

        Raises:
            IndexInconsistencyError: 인덱스에 없는 항목
        """
        if self._live.get(entry.seq) is not entry:
            raise IndexInconsistencyError(
                f"ExpirationIndex에 없는 항목 제거 시도: seq={entry.seq}, label={entry.label}"
            )
        del self._live[entry.seq]
        self._prune()

        if len(self._heap) > _COMPACT_RATIO * max(len(self._live), 1):
            self._compact()

    def peek_earliest(self) -> Optional[StockEntry]:
        """가장 먼저 만료되는 항목 (제거하지 않음)"""
        self._prune()
        return self._heap[0][2] if self._heap else None

    def pop_all_due_by(self, watermark: datetime) -> List[StockEntry]:
        """expiration <= watermark 인 항목을 (expiration, seq) 오름차순으로 꺼낸다"""
        due: List[StockEntry] = []
        self._prune()
        while self._heap and self._heap[0][0] <= watermark:
            _, seq, entry = heapq.heappop(self._heap)
            if self._live.pop(seq, None) is entry:
                due.append(entry)
            self._prune()
        return due

    def entries(self) -> List[StockEntry]:
        """정렬된 스냅샷"""
        return sorted(self._live.values(), key=lambda e: e.sort_key)

    def __contains__(self, entry: StockEntry) -> bool:
        return self._live.get(entry.seq) is entry

    def __len__(self) -> int:
        return len(self._live)

    def _prune(self) -> None:
        # 힙 최상단의 무효 항목 제거
        while self._heap and self._heap[0][1] not in self._live:
            heapq.heappop(self._heap)

    def _compact(self) -> None:
        self._heap = [
            (entry.expiration, entry.seq, entry) for entry in self._live.values()
        ]
        heapq.heapify(self._heap)
