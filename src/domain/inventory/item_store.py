"""
ItemStore -- 실재고 컬렉션

"무엇이 재고에 있는가"의 기준 데이터.
- 입고 순서 유지 (dict 삽입 순서)
- 라벨 중복 허용, 각 등록은 별개 항목
- 라벨 -> 입고 순번 큐 보조 인덱스로 take_by_label 시 선형 탐색 회피
"""

from collections import deque
from typing import Deque, Dict, Iterator, List, Optional

from src.domain.inventory.exceptions import IndexInconsistencyError
from src.domain.inventory.models import Item, StockEntry


class ItemStore:
    """입고 순서를 보존하는 재고 컬렉션

    thread-safe 하지 않음. 잠금은 InventoryService가 담당한다.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, StockEntry] = {}
        self._by_label: Dict[str, Deque[int]] = {}

    def insert(self, entry: StockEntry) -> None:
        """재고 추가 (라벨 중복 허용)"""
        if entry.seq in self._entries:
            raise IndexInconsistencyError(f"중복 입고 순번: seq={entry.seq}")
        self._entries[entry.seq] = entry
        self._by_label.setdefault(entry.label, deque()).append(entry.seq)

    def take_by_label(self, label: str) -> Optional[StockEntry]:
        """라벨이 일치하는 항목 중 가장 먼저 입고된 1건을 꺼낸다

        Args:
            label: 정확히 일치해야 하는 라벨

        Returns:
            꺼낸 StockEntry, 없으면 None (상태 변경 없음)
        """
        queue = self._by_label.get(label)
        if not queue:
            return None

        seq = queue.popleft()
        if not queue:
            del self._by_label[label]
        return self._entries.pop(seq)

    def remove(self, entry: StockEntry) -> None:
        """특정 항목 제거 (만료 처리 경로)"""
        if not self.contains(entry):
            raise IndexInconsistencyError(
                f"ItemStore에 없는 항목 제거 시도: seq={entry.seq}, label={entry.label}"
            )
        del self._entries[entry.seq]

        queue = self._by_label[entry.label]
        queue.remove(entry.seq)
        if not queue:
            del self._by_label[entry.label]

    def contains(self, entry: StockEntry) -> bool:
        """동일 객체(identity) 기준 포함 여부"""
        return self._entries.get(entry.seq) is entry

    def entries(self) -> List[StockEntry]:
        """입고 순서 스냅샷"""
        return list(self._entries.values())

    def items(self) -> List[Item]:
        """입고 순서 상품 스냅샷"""
        return [entry.item for entry in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StockEntry]:
        return iter(self.entries())
