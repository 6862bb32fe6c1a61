"""ExpirationIndex 테스트

- (expiration, seq) 정렬 및 동일 유통기한 타이브레이크
- 지연 삭제 힙의 remove / peek / pop_all_due_by
"""

from datetime import timedelta

import pytest

from src.domain.inventory.exceptions import IndexInconsistencyError
from src.domain.inventory.expiration_index import ExpirationIndex
from src.domain.inventory.models import StockEntry

from tests.fakes import BASE_TIME, make_item


def _entry(seq, label="milk", **delta):
    return StockEntry(seq=seq, item=make_item(label=label, **delta))


class TestOrdering:

    def test_peek_earliest_empty(self):
        assert ExpirationIndex().peek_earliest() is None

    def test_peek_earliest_by_expiration(self):
        index = ExpirationIndex()
        late = _entry(1, hours=3)
        early = _entry(2, hours=1)
        index.insert(late)
        index.insert(early)

        assert index.peek_earliest() is early
        assert len(index) == 2  # peek은 제거하지 않음

    def test_same_expiration_entries_stay_distinct(self):
        """동일 유통기한 N건이 하나로 합쳐지지 않음"""
        index = ExpirationIndex()
        entries = [_entry(seq, label=f"item{seq}", hours=1) for seq in range(1, 6)]
        for entry in entries:
            index.insert(entry)

        assert len(index) == 5
        assert index.entries() == entries

    def test_tie_break_by_insertion_sequence(self):
        index = ExpirationIndex()
        second = _entry(2, hours=1)
        first = _entry(1, hours=1)
        index.insert(second)
        index.insert(first)

        assert index.peek_earliest() is first


class TestRemove:

    def test_remove_earliest_moves_peek(self):
        index = ExpirationIndex()
        early = _entry(1, hours=1)
        late = _entry(2, hours=2)
        index.insert(early)
        index.insert(late)

        index.remove(early)

        assert index.peek_earliest() is late
        assert early not in index

    def test_remove_middle_entry(self):
        index = ExpirationIndex()
        entries = [_entry(seq, hours=seq) for seq in range(1, 4)]
        for entry in entries:
            index.insert(entry)

        index.remove(entries[1])

        assert index.entries() == [entries[0], entries[2]]
        assert index.pop_all_due_by(BASE_TIME + timedelta(days=1)) == [entries[0], entries[2]]

    def test_remove_one_of_tied_entries(self):
        index = ExpirationIndex()
        a = _entry(1, hours=1)
        b = _entry(2, hours=1)
        index.insert(a)
        index.insert(b)

        index.remove(a)

        assert index.peek_earliest() is b
        assert len(index) == 1

    def test_remove_absent_raises(self):
        index = ExpirationIndex()
        with pytest.raises(IndexInconsistencyError):
            index.remove(_entry(1))

    def test_remove_twice_raises(self):
        index = ExpirationIndex()
        entry = _entry(1)
        index.insert(entry)
        index.remove(entry)
        with pytest.raises(IndexInconsistencyError):
            index.remove(entry)

    def test_insert_twice_raises(self):
        index = ExpirationIndex()
        entry = _entry(1)
        index.insert(entry)
        with pytest.raises(IndexInconsistencyError):
            index.insert(entry)

    def test_many_removals_keep_heap_consistent(self):
        """대량 삭제로 힙 재구성이 일어나도 순서 유지"""
        index = ExpirationIndex()
        entries = [_entry(seq, minutes=100 - seq) for seq in range(1, 51)]
        for entry in entries:
            index.insert(entry)

        for entry in entries[:45]:
            index.remove(entry)

        remaining = entries[45:]
        assert len(index) == 5
        assert index.entries() == sorted(remaining, key=lambda e: e.sort_key)
        assert index.peek_earliest() is entries[-1]


class TestPopAllDueBy:

    def test_pops_only_due_entries_in_order(self):
        index = ExpirationIndex()
        e1 = _entry(1, minutes=10)
        e2 = _entry(2, minutes=5)
        e3 = _entry(3, minutes=30)
        for entry in (e1, e2, e3):
            index.insert(entry)

        due = index.pop_all_due_by(BASE_TIME + timedelta(minutes=10))

        assert due == [e2, e1]
        assert index.entries() == [e3]

    def test_watermark_is_inclusive(self):
        index = ExpirationIndex()
        entry = _entry(1, minutes=10)
        index.insert(entry)

        assert index.pop_all_due_by(BASE_TIME + timedelta(minutes=10)) == [entry]

    def test_nothing_due(self):
        index = ExpirationIndex()
        index.insert(_entry(1, minutes=10))

        assert index.pop_all_due_by(BASE_TIME) == []
        assert len(index) == 1

    def test_pops_all_tied_entries(self):
        index = ExpirationIndex()
        entries = [_entry(seq, label=f"item{seq}", minutes=1) for seq in range(1, 4)]
        for entry in entries:
            index.insert(entry)

        assert index.pop_all_due_by(BASE_TIME + timedelta(minutes=1)) == entries
        assert len(index) == 0
        assert index.peek_earliest() is None

    def test_skips_removed_entries(self):
        index = ExpirationIndex()
        e1 = _entry(1, minutes=1)
        e2 = _entry(2, minutes=2)
        e3 = _entry(3, minutes=3)
        for entry in (e1, e2, e3):
            index.insert(entry)
        index.remove(e2)

        assert index.pop_all_due_by(BASE_TIME + timedelta(minutes=5)) == [e1, e3]
