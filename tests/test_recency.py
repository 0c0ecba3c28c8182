"""Tests for intlru/recency.py: sentinel-bounded slot list."""

import pytest

from intlru.constants import HEAD, TAIL, SENTINEL_SLOTS, POOL_INITIAL_SLOTS
from intlru.errors import CapacityError, InvariantError
from intlru.recency import RecencyList


def _filled(capacity, keys):
    rl = RecencyList(capacity)
    handles = []
    for k in keys:
        h = rl.allocate(k, k * 10)
        rl.append_back(h)
        handles.append(h)
    return rl, handles


def _keys(rl):
    return [rl.key(h) for h in rl]


class TestRecencyList:
    def test_empty(self):
        rl = RecencyList(3)
        assert len(rl) == 0
        assert list(rl) == []
        assert rl.front() is None
        assert rl.back() is None
        assert rl.free_slots == 3
        assert rl.validate() == []

    def test_handles_skip_sentinels(self):
        rl = RecencyList(2)
        h1 = rl.allocate(1, 1)
        h2 = rl.allocate(2, 2)
        assert {h1, h2} == {SENTINEL_SLOTS, SENTINEL_SLOTS + 1}
        assert HEAD not in (h1, h2)
        assert TAIL not in (h1, h2)

    def test_append_back_order(self):
        rl, handles = _filled(3, [1, 2, 3])
        assert _keys(rl) == [1, 2, 3]
        assert rl.front() == handles[0]
        assert rl.back() == handles[2]
        assert list(rl.iter_reverse()) == handles[::-1]
        rl.validate()

    def test_detach_middle(self):
        rl, handles = _filled(3, [1, 2, 3])
        rl.detach(handles[1])
        assert _keys(rl) == [1, 3]
        assert len(rl) == 2
        assert list(rl.iter_reverse()) == [handles[2], handles[0]]

    def test_detach_only_node(self):
        rl, handles = _filled(1, [5])
        rl.detach(handles[0])
        assert len(rl) == 0
        assert rl.front() is None

    def test_pop_front(self):
        rl, handles = _filled(3, [1, 2, 3])
        h = rl.pop_front()
        assert h == handles[0]
        assert rl.key(h) == 1
        assert rl.value(h) == 10
        assert _keys(rl) == [2, 3]

    def test_pop_front_empty(self):
        rl = RecencyList(2)
        with pytest.raises(InvariantError):
            rl.pop_front()

    def test_move_to_back(self):
        rl, handles = _filled(3, [1, 2, 3])
        rl.move_to_back(handles[0])
        assert _keys(rl) == [2, 3, 1]
        rl.move_to_back(handles[0])
        assert _keys(rl) == [2, 3, 1]
        rl.move_to_back(handles[2])
        assert _keys(rl) == [2, 1, 3]
        rl.validate()

    def test_set_value(self):
        rl, handles = _filled(2, [1, 2])
        rl.set_value(handles[0], -7)
        assert rl.value(handles[0]) == -7

    def test_allocate_exhausted(self):
        rl = RecencyList(1)
        rl.allocate(1, 1)
        with pytest.raises(CapacityError):
            rl.allocate(2, 2)

    def test_release_reuses_slot(self):
        rl, handles = _filled(2, [1, 2])
        h = rl.pop_front()
        rl.release(h)
        assert rl.free_slots == 1
        h_new = rl.allocate(9, 9)
        assert h_new == h
        assert rl.key(h_new) == 9

    def test_release_linked_rejected(self):
        rl, handles = _filled(2, [1])
        with pytest.raises(InvariantError):
            rl.release(handles[0])

    def test_link_precondition_checks(self):
        rl, handles = _filled(2, [1])
        with pytest.raises(InvariantError):
            rl.append_back(handles[0])
        with pytest.raises(InvariantError):
            rl.detach(SENTINEL_SLOTS + 1)
        with pytest.raises(InvariantError):
            rl.detach(HEAD)

    def test_clear_releases_every_node_once(self):
        rl, _ = _filled(4, [1, 2, 3, 4])
        assert rl.clear() == 4
        assert len(rl) == 0
        assert rl.free_slots == 4
        assert rl.validate() == []
        h = rl.allocate(1, 1)
        rl.append_back(h)
        assert _keys(rl) == [1]

    def test_validate_detects_broken_link(self):
        rl, handles = _filled(3, [1, 2, 3])
        rl._prev[handles[2]] = handles[0]
        with pytest.raises(InvariantError):
            rl.validate()

    def test_validate_detects_cycle(self):
        rl, handles = _filled(3, [1, 2, 3])
        rl._next[handles[2]] = handles[0]
        with pytest.raises(InvariantError):
            rl.validate()


class TestSlotPool:
    def test_large_capacity_starts_small(self):
        rl = RecencyList(10 ** 12)
        assert rl.allocated_slots == POOL_INITIAL_SLOTS
        assert len(rl._keys) == SENTINEL_SLOTS + POOL_INITIAL_SLOTS
        assert rl.free_slots == 10 ** 12

    def test_small_capacity_never_overallocates(self):
        rl, _ = _filled(3, [1, 2, 3])
        assert rl.allocated_slots == 3
        with pytest.raises(CapacityError):
            rl.allocate(4, 4)

    def test_pool_doubles_on_demand(self):
        rl, handles = _filled(10 ** 6, range(POOL_INITIAL_SLOTS + 1))
        assert rl.allocated_slots == 2 * POOL_INITIAL_SLOTS
        assert _keys(rl) == list(range(POOL_INITIAL_SLOTS + 1))
        assert [rl.value(h) for h in handles] == [k * 10 for k in range(POOL_INITIAL_SLOTS + 1)]
        rl.validate()

    def test_growth_stops_at_capacity(self):
        capacity = POOL_INITIAL_SLOTS + 5
        rl, _ = _filled(capacity, range(capacity))
        assert rl.allocated_slots == capacity
        assert rl.free_slots == 0
        rl.validate()

    def test_freed_slots_reused_before_growth(self):
        rl, handles = _filled(10 ** 9, range(POOL_INITIAL_SLOTS))
        for _ in range(100):
            h = rl.pop_front()
            key = rl.key(h)
            rl.release(h)
            h_new = rl.allocate(key + 1000, 0)
            assert h_new == h
            rl.append_back(h_new)
        assert rl.allocated_slots == POOL_INITIAL_SLOTS
        rl.validate()
