"""
Recency list for the LRU cache.

A doubly linked list of entry slots ordered from least recently used
(front) to most recently used (back). All slots live in one pool of numpy
arrays; ``prev``/``next`` links and the handles given out to the index are
plain slot numbers. The pool starts small and doubles on demand, never
past ``capacity`` entry slots.

Pool layout::

    slot 0          head sentinel (before the front)
    slot 1          tail sentinel (after the back)
    slot 2 ..       entry slots, at most capacity of them

Sentinels carry no key/value and are never handed out, so link updates
have no empty-list or end-of-list branches.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np

from .constants import HEAD, TAIL, SENTINEL_SLOTS, POOL_INITIAL_SLOTS
from .errors import CapacityError, InvariantError

# Slot states
_FREE = 0
_DETACHED = 1
_LINKED = 2


def _grown(arr: np.ndarray, size: int, fill) -> np.ndarray:
    out = np.full(size, fill, dtype=arr.dtype)
    out[: len(arr)] = arr
    return out


class RecencyList:
    """Sentinel-bounded doubly linked list over a growable slot pool."""

    def __init__(self, capacity: int):
        self.capacity = int(capacity)
        n_slots = SENTINEL_SLOTS + min(self.capacity, POOL_INITIAL_SLOTS)

        self._prev = np.full(n_slots, -1, dtype=np.intp)
        self._next = np.full(n_slots, -1, dtype=np.intp)
        self._keys = np.zeros(n_slots, dtype=np.int64)
        self._values = np.zeros(n_slots, dtype=np.int64)
        self._state = np.full(n_slots, _FREE, dtype=np.int8)

        # Released slots; reused before any untouched slot
        self._free: List[int] = []
        # First slot never handed out yet
        self._high = SENTINEL_SLOTS
        self._size = 0

        self._next[HEAD] = TAIL
        self._prev[TAIL] = HEAD

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        """Yield linked handles front (LRU) to back (MRU)."""
        handle = int(self._next[HEAD])
        while handle != TAIL:
            yield handle
            handle = int(self._next[handle])

    def iter_reverse(self) -> Iterator[int]:
        """Yield linked handles back (MRU) to front (LRU)."""
        handle = int(self._prev[TAIL])
        while handle != HEAD:
            yield handle
            handle = int(self._prev[handle])

    # ------------------------------------------------------------------
    # Slot pool
    # ------------------------------------------------------------------

    @property
    def free_slots(self) -> int:
        """Slots still available before the pool hits ``capacity``."""
        return len(self._free) + (self.capacity + SENTINEL_SLOTS - self._high)

    @property
    def allocated_slots(self) -> int:
        """Entry slots currently backed by the pool arrays."""
        return len(self._state) - SENTINEL_SLOTS

    def allocate(self, key: int, value: int) -> int:
        """Take a free slot, store ``key``/``value`` and return its handle detached."""
        if self._free:
            handle = self._free.pop()
        elif self._high < self.capacity + SENTINEL_SLOTS:
            if self._high == len(self._state):
                self._grow()
            handle = self._high
            self._high += 1
        else:
            raise CapacityError(f"No free slot left (capacity={self.capacity})")
        self._keys[handle] = key
        self._values[handle] = value
        self._state[handle] = _DETACHED
        return handle

    def _grow(self) -> None:
        entries = min(self.capacity, max(1, 2 * self.allocated_slots))
        size = SENTINEL_SLOTS + entries
        self._prev = _grown(self._prev, size, -1)
        self._next = _grown(self._next, size, -1)
        self._keys = _grown(self._keys, size, 0)
        self._values = _grown(self._values, size, 0)
        self._state = _grown(self._state, size, _FREE)

    def release(self, handle: int) -> None:
        """Return a detached slot to the free pool."""
        self._expect(handle, _DETACHED, "release")
        self._state[handle] = _FREE
        self._prev[handle] = -1
        self._next[handle] = -1
        self._free.append(handle)

    def key(self, handle: int) -> int:
        return int(self._keys[handle])

    def value(self, handle: int) -> int:
        return int(self._values[handle])

    def set_value(self, handle: int, value: int) -> None:
        self._values[handle] = value

    # ------------------------------------------------------------------
    # Link operations
    # ------------------------------------------------------------------

    def append_back(self, handle: int) -> None:
        """Link a detached node at the most recently used end."""
        self._expect(handle, _DETACHED, "append_back")
        last = int(self._prev[TAIL])
        self._next[last] = handle
        self._prev[TAIL] = handle
        self._prev[handle] = last
        self._next[handle] = TAIL
        self._state[handle] = _LINKED
        self._size += 1

    def detach(self, handle: int) -> None:
        """Unlink a node and join its neighbours."""
        self._expect(handle, _LINKED, "detach")
        prev_handle = int(self._prev[handle])
        next_handle = int(self._next[handle])
        self._next[prev_handle] = next_handle
        self._prev[next_handle] = prev_handle
        self._state[handle] = _DETACHED
        self._size -= 1

    def pop_front(self) -> int:
        """Detach and return the least recently used node."""
        if self._size == 0:
            raise InvariantError("pop_front on an empty recency list")
        handle = int(self._next[HEAD])
        self.detach(handle)
        return handle

    def move_to_back(self, handle: int) -> None:
        """Mark ``handle`` as the most recently used node."""
        if int(self._prev[TAIL]) == handle and self._state[handle] == _LINKED:
            return
        self.detach(handle)
        self.append_back(handle)

    def front(self) -> Optional[int]:
        return None if self._size == 0 else int(self._next[HEAD])

    def back(self) -> Optional[int]:
        return None if self._size == 0 else int(self._prev[TAIL])

    def clear(self) -> int:
        """Release every linked node in one front-to-back pass.

        Returns:
            Number of released nodes.
        """
        released = 0
        handle = int(self._next[HEAD])
        while handle != TAIL:
            following = int(self._next[handle])
            self._state[handle] = _DETACHED
            self.release(handle)
            handle = following
            released += 1
        self._next[HEAD] = TAIL
        self._prev[TAIL] = HEAD
        self._size = 0
        return released

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------

    def validate(self) -> List[int]:
        """Check that the list is well formed.

        Walks forward from the head sentinel and backward from the tail
        sentinel, bounded by the pool size so a cycle cannot hang the check.

        Returns:
            Linked handles in front-to-back order.

        Raises:
            InvariantError: On a cycle, a broken back link, a size mismatch,
                or a slot whose state disagrees with its list membership.
        """
        limit = self.allocated_slots + 1
        forward: List[int] = []
        handle = int(self._next[HEAD])
        while handle != TAIL:
            if len(forward) >= limit or handle < SENTINEL_SLOTS:
                raise InvariantError("forward traversal does not reach the tail sentinel")
            forward.append(handle)
            handle = int(self._next[handle])

        backward: List[int] = []
        handle = int(self._prev[TAIL])
        while handle != HEAD:
            if len(backward) >= limit or handle < SENTINEL_SLOTS:
                raise InvariantError("reverse traversal does not reach the head sentinel")
            backward.append(handle)
            handle = int(self._prev[handle])

        if forward != backward[::-1]:
            raise InvariantError("forward and reverse traversals disagree")
        if len(forward) != self._size:
            raise InvariantError(
                f"list holds {len(forward)} nodes but size is {self._size}"
            )
        linked = np.flatnonzero(self._state == _LINKED)
        if sorted(forward) != linked.tolist():
            raise InvariantError("slot states disagree with list membership")
        if len(self._free) + self._size != self._high - SENTINEL_SLOTS:
            raise InvariantError("slot pool accounting is off")
        return forward

    def _expect(self, handle: int, state: int, operation: str) -> None:
        if not SENTINEL_SLOTS <= handle < len(self._state):
            raise InvariantError(f"{operation}: {handle} is not an entry slot")
        if self._state[handle] != state:
            raise InvariantError(
                f"{operation}: slot {handle} is in state {int(self._state[handle])}, "
                f"expected {state}"
            )
