"""
Fixed-capacity integer LRU cache.

Composes a :class:`~intlru.recency.RecencyList` (access order) with an
:class:`~intlru.index.Index` (key lookup) so that both ``get`` and ``put``
run in amortized O(1). Every indexed key maps to exactly one linked slot
and every linked slot is indexed.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .constants import MISS, INT64_MIN, INT64_MAX
from .errors import ConfigurationError, InputError, InvariantError
from .index import Index
from .recency import RecencyList

logger = logging.getLogger(__name__)


def is_integer(obj) -> bool:
    return isinstance(obj, (int, np.integer)) and not isinstance(obj, (bool, np.bool_))


def validate_capacity(capacity) -> int:
    """Return ``capacity`` as an int, rejecting anything below 1."""
    if not is_integer(capacity):
        raise ConfigurationError(
            f"capacity must be an integer, got {type(capacity).__name__}"
        )
    capacity = int(capacity)
    if capacity < 1:
        raise ConfigurationError(f"capacity must be >= 1, got {capacity}")
    return capacity


def as_int64(obj, name: str = "value") -> int:
    """Return ``obj`` as a Python int in signed 64-bit range."""
    if not is_integer(obj):
        raise InputError(f"{name} must be an integer, got {type(obj).__name__}")
    obj = int(obj)
    if not INT64_MIN <= obj <= INT64_MAX:
        raise InputError(f"{name} {obj} is outside the signed 64-bit range")
    return obj


class LRUCache:
    """Bounded int -> int cache evicting the least recently used entry.

    Args:
        capacity: Maximum number of live entries (>= 1).
        debug: If True, verify the list/index invariants after every
            ``get`` and ``put`` and raise :class:`InvariantError` on failure.

    Raises:
        ConfigurationError: If ``capacity`` is not an integer >= 1.

    Example:
        >>> cache = LRUCache(2)
        >>> cache.put(1, 1)
        >>> cache.put(2, 2)
        >>> cache.get(1)
        1
        >>> cache.put(3, 3)   # evicts 2
        >>> cache.get(2)
        -1
    """

    def __init__(self, capacity: int, *, debug: bool = False):
        self._capacity = validate_capacity(capacity)
        self._list = RecencyList(self._capacity)
        self._index = Index(self._capacity)
        self.debug = bool(debug)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key) -> bool:
        """Membership test; does not count as an access."""
        return is_integer(key) and int(key) in self._index

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self)})"

    def get(self, key: int, default: Optional[int] = MISS) -> Optional[int]:
        """Return the value for ``key`` and mark it most recently used.

        A miss returns ``default``, which is ``-1`` unless overridden. A
        stored ``-1`` and a miss look the same through ``get(key)``; pass
        ``default=None`` or use ``key in cache`` to tell them apart.
        """
        if not is_integer(key):
            raise InputError(f"key must be an integer, got {type(key).__name__}")
        handle = self._index.lookup(int(key))
        if handle is None:
            return default
        self._list.move_to_back(handle)
        value = self._list.value(handle)
        if self.debug:
            self.check_invariants()
        return value

    def put(self, key: int, value: int) -> None:
        """Insert or update ``key`` and mark it most recently used.

        Updating a present key never evicts. Inserting a new key into a
        full cache evicts exactly the least recently used entry first.
        """
        key = as_int64(key, "key")
        value = as_int64(value, "value")

        handle = self._index.lookup(key)
        if handle is not None:
            self._list.set_value(handle, value)
            self._list.move_to_back(handle)
        else:
            if len(self._index) >= self._capacity:
                self._evict()
            handle = self._list.allocate(key, value)
            self._list.append_back(handle)
            self._index.insert(key, handle)

        if self.debug:
            self.check_invariants()

    def _evict(self) -> None:
        oldest = self._list.pop_front()
        evicted_key = self._list.key(oldest)
        self._index.remove(evicted_key)
        self._list.release(oldest)
        logger.debug(f"Evicted key {evicted_key} (capacity={self._capacity})")

    def keys(self) -> Iterator[int]:
        """Keys from least to most recently used; does not touch recency."""
        for handle in self._list:
            yield self._list.key(handle)

    def items(self) -> Iterator[Tuple[int, int]]:
        """``(key, value)`` pairs from least to most recently used."""
        for handle in self._list:
            yield self._list.key(handle), self._list.value(handle)

    def to_dict(self) -> Dict[int, int]:
        return dict(self.items())

    def clear(self) -> None:
        released = self._list.clear()
        self._index.clear()
        logger.debug(f"Cleared {released} entries")

    def check_invariants(self) -> None:
        """Verify list/index consistency.

        Raises:
            InvariantError: If the list is malformed, the sizes disagree,
                a key appears twice, or an indexed handle is not the linked
                slot holding that key.
        """
        order = self._list.validate()
        if len(order) != len(self._index):
            raise InvariantError(
                f"list holds {len(order)} nodes but index holds {len(self._index)} keys"
            )
        if len(order) > self._capacity:
            raise InvariantError(f"size {len(order)} exceeds capacity {self._capacity}")
        seen = set()
        for handle in order:
            key = self._list.key(handle)
            if key in seen:
                raise InvariantError(f"key {key} is linked more than once")
            seen.add(key)
            if self._index.lookup(key) != handle:
                raise InvariantError(f"index entry for key {key} does not point at its slot")
