"""Key -> slot handle index for the LRU cache."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from .constants import LOAD_FACTOR
from .errors import InvariantError


class Index:
    """Hash index from cache key to the recency-list slot holding it.

    Handles are non-owning: the slots themselves belong to the
    :class:`~intlru.recency.RecencyList`.

    Attributes:
        load_factor: Load factor the sizing hint is computed for.
        initial_buckets: Informational sizing hint only, the bucket count
            that would hold ``capacity`` keys without a rehash. It is not
            applied: ``dict`` cannot be presized and grows its own table.
    """

    def __init__(self, capacity: int, load_factor: float = LOAD_FACTOR):
        self.load_factor = float(load_factor)
        self.initial_buckets = int(capacity / self.load_factor) + 1
        self._slots: Dict[int, int] = {}

    def __contains__(self, key: int) -> bool:
        return key in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def contains(self, key: int) -> bool:
        return key in self._slots

    def lookup(self, key: int) -> Optional[int]:
        return self._slots.get(key)

    def insert(self, key: int, handle: int) -> None:
        if key in self._slots:
            raise InvariantError(f"key {key} is already indexed")
        self._slots[key] = handle

    def remove(self, key: int) -> int:
        try:
            return self._slots.pop(key)
        except KeyError:
            raise InvariantError(f"key {key} is not indexed") from None

    def keys(self) -> Iterator[int]:
        return iter(self._slots)

    def clear(self) -> None:
        self._slots.clear()
