"""Access-ordered-map LRU cache used as reference behaviour."""

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Iterator, Optional, Tuple

from .cache import as_int64, is_integer, validate_capacity
from .constants import MISS
from .errors import InputError


class OrderedLRUCache:
    """Bounded int -> int LRU cache on top of ``OrderedDict``.

    Same public contract as :class:`~intlru.cache.LRUCache`.
    """

    def __init__(self, capacity: int):
        self._capacity = validate_capacity(capacity)
        self._data: "OrderedDict[int, int]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __contains__(self, key) -> bool:
        return is_integer(key) and int(key) in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self)})"

    def get(self, key: int, default: Optional[int] = MISS) -> Optional[int]:
        if not is_integer(key):
            raise InputError(f"key must be an integer, got {type(key).__name__}")
        key = int(key)
        if key not in self._data:
            return default
        self._data.move_to_end(key)
        return self._data[key]

    def put(self, key: int, value: int) -> None:
        key = as_int64(key, "key")
        value = as_int64(value, "value")
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        if len(self._data) > self._capacity:
            self._data.popitem(last=False)

    def keys(self) -> Iterator[int]:
        return iter(list(self._data))

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(list(self._data.items()))

    def to_dict(self) -> Dict[int, int]:
        return dict(self._data)

    def clear(self) -> None:
        self._data.clear()
