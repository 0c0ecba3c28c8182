"""Access traces: parse and replay put/get sequences.

In a trace, ``[k, v]`` is ``put(k, v)`` and ``[k]`` is ``get(k)``.
"""

from __future__ import annotations

import json
from collections import abc
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from .cache import as_int64, is_integer
from .constants import DEMO_TRACE
from .errors import InputError


@dataclass(frozen=True)
class Put:
    key: int
    value: int


@dataclass(frozen=True)
class Get:
    key: int


Operation = Union[Put, Get]


def parse_trace(data: str | Iterable[Sequence[int]]) -> List[Operation]:
    """Turn a JSON string or a nested sequence into operations.

    Raises:
        InputError: If the JSON is invalid or an entry is not a list of one
            or two integers.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except (ValueError, RecursionError) as e:
            raise InputError(f"Trace is not valid JSON: {e}") from e
    if isinstance(data, (str, bytes)) or not isinstance(data, abc.Iterable):
        raise InputError(f"Trace must be a list of entries, got {type(data).__name__}")

    ops: List[Operation] = []
    for position, entry in enumerate(data):
        if isinstance(entry, (str, bytes)) or not isinstance(entry, abc.Sequence):
            raise InputError(f"Trace entry {position} is not a list: {entry!r}")
        if not all(is_integer(x) for x in entry):
            raise InputError(f"Trace entry {position} holds a non-integer: {entry!r}")
        if len(entry) == 2:
            ops.append(Put(as_int64(entry[0], "key"), as_int64(entry[1], "value")))
        elif len(entry) == 1:
            ops.append(Get(as_int64(entry[0], "key")))
        else:
            raise InputError(
                f"Trace entry {position} must have 1 (get) or 2 (put) items, got {len(entry)}"
            )
    return ops


def load_trace(path: str | Path) -> List[Operation]:
    """Read a JSON trace file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise InputError(f"Trace file {path} is not UTF-8 text: {e}") from e
    return parse_trace(text)


def demo_trace() -> List[Operation]:
    return parse_trace(DEMO_TRACE)


def replay(cache, ops: Iterable[Operation]) -> List[int]:
    """Apply ``ops`` to ``cache`` in order and collect every ``get`` result."""
    results: List[int] = []
    for op in ops:
        if isinstance(op, Put):
            cache.put(op.key, op.value)
        else:
            results.append(cache.get(op.key))
    return results


def split_counts(ops: Sequence[Operation]) -> Tuple[int, int]:
    """Return ``(puts, gets)`` counts of a trace."""
    puts = sum(1 for op in ops if isinstance(op, Put))
    return puts, len(ops) - puts
