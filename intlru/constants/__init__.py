"""Constants used across intlru."""

from .runtime import (
    MISS,
    LOAD_FACTOR,
    HEAD,
    TAIL,
    SENTINEL_SLOTS,
    POOL_INITIAL_SLOTS,
    INT64_MIN,
    INT64_MAX,
    DEMO_CAPACITY,
    DEMO_TRACE,
    DEMO_EXPECTED,
)

__all__ = [
    "MISS", "LOAD_FACTOR",
    "HEAD", "TAIL", "SENTINEL_SLOTS", "POOL_INITIAL_SLOTS",
    "INT64_MIN", "INT64_MAX",
    "DEMO_CAPACITY", "DEMO_TRACE", "DEMO_EXPECTED",
]
