"""intlru - fixed-capacity integer LRU cache."""

# --- Cache ---
from .cache import LRUCache
from .reference import OrderedLRUCache

# --- Building blocks ---
from .recency import RecencyList
from .index import Index

# --- Traces ---
from .trace import Put, Get, parse_trace, load_trace, replay

# --- Infrastructure ---
from .errors import IntLruError, ConfigurationError, InputError, CapacityError, InvariantError
from .constants import MISS
from . import constants

__version__ = "0.1.0"

__all__ = [
    "LRUCache", "OrderedLRUCache",
    "RecencyList", "Index",
    "Put", "Get", "parse_trace", "load_trace", "replay",
    "IntLruError", "ConfigurationError", "InputError", "CapacityError", "InvariantError",
    "MISS", "constants",
]
