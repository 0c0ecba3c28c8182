"""Runtime/default constants for the cache and the replay tool."""

# Miss sentinel returned by ``get``
MISS = -1

# Index presizing (capacity / LOAD_FACTOR + 1 buckets)
LOAD_FACTOR = 0.75

# Slot pool layout: two reserved sentinel slots ahead of the entry slots
HEAD = 0
TAIL = 1
SENTINEL_SLOTS = 2

# Entry slots allocated up front; the pool doubles on demand up to capacity
POOL_INITIAL_SLOTS = 16

# Keys and values are stored as signed 64-bit integers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Demonstration trace: [k, v] is a put, [k] is a get
DEMO_CAPACITY = 2
DEMO_TRACE = ((1, 1), (2, 2), (1,), (3, 3), (2,), (4, 4), (1,), (3,), (4,))
DEMO_EXPECTED = (1, -1, -1, 3, 4)
