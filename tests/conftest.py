"""Shared test fixtures for intlru."""

import numpy as np
import pytest

from intlru import LRUCache, OrderedLRUCache


@pytest.fixture(params=[LRUCache, OrderedLRUCache], ids=["linked", "reference"])
def cache_cls(request):
    """Both cache variants; they share one public contract."""
    return request.param


@pytest.fixture
def rng():
    return np.random.default_rng(20211116)


@pytest.fixture
def demo_trace_file(tmp_path) -> str:
    """JSON trace file holding the demonstration sequence."""
    path = tmp_path / "demo.json"
    path.write_text("[[1,1],[2,2],[1],[3,3],[2],[4,4],[1],[3],[4]]\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def random_trace(rng):
    """Factory for random traces; keys drawn from ``range(key_space)``."""

    def _make(n_ops: int, key_space: int, put_ratio: float = 0.5):
        keys = rng.integers(0, key_space, size=n_ops)
        values = rng.integers(-1000, 1000, size=n_ops)
        is_put = rng.random(n_ops) < put_ratio
        return [
            [int(k), int(v)] if p else [int(k)]
            for k, v, p in zip(keys, values, is_put)
        ]

    return _make
