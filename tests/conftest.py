"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from r2ks.io.loaders import write_list_file


@pytest.fixture
def orderings():
    """Four random orderings of five genes."""
    rng = np.random.default_rng(7)
    return [rng.permutation(5) for _ in range(4)]


@pytest.fixture
def list_file(tmp_path, orderings):
    """List file with 5 genes and 4 lists."""
    return write_list_file(tmp_path / "lists.txt", orderings)


@pytest.fixture
def random_rank_pair():
    """Factory for a pair of random rank arrays of length n."""

    def _make(n, seed=0):
        rng = np.random.default_rng(seed)
        return rng.permutation(n), rng.permutation(n)

    return _make
