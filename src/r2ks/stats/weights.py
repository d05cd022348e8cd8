"""Positional weighting around a configurable pivot rank."""

from __future__ import annotations

import numpy as np


def calculate_weight(idx: int, pivot: int) -> float:
    """Weight for rank position ``idx``.

    With ``pivot == 0`` weighting is disabled and every position weighs 1.0.
    Otherwise positions before the pivot follow the triangular ramp
    ``h * (h + 1) / 2`` with ``h = pivot - idx``; positions past the pivot
    weigh 1.0. Note that ``idx == pivot`` gives ``h == 0`` and hence 0.0.

    Args:
        idx: 0-based rank position
        pivot: Pivot rank (0 disables weighting)

    Returns:
        Non-negative weight
    """
    if pivot == 0:
        return 1.0
    h = float(pivot) - float(idx)
    if h < 0.0:
        return 1.0
    return h * (h + 1.0) / 2.0


def weight_vector(n: int, pivot: int) -> np.ndarray:
    """Weights for positions ``0..n-1`` as a float64 array."""
    if pivot == 0:
        return np.ones(n, dtype=np.float64)
    h = float(pivot) - np.arange(n, dtype=np.float64)
    return np.where(h < 0.0, 1.0, h * (h + 1.0) / 2.0)


def _tetrahedral(m: int) -> float:
    return m * (m + 1) * (m + 2) / 6.0


def total_weight(n: int, pivot: int) -> float:
    """Sum of weights over positions ``0..n-1``.

    Positions ``0..pivot`` contribute the tetrahedral number of ``pivot``
    and every position past the pivot contributes 1.0.
    """
    if pivot == 0:
        return float(n)
    if pivot < n:
        return _tetrahedral(pivot) + (n - 1 - pivot)
    return _tetrahedral(pivot) - _tetrahedral(pivot - n)
