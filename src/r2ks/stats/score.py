"""Weighted rank-rank Kolmogorov-Smirnov score between two ranked lists.

The score is the maximum deviation between the weighted joint rank
distribution of two lists and the distribution expected when the ranks
are independent (Ni and Vingron, J. Comput. Biol. 2012), scaled by
``sqrt(N)``.

The full N x N concordance matrix is never built. Points are consumed in
the first list's order and a staircase of (boundary, cumulative mass)
breakpoints is kept sorted by boundary in the second list's order. Only
breakpoints whose mass changes at a step are evaluated, which is enough to
recover the matrix maximum.
"""

from __future__ import annotations

import math

import numpy as np

from r2ks.stats.weights import weight_vector, total_weight


def _cross_positions(list_a: np.ndarray, list_b: np.ndarray) -> np.ndarray:
    """For each index of ``list_a``, the index of the same value in ``list_b``."""
    n = list_b.shape[0]
    inverse_b = np.empty(n, dtype=np.int64)
    inverse_b[list_b] = np.arange(n, dtype=np.int64)
    return inverse_b[list_a]


def _point_weights(ys: np.ndarray, weights: np.ndarray) -> np.ndarray:
    # The first point carries only its own positional weight.
    point_weights = np.minimum(weights, weights[ys])
    point_weights[0] = weights[0]
    return point_weights


def score_lists(list_a, list_b, pivot: int = 0, *, raw: bool = False) -> float:
    """Score two rank arrays of equal length over the same gene universe.

    Args:
        list_a: First rank array (a permutation of ``0..N-1``)
        list_b: Second rank array (a permutation of ``0..N-1``)
        pivot: Weighting pivot rank (0 = uniform weights)
        raw: Return the deviation before the ``sqrt(N)`` scaling

    Returns:
        Maximum weighted deviation times ``sqrt(N)`` (or unscaled if ``raw``)

    Notes:
        Inputs are not validated here; see
        :func:`r2ks.stats.evaluate.check_rank_arrays`. Appending a breakpoint
        beyond the current last boundary is O(1); inserting below it updates
        every breakpoint above the insertion point, so the worst case is
        O(N^2).
    """
    list_a = np.asarray(list_a, dtype=np.int64)
    list_b = np.asarray(list_b, dtype=np.int64)
    n = int(list_a.shape[0])
    if n == 0:
        return 0.0

    weights = weight_vector(n, pivot)
    norm = total_weight(n, pivot)
    one_over = 1.0 / (n * n)
    ys = _cross_positions(list_a, list_b)
    point_weights = _point_weights(ys, weights)

    # Staircase: boundaries[:size] strictly increasing, values[k] is the mass
    # of all points consumed so far whose y <= boundaries[k].
    boundaries = np.empty(n, dtype=np.int64)
    values = np.empty(n, dtype=np.float64)

    y = int(ys[0])
    boundaries[0] = y
    values[0] = point_weights[0]
    size = 1
    best = max(0.0, values[0] / norm - (y + 1) * one_over)

    for i in range(1, n):
        y = int(ys[i])
        w = float(point_weights[i])
        step = (i + 1) * one_over

        if y > boundaries[size - 1]:
            value = values[size - 1] + w
            boundaries[size] = y
            values[size] = value
            size += 1
            deviation = value / norm - (y + 1) * step
        else:
            stop = int(np.searchsorted(boundaries[:size], y))
            touched = values[stop:size]
            touched += w
            deviation = float(np.max(touched / norm - (boundaries[stop:size] + 1) * step))

            boundaries[stop + 1:size + 1] = boundaries[stop:size].copy()
            values[stop + 1:size + 1] = values[stop:size].copy()
            value = (values[stop - 1] if stop > 0 else 0.0) + w
            boundaries[stop] = y
            values[stop] = value
            size += 1
            deviation = max(deviation, value / norm - (y + 1) * step)

        if deviation > best:
            best = deviation

    if raw:
        return float(best)
    return float(best * math.sqrt(n))


def score_lists_dense(list_a, list_b, pivot: int = 0, *, raw: bool = False) -> float:
    """Reference score computed from the full cumulative concordance matrix.

    Uses O(N^2) memory; intended for validating :func:`score_lists` on small
    inputs.
    """
    list_a = np.asarray(list_a, dtype=np.int64)
    list_b = np.asarray(list_b, dtype=np.int64)
    n = int(list_a.shape[0])
    if n == 0:
        return 0.0

    weights = weight_vector(n, pivot)
    ys = _cross_positions(list_a, list_b)

    grid = np.zeros((n, n), dtype=np.float64)
    grid[np.arange(n), ys] = _point_weights(ys, weights)
    mass = grid.cumsum(axis=0).cumsum(axis=1) / total_weight(n, pivot)

    counts = np.arange(1, n + 1, dtype=np.float64)
    expected = np.outer(counts, counts) / (n * n)
    best = max(0.0, float((mass - expected).max()))

    if raw:
        return best
    return best * math.sqrt(n)
