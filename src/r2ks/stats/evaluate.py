"""Two-tailed evaluation of a pair of rank arrays."""

from __future__ import annotations

import numpy as np

from r2ks.stats.score import score_lists


class RankArrayMismatchError(ValueError):
    """Raised when two rank arrays cannot be scored against each other."""


def _is_permutation(ranks: np.ndarray) -> bool:
    n = ranks.shape[0]
    if ranks.min(initial=0) < 0 or ranks.max(initial=-1) >= n:
        return False
    return bool(np.bincount(ranks, minlength=n).max(initial=1) == 1)


def check_rank_arrays(list_a, list_b) -> None:
    """Check that both arrays are permutations of the same ``0..N-1`` universe.

    Raises:
        RankArrayMismatchError: If lengths differ, an array is not
            one-dimensional, or either array is not a permutation
    """
    list_a = np.asarray(list_a)
    list_b = np.asarray(list_b)
    if list_a.ndim != 1 or list_b.ndim != 1:
        raise RankArrayMismatchError(
            f"Rank arrays must be one-dimensional, got shapes {list_a.shape} and {list_b.shape}"
        )
    if list_a.shape[0] != list_b.shape[0]:
        raise RankArrayMismatchError(
            f"Rank arrays differ in length: {list_a.shape[0]} vs {list_b.shape[0]}"
        )
    for name, ranks in (("first", list_a), ("second", list_b)):
        if not np.issubdtype(ranks.dtype, np.integer):
            raise RankArrayMismatchError(f"The {name} rank array is not integer-valued ({ranks.dtype})")
        if not _is_permutation(ranks):
            raise RankArrayMismatchError(
                f"The {name} rank array is not a permutation of 0..{ranks.shape[0] - 1}"
            )


def reverse_ranks(ranks) -> np.ndarray:
    """Return a reversed copy: entry ``i`` takes the value at ``N-1-i``."""
    return np.asarray(ranks)[::-1].copy()


def evaluate_pair(
    list_a,
    list_b,
    pivot: int = 0,
    two_tailed: bool = False,
    validate: bool = True,
) -> float:
    """Score a pair, optionally also against the reversed second list.

    Args:
        list_a: First rank array
        list_b: Second rank array
        pivot: Weighting pivot rank (0 = uniform weights)
        two_tailed: Also score ``list_b`` reversed and keep the larger value
        validate: Run :func:`check_rank_arrays` first

    Returns:
        Score (the larger of both directions when ``two_tailed``)
    """
    if validate:
        check_rank_arrays(list_a, list_b)

    value = score_lists(list_a, list_b, pivot)
    if two_tailed:
        value = max(value, score_lists(list_a, reverse_ranks(list_b), pivot))
    return value
