"""Scoring subsystem: positional weights, the staircase engine and two-tailed evaluation.

Public API:
-----------
from r2ks.stats import evaluate_pair

score = evaluate_pair(ranks_a, ranks_b, pivot=50, two_tailed=True)
"""

from r2ks.stats.weights import calculate_weight, weight_vector, total_weight
from r2ks.stats.score import score_lists, score_lists_dense
from r2ks.stats.evaluate import (
    RankArrayMismatchError,
    check_rank_arrays,
    evaluate_pair,
    reverse_ranks,
)

__all__ = [
    "calculate_weight",
    "weight_vector",
    "total_weight",
    "score_lists",
    "score_lists_dense",
    "RankArrayMismatchError",
    "check_rank_arrays",
    "evaluate_pair",
    "reverse_ranks",
]
