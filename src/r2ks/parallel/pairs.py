"""Pair enumeration, static partitioning and the per-pair scoring body."""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple, TypeVar

from r2ks.config import WeightSpec
from r2ks.io.loaders import RankListReader
from r2ks.parallel.messages import PairResult
from r2ks.stats.evaluate import evaluate_pair

logger = logging.getLogger(__name__)

T = TypeVar("T")


def enumerate_pairs(num_lists: int, include_self: bool = False) -> Iterator[Tuple[int, int]]:
    """Yield pairs ``(a, b)`` of 1-based list indices in row-major order.

    ``a`` runs over ``1..num_lists`` and ``b`` over ``a+1..num_lists``
    (``a..num_lists`` when ``include_self``).
    """
    offset = 0 if include_self else 1
    for a in range(1, num_lists + 1):
        for b in range(a + offset, num_lists + 1):
            yield (a, b)


def count_pairs(num_lists: int, include_self: bool = False) -> int:
    """Number of pairs :func:`enumerate_pairs` yields."""
    if include_self:
        return num_lists * (num_lists + 1) // 2
    return num_lists * (num_lists - 1) // 2


def partition_pairs(pairs: Sequence[T], n_chunks: int) -> List[List[T]]:
    """Split ``pairs`` into ``n_chunks`` contiguous chunks.

    Every chunk holds ``len(pairs) // n_chunks`` items and the remainder is
    appended to the last chunk.
    """
    if n_chunks < 1:
        raise ValueError(f"n_chunks must be >= 1, got {n_chunks}")
    pairs = list(pairs)
    size = len(pairs) // n_chunks
    chunks = [pairs[k * size:(k + 1) * size] for k in range(n_chunks - 1)]
    chunks.append(pairs[(n_chunks - 1) * size:])
    return chunks


def score_pair(reader: RankListReader, a: int, b: int, spec: WeightSpec) -> PairResult:
    """Load lists ``a`` and ``b`` and score them."""
    list_a = reader.read_list(a)
    list_b = reader.read_list(b)
    statistic = evaluate_pair(list_a, list_b, pivot=spec.pivot, two_tailed=spec.two_tailed)
    logger.debug(f"Scored pair {a}_{b}: {statistic:g}")
    return PairResult(a, b, statistic)


def run_serial(reader: RankListReader, pairs: Sequence[Tuple[int, int]], spec: WeightSpec, sink) -> int:
    """Score ``pairs`` one after another in the calling thread.

    Returns:
        Number of results emitted
    """
    for a, b in pairs:
        sink.emit(score_pair(reader, a, b, spec))
    return len(pairs)
