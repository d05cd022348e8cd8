"""Shared-memory execution: rows of the pair loop spread over a thread pool."""

from __future__ import annotations

import logging

from joblib import Parallel, delayed

from r2ks.config import RunConfig
from r2ks.io.loaders import RankListReader
from r2ks.parallel.pairs import score_pair

logger = logging.getLogger(__name__)


def _score_row(reader: RankListReader, a: int, config: RunConfig, sink) -> int:
    start = a if config.include_self_pairs else a + 1
    spec = config.weight_spec
    for b in range(start, reader.num_lists + 1):
        sink.emit(score_pair(reader, a, b, spec))
    return reader.num_lists + 1 - start


def run_threads(config: RunConfig, reader: RankListReader, sink) -> int:
    """Score all pairs with ``config.n_workers`` threads.

    The outer loop over the first list index is distributed across the pool;
    each task scores its whole row and emits results straight to ``sink``,
    so output order across rows is not deterministic.

    Returns:
        Number of results emitted
    """
    logger.info(f"Scoring {reader.num_lists} rows on {config.n_workers} thread(s)")
    counts = Parallel(n_jobs=config.n_workers, prefer="threads")(
        delayed(_score_row)(reader, a, config, sink) for a in range(1, reader.num_lists + 1)
    )
    return sum(counts)
