"""Output sinks and result tables for pair scores."""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, TextIO

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from r2ks.parallel.messages import PairResult

logger = logging.getLogger(__name__)


def format_result(result: PairResult) -> str:
    """Render a result as ``"<a>_<b> <statistic>"``."""
    return f"{result.list_a}_{result.list_b} {result.statistic:g}"


class StreamSink:
    """Append-only result sink shared by concurrent producers.

    Every emitted result is written as one line to ``stream`` (skipped when
    ``stream`` is None) and kept in :attr:`results`. Writes are serialized
    with a lock so lines from different threads never interleave.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.results: List[PairResult] = []
        self._lock = threading.Lock()

    @classmethod
    def stdout(cls) -> "StreamSink":
        return cls(sys.stdout)

    def emit(self, result: PairResult) -> None:
        with self._lock:
            self.results.append(result)
            if self.stream is not None:
                self.stream.write(format_result(result) + "\n")
                self.stream.flush()

    def __len__(self) -> int:
        with self._lock:
            return len(self.results)


def results_to_frame(results: Iterable[PairResult]) -> pd.DataFrame:
    """Tabulate results as ``list_a``, ``list_b``, ``statistic`` sorted by pair."""
    df = pd.DataFrame(
        [(r.list_a, r.list_b, r.statistic) for r in results],
        columns=["list_a", "list_b", "statistic"],
    )
    return df.sort_values(["list_a", "list_b"]).reset_index(drop=True)


def results_to_matrix(results: Iterable[PairResult], num_lists: int) -> pd.DataFrame:
    """Symmetric ``num_lists`` x ``num_lists`` score matrix labelled from 1.

    Pairs that were not scored are NaN.
    """
    matrix = np.full((num_lists, num_lists), np.nan, dtype=np.float64)
    for r in results:
        matrix[r.list_a - 1, r.list_b - 1] = r.statistic
        matrix[r.list_b - 1, r.list_a - 1] = r.statistic
    labels = list(range(1, num_lists + 1))
    return pd.DataFrame(matrix, index=labels, columns=labels)


def write_results(results: List[PairResult], num_lists: int, outdir: Path) -> Dict[str, Path]:
    """Write the pair table and the score matrix as TSV files.

    Returns:
        Dictionary with keys ``pair_scores`` and ``score_matrix``
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    pair_path = outdir / "pair_scores.tsv"
    results_to_frame(results).to_csv(pair_path, sep="\t", index=False)

    matrix_path = outdir / "score_matrix.tsv"
    results_to_matrix(results, num_lists).to_csv(matrix_path, sep="\t")

    logger.info(f"Saved {len(results)} pair scores to {pair_path}")
    return {"pair_scores": pair_path, "score_matrix": matrix_path}
