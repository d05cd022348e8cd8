"""Public API for all-pairs scoring."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from r2ks.config import RunConfig
from r2ks.io.loaders import RankListReader
from r2ks.io.schema import ListFileHeader
from r2ks.io.writers import StreamSink, write_results
from r2ks.parallel.messages import CoordinationError, PairResult
from r2ks.parallel.pairs import enumerate_pairs, run_serial
from r2ks.parallel.processes import run_processes
from r2ks.parallel.threads import run_threads

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Outcome of :func:`run_all_pairs`."""

    header: ListFileHeader
    results: List[PairResult]
    wall_clock_seconds: float
    outputs: Dict[str, Path] = field(default_factory=dict)

    @property
    def n_pairs(self) -> int:
        return len(self.results)


def verify_results(results: List[PairResult], expected: List[Tuple[int, int]]) -> None:
    """Check that every expected pair was scored exactly once.

    Raises:
        CoordinationError: If a pair is missing, duplicated or unexpected
    """
    seen = Counter(r.pair for r in results)
    expected_set = set(expected)

    missing = sorted(expected_set - set(seen))
    duplicated = sorted(p for p, n in seen.items() if n > 1)
    unexpected = sorted(set(seen) - expected_set)
    if missing or duplicated or unexpected:
        raise CoordinationError(
            f"Incomplete result set: {len(missing)} missing {missing[:5]}, "
            f"{len(duplicated)} duplicated {duplicated[:5]}, "
            f"{len(unexpected)} unexpected {unexpected[:5]}"
        )


def run_all_pairs(config: RunConfig, sink: Optional[StreamSink] = None) -> RunSummary:
    """Score every pair of lists in ``config.data_path``.

    Args:
        config: Run configuration
        sink: Destination for results as they complete (default: an
            in-memory sink that writes nothing)

    Returns:
        RunSummary with all results in emission order

    Raises:
        MalformedListError: If the list file or a list is malformed
        CoordinationError: If parallel scoring fails or the result set is
            incomplete

    Example:
        >>> from r2ks import RunConfig, run_all_pairs
        >>> summary = run_all_pairs(RunConfig("lists.txt", pivot=100, n_workers=4))
        >>> print(summary.results[0])
    """
    if sink is None:
        sink = StreamSink()

    reader = RankListReader(config.data_path)
    header = reader.header
    pairs = list(enumerate_pairs(header.num_lists, include_self=config.include_self_pairs))
    logger.info(
        f"Scoring {len(pairs)} pairs of {header.num_lists} lists ({header.num_genes} genes), "
        f"mode={config.mode}, workers={config.n_workers}, pivot={config.pivot}, "
        f"two_tailed={config.two_tailed}"
    )

    emitted_before = len(sink)
    start = time.time()
    if config.mode == "threads":
        run_threads(config, reader, sink)
    elif config.mode == "processes":
        run_processes(config, reader, pairs, sink)
    else:
        run_serial(reader, pairs, config.weight_spec, sink)
    elapsed = time.time() - start

    results = list(sink.results[emitted_before:])
    verify_results(results, pairs)
    logger.info(f"Scored {len(results)} pairs in {elapsed:.2f}s")

    summary = RunSummary(header=header, results=results, wall_clock_seconds=elapsed)
    if config.outdir is not None:
        summary.outputs = _write_outputs(config, summary)
    return summary


def _write_outputs(config: RunConfig, summary: RunSummary) -> Dict[str, Path]:
    from r2ks.lineage.manifest import create_run_manifest

    outputs = write_results(summary.results, summary.header.num_lists, config.outdir)

    manifest = create_run_manifest(
        config,
        summary.header,
        n_pairs=summary.n_pairs,
        wall_clock_seconds=summary.wall_clock_seconds,
    )
    manifest_path = config.outdir / "run_manifest.json"
    manifest.save(manifest_path)
    outputs["manifest"] = manifest_path
    return outputs
