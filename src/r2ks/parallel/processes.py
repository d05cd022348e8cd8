"""Distributed execution: a coordinator feeding worker processes.

The coordinator splits the pair list into one contiguous chunk per worker,
sends each chunk once, then collects one :class:`PairResult` message per
scored pair in arrival order. There is no rebalancing between workers.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import queue
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from r2ks.config import RunConfig, WeightSpec
from r2ks.io.loaders import RankListReader
from r2ks.parallel.messages import CoordinationError, WorkAssignment, WorkerFailure
from r2ks.parallel.pairs import partition_pairs, run_serial, score_pair

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.5
JOIN_TIMEOUT = 5.0


def _worker_main(worker_id: int, data_path: Path, spec: WeightSpec, inbox, outbox) -> None:
    """Worker process body: receive one assignment, send one message per pair."""
    try:
        assignment: WorkAssignment = inbox.get()
        reader = RankListReader(data_path)
        for a, b in assignment.pairs:
            outbox.put(score_pair(reader, a, b, spec))
    except Exception as e:
        outbox.put(WorkerFailure(worker_id, f"{type(e).__name__}: {e}"))
        raise


def _failed_workers(workers: List[mp.Process]) -> List[str]:
    return [f"{p.name} (exit code {p.exitcode})" for p in workers if p.exitcode not in (None, 0)]


def _drain(outbox, sink) -> int:
    """Emit every message already queued; results may outlive their worker."""
    drained = 0
    while True:
        try:
            message = outbox.get_nowait()
        except queue.Empty:
            return drained
        if isinstance(message, WorkerFailure):
            raise CoordinationError(f"Worker {message.worker_id} failed: {message.error}")
        sink.emit(message)
        drained += 1


def _collect(
    workers: List[mp.Process],
    outbox,
    total: int,
    sink,
    timeout: Optional[float] = None,
) -> int:
    received = 0
    idle = 0.0
    while received < total:
        try:
            message = outbox.get(timeout=POLL_INTERVAL)
        except queue.Empty:
            idle += POLL_INTERVAL
            failed = _failed_workers(workers)
            finished = all(p.exitcode == 0 for p in workers)
            # Workers may have queued their last messages just before exiting.
            drained = _drain(outbox, sink)
            if drained:
                received += drained
                idle = 0.0
                continue
            if failed:
                raise CoordinationError(
                    f"Worker process(es) died after {received}/{total} results: {', '.join(failed)}"
                )
            if finished:
                raise CoordinationError(
                    f"All workers exited but only {received}/{total} results arrived"
                )
            if timeout is not None and idle >= timeout:
                raise CoordinationError(
                    f"No result within {timeout:g}s after {received}/{total} results"
                )
            continue

        idle = 0.0
        if isinstance(message, WorkerFailure):
            raise CoordinationError(f"Worker {message.worker_id} failed: {message.error}")
        sink.emit(message)
        received += 1
    return received


def run_processes(
    config: RunConfig,
    reader: RankListReader,
    pairs: Sequence[Tuple[int, int]],
    sink,
) -> int:
    """Score ``pairs`` on ``config.n_workers - 1`` worker processes.

    With ``n_workers == 1`` there are no workers and the coordinator scores
    the pairs itself.

    Returns:
        Number of results emitted

    Raises:
        CoordinationError: If a worker fails or dies, results go missing, or
            ``config.result_timeout`` elapses without a result
    """
    n_procs = config.n_workers - 1
    if n_procs == 0:
        logger.info("No worker processes requested; scoring in the coordinator")
        return run_serial(reader, pairs, config.weight_spec, sink)

    chunks = partition_pairs(pairs, n_procs)
    logger.info(
        f"Distributing {len(pairs)} pairs to {n_procs} worker process(es) "
        f"(chunk sizes: {[len(c) for c in chunks]})"
    )

    ctx = mp.get_context()
    outbox = ctx.Queue()
    workers: List[mp.Process] = []
    start = time.time()

    try:
        for worker_id, chunk in enumerate(chunks, start=1):
            inbox = ctx.Queue()
            proc = ctx.Process(
                target=_worker_main,
                args=(worker_id, config.data_path, config.weight_spec, inbox, outbox),
                name=f"r2ks-worker-{worker_id}",
                daemon=True,
            )
            proc.start()
            inbox.put(WorkAssignment(worker_id, tuple(chunk)))
            workers.append(proc)

        received = _collect(workers, outbox, len(pairs), sink, timeout=config.result_timeout)
    except BaseException:
        for proc in workers:
            if proc.is_alive():
                proc.terminate()
        raise
    finally:
        for proc in workers:
            proc.join(timeout=JOIN_TIMEOUT)

    logger.info(f"Collected {received} results in {time.time() - start:.2f}s")
    return received
