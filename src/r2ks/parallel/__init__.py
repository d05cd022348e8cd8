"""Work distribution across threads or worker processes."""

from r2ks.parallel.messages import CoordinationError, PairResult, WorkAssignment, WorkerFailure
from r2ks.parallel.pairs import count_pairs, enumerate_pairs, partition_pairs, run_serial, score_pair
from r2ks.parallel.threads import run_threads
from r2ks.parallel.processes import run_processes

__all__ = [
    "CoordinationError",
    "PairResult",
    "WorkAssignment",
    "WorkerFailure",
    "count_pairs",
    "enumerate_pairs",
    "partition_pairs",
    "run_serial",
    "score_pair",
    "run_threads",
    "run_processes",
]
