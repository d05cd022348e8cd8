"""Messages exchanged between the coordinator and its workers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class CoordinationError(RuntimeError):
    """Raised when pairs cannot be scored to completion across workers."""


@dataclass(frozen=True)
class PairResult:
    """Score of one unordered pair of lists (1-based list indices)."""

    list_a: int
    list_b: int
    statistic: float

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.list_a, self.list_b)


@dataclass(frozen=True)
class WorkAssignment:
    """The contiguous chunk of pairs one worker process scores."""

    worker_id: int
    pairs: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class WorkerFailure:
    """Sent in place of a result when a worker cannot continue."""

    worker_id: int
    error: str
