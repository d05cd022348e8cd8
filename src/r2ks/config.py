"""Run configuration for pairwise scoring."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Literal, Dict, Any

import yaml

logger = logging.getLogger(__name__)

VALID_MODES = ("threads", "processes", "serial")


@dataclass(frozen=True)
class WeightSpec:
    """Weighting parameters shared by every pair evaluation."""

    pivot: int = 0
    two_tailed: bool = False


@dataclass(frozen=True)
class RunConfig:
    """Configuration for an all-pairs scoring run.

    Attributes:
        data_path: List file to score
        pivot: Weighting pivot rank (0 = uniform weights)
        two_tailed: Also score each second list reversed and keep the larger value
        mode: Execution model: "threads" (shared memory), "processes"
            (coordinator plus worker processes) or "serial"
        n_workers: Number of threads, or number of processes including the
            coordinator
        include_self_pairs: Also score every list against itself
        outdir: Optional directory for result tables and the run manifest
        result_timeout: Seconds the coordinator waits for the next result
            before giving up (None = wait as long as workers are alive)
    """

    data_path: Path
    pivot: int = 0
    two_tailed: bool = False
    mode: Literal["threads", "processes", "serial"] = "threads"
    n_workers: int = 1
    include_self_pairs: bool = False
    outdir: Optional[Path] = None
    result_timeout: Optional[float] = None

    def __post_init__(self):
        """Coerce paths and validate parameters."""
        object.__setattr__(self, "data_path", Path(self.data_path))
        if self.outdir is not None:
            object.__setattr__(self, "outdir", Path(self.outdir))

        if self.pivot < 0:
            raise ValueError(f"pivot must be >= 0, got {self.pivot}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.mode not in VALID_MODES:
            raise ValueError(f"mode must be one of {list(VALID_MODES)}, got {self.mode!r}")
        if self.result_timeout is not None and self.result_timeout <= 0:
            raise ValueError(f"result_timeout must be > 0, got {self.result_timeout}")

    @property
    def weight_spec(self) -> WeightSpec:
        return WeightSpec(pivot=self.pivot, two_tailed=self.two_tailed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dict with Path objects as strings."""
        d = asdict(self)
        d["data_path"] = str(self.data_path)
        d["outdir"] = str(self.outdir) if self.outdir else None
        return d

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RunConfig":
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")
        return cls(**payload)

    @classmethod
    def from_file(cls, path: Path, **overrides: Any) -> "RunConfig":
        """Load config from a YAML or JSON file.

        Keyword overrides that are not None replace values from the file.
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                payload = yaml.safe_load(f) or {}
            else:
                payload = json.load(f)

        if not isinstance(payload, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        payload.update({k: v for k, v in overrides.items() if v is not None})
        logger.info(f"Loaded run config from {path}")
        return cls.from_dict(payload)
