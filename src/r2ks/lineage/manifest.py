"""Provenance manifest for scoring runs."""

from __future__ import annotations

import hashlib
import json
import logging
import platform
import socket
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any

import r2ks
from r2ks.config import RunConfig
from r2ks.io.schema import ListFileHeader

logger = logging.getLogger(__name__)


def compute_file_hash(path: Path, algorithm: str = "sha256", block_size: int = 1 << 20) -> str:
    """Hex digest of a file, read in blocks."""
    digest = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(block_size), b""):
            digest.update(block)
    return digest.hexdigest()


@dataclass
class ScoreRunManifest:
    """
    Manifest for an all-pairs scoring run.

    Records the input file identity, the run parameters and the timing so a
    score table can be traced back to what produced it.
    """

    # Core identity
    run_id: str
    timestamp: str
    package_version: str

    # Data lineage
    data_path: str
    data_hash: str
    data_size_bytes: int
    num_genes: int
    num_lists: int

    # Run
    config: Dict[str, Any] = field(default_factory=dict)
    n_pairs: int = 0
    wall_clock_seconds: float = 0.0

    # Environment
    python_version: str = ""
    hostname: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    def save(self, path: Path) -> None:
        """Save manifest to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)
        logger.info(f"Saved run manifest to {path}")

    @classmethod
    def load(cls, path: Path) -> "ScoreRunManifest":
        """Load manifest from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls(**data)


def create_run_manifest(
    config: RunConfig,
    header: ListFileHeader,
    n_pairs: int,
    wall_clock_seconds: float,
) -> ScoreRunManifest:
    """Build a manifest for a finished run."""
    data_path = Path(config.data_path)
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = None

    return ScoreRunManifest(
        run_id=str(uuid.uuid4()),
        timestamp=datetime.now().isoformat(),
        package_version=r2ks.__version__,
        data_path=str(data_path.resolve()),
        data_hash=compute_file_hash(data_path),
        data_size_bytes=data_path.stat().st_size,
        num_genes=header.num_genes,
        num_lists=header.num_lists,
        config=config.to_dict(),
        n_pairs=n_pairs,
        wall_clock_seconds=wall_clock_seconds,
        python_version=platform.python_version(),
        hostname=hostname,
    )
