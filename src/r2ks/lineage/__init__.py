"""Run provenance: input hashing and run manifests."""

from r2ks.lineage.manifest import ScoreRunManifest, compute_file_hash, create_run_manifest

__all__ = ["ScoreRunManifest", "compute_file_hash", "create_run_manifest"]
