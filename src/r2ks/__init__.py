"""
r2ks: weighted rank-rank Kolmogorov-Smirnov scores between ranked gene lists.

This package provides:
- A staircase scoring engine that avoids building the full concordance matrix
- Pivot-based positional weighting and two-tailed evaluation
- All-pairs scoring over a list file on threads or worker processes
- A CLI that prints one score line per pair
"""

__version__ = "0.1.0"

from r2ks.config import RunConfig, WeightSpec
from r2ks.stats import evaluate_pair, score_lists
from r2ks.api import run_all_pairs, RunSummary

__all__ = [
    "__version__",
    "RunConfig",
    "WeightSpec",
    "evaluate_pair",
    "score_lists",
    "run_all_pairs",
    "RunSummary",
]
