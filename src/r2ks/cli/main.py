"""Main CLI entrypoint using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from r2ks import __version__
from r2ks.config import RunConfig
from r2ks.io.loaders import read_header, simulate_list_file
from r2ks.io.writers import StreamSink
from r2ks.parallel.messages import CoordinationError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="r2ks",
    help="Weighted rank-rank Kolmogorov-Smirnov scores between ranked gene lists.",
    add_completion=False,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"r2ks {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log every scored pair."),
):
    """r2ks: all-pairs rank-rank scoring for ranked gene lists."""
    if verbose:
        logging.getLogger("r2ks").setLevel(logging.DEBUG)


@app.command()
def score(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="List file to score."),
    pivot: Optional[int] = typer.Option(
        None, "--pivot", "-w", help="Weighting pivot rank (0 disables weighting)."
    ),
    two_tailed: bool = typer.Option(
        False, "--two-tailed", "-t", help="Also score each second list reversed and keep the larger score."
    ),
    mode: Optional[str] = typer.Option(
        None, "--mode", help="Execution model: threads, processes or serial."
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-p",
        help="Thread count, or process count including the coordinator in processes mode.",
    ),
    include_self_pairs: bool = typer.Option(
        False, "--include-self-pairs", help="Also score every list against itself."
    ),
    outdir: Optional[Path] = typer.Option(
        None, "--outdir", help="Write pair_scores.tsv, score_matrix.tsv and run_manifest.json here."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="YAML or JSON run config; command-line options take precedence."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds to wait for the next worker result before failing."
    ),
):
    """
    Score every pair of lists in a list file.

    Prints one "<a>_<b> <score>" line per pair as scores complete, followed by
    the wall-clock time. Output order is not deterministic in parallel modes.

    Examples:
        # Four threads, weighting the top 100 ranks
        r2ks score -f lists.txt -w 100 -p 4

        # Coordinator plus seven worker processes, two-tailed
        r2ks score -f lists.txt --mode processes -p 8 -t
    """
    from r2ks.api import run_all_pairs

    overrides = {
        "data_path": file,
        "pivot": pivot,
        "two_tailed": True if two_tailed else None,
        "mode": mode,
        "n_workers": workers,
        "include_self_pairs": True if include_self_pairs else None,
        "outdir": outdir,
        "result_timeout": timeout,
    }

    try:
        if config_file is not None:
            config = RunConfig.from_file(config_file, **overrides)
        else:
            if file is None:
                raise ValueError("Either --file or --config must be provided")
            config = RunConfig(**{k: v for k, v in overrides.items() if v is not None})
    except (OSError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    sink = StreamSink.stdout()
    try:
        summary = run_all_pairs(config, sink=sink)
    except (ValueError, CoordinationError) as e:
        typer.secho(f"\n✗ Scoring failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Wall clock time: {summary.wall_clock_seconds:g}")
    for name, path in summary.outputs.items():
        logger.info(f"  {name}: {path}")


@app.command()
def header(
    file: Path = typer.Option(..., "--file", "-f", help="List file to inspect."),
):
    """Print the gene and list counts declared by a list file."""
    try:
        info = read_header(file)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Genes: {info.num_genes}")
    typer.echo(f"Lists: {info.num_lists}")
    typer.echo(f"Pairs: {info.num_pairs}")


@app.command()
def simulate(
    out: Path = typer.Option(..., "--out", help="Output list file."),
    genes: int = typer.Option(1000, "--genes", min=1, help="Genes per list."),
    lists: int = typer.Option(10, "--lists", min=1, help="Number of lists."),
    seed: int = typer.Option(0, "--seed", help="Random seed."),
):
    """Write a list file of independent random orderings."""
    path = simulate_list_file(out, num_genes=genes, num_lists=lists, seed=seed)
    typer.secho(f"✓ Wrote {lists} lists of {genes} genes to {path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
