from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from r2ks.cli.main import app
from r2ks.io.loaders import write_list_file


def _score_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if "_" in line and not line.startswith("Wall")]


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "r2ks" in result.stdout


@pytest.mark.parametrize("mode", ["threads", "processes", "serial"])
def test_cli_score_prints_one_line_per_pair(list_file: Path, mode: str) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["score", "-f", str(list_file), "--mode", mode, "-p", "3", "-t"])
    assert result.exit_code == 0, result.stdout

    lines = _score_lines(result.stdout)
    assert sorted(line.split()[0] for line in lines) == ["1_2", "1_3", "1_4", "2_3", "2_4", "3_4"]
    assert "Wall clock time:" in result.stdout


def test_cli_score_identical_lists(tmp_path: Path) -> None:
    path = write_list_file(tmp_path / "lists.txt", [[0, 1, 2, 3], [0, 1, 2, 3]])
    runner = CliRunner()
    result = runner.invoke(app, ["score", "--file", str(path), "--mode", "serial"])
    assert result.exit_code == 0, result.stdout
    assert _score_lines(result.stdout) == ["1_2 0.5"]


def test_cli_score_with_config_file(list_file: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "run.yaml"
    config_path.write_text(yaml.safe_dump({"data_path": str(list_file), "mode": "serial", "include_self_pairs": True}))
    outdir = tmp_path / "derived"

    runner = CliRunner()
    result = runner.invoke(app, ["score", "--config", str(config_path), "--outdir", str(outdir)])
    assert result.exit_code == 0, result.stdout
    assert len(_score_lines(result.stdout)) == 10
    assert (outdir / "pair_scores.tsv").exists()
    assert (outdir / "run_manifest.json").exists()


def test_cli_score_malformed_list(tmp_path: Path) -> None:
    path = tmp_path / "lists.txt"
    path.write_text("3 2\n0 1 2\n0 1\n")
    runner = CliRunner()
    result = runner.invoke(app, ["score", "-f", str(path), "--mode", "serial"])
    assert result.exit_code == 1


def test_cli_score_requires_input() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["score"])
    assert result.exit_code == 1


def test_cli_header(list_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["header", "-f", str(list_file)])
    assert result.exit_code == 0
    assert "Genes: 5" in result.stdout
    assert "Lists: 4" in result.stdout
    assert "Pairs: 6" in result.stdout


def test_cli_simulate_then_score(tmp_path: Path) -> None:
    path = tmp_path / "sim.txt"
    runner = CliRunner()
    result = runner.invoke(app, ["simulate", "--out", str(path), "--genes", "30", "--lists", "5", "--seed", "3"])
    assert result.exit_code == 0, result.stdout

    result = runner.invoke(app, ["score", "-f", str(path), "-w", "5", "-p", "2"])
    assert result.exit_code == 0, result.stdout
    assert len(_score_lines(result.stdout)) == 10
