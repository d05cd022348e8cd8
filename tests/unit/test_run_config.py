"""Tests for run configuration."""

import json
from pathlib import Path

import pytest
import yaml

from r2ks.config import RunConfig, WeightSpec


def test_defaults(tmp_path):
    config = RunConfig(str(tmp_path / "lists.txt"))
    assert config.data_path == tmp_path / "lists.txt"
    assert config.pivot == 0
    assert config.two_tailed is False
    assert config.mode == "threads"
    assert config.n_workers == 1
    assert config.include_self_pairs is False
    assert config.weight_spec == WeightSpec(pivot=0, two_tailed=False)


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"pivot": -1}, "pivot must be >= 0"),
        ({"n_workers": 0}, "n_workers must be >= 1"),
        ({"mode": "mpi"}, "mode must be one of"),
        ({"result_timeout": 0}, "result_timeout must be > 0"),
    ],
)
def test_validation(kwargs, message):
    with pytest.raises(ValueError, match=message):
        RunConfig("lists.txt", **kwargs)


def test_config_is_immutable():
    config = RunConfig("lists.txt")
    with pytest.raises(AttributeError):
        config.pivot = 3


def test_save_and_load_json(tmp_path):
    config = RunConfig("lists.txt", pivot=10, two_tailed=True, mode="processes", n_workers=4, outdir=tmp_path)
    path = tmp_path / "run.json"
    config.save(path)

    payload = json.loads(path.read_text())
    assert payload["data_path"] == "lists.txt"
    assert payload["outdir"] == str(tmp_path)
    assert RunConfig.from_file(path) == config


def test_from_yaml_with_overrides(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump({"data_path": "lists.txt", "pivot": 5, "mode": "serial"}))

    config = RunConfig.from_file(path, pivot=None, n_workers=3, data_path=Path("other.txt"))
    assert config.pivot == 5
    assert config.n_workers == 3
    assert config.mode == "serial"
    assert config.data_path == Path("other.txt")


def test_from_file_rejects_unknown_keys(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump({"data_path": "lists.txt", "threads": 4}))
    with pytest.raises(ValueError, match="Unknown config keys"):
        RunConfig.from_file(path)
