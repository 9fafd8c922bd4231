import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from hexsphere.cli import build_parser, main, resolve_config
from hexsphere.errors import ConfigError
from hexsphere.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("hexsphere")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_stats_summary(capsys):
    assert main(["--frequency", "2", "--stats"]) == 0
    out = capsys.readouterr().out
    assert "tiles" in out
    assert "pentagons" in out
    assert "42" in out


def test_json_output(tmp_path, capsys):
    out_path = tmp_path / "planet.json"
    assert main(["--frequency", "2", "--radius", "5", "--out_json", str(out_path)]) == 0
    assert f"Wrote: {out_path}" in capsys.readouterr().out

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["config"]["radius"] == 5.0
    assert data["config"]["frequency"] == 2
    assert len(data["tiles"]) == 42
    assert sum(t["is_pentagon"] for t in data["tiles"]) == 12
    assert len(data["buffers"]["indices"]) == 5 * 12 + 6 * 30


def test_triangle_mode_json(tmp_path):
    out_path = tmp_path / "mesh.json"
    assert main(["--frequency", "3", "--mode", "triangles", "--out_json", str(out_path)]) == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert len(data["buffers"]["indices"]) == 180
    assert "triangle_tiles" not in data["buffers"]


def test_config_file_with_overrides(tmp_path):
    cfg_path = tmp_path / "planet.json"
    cfg_path.write_text(json.dumps({"sphere": {"radius": 2.0, "frequency": 3}}), encoding="utf-8")
    args = build_parser().parse_args(["--config", str(cfg_path), "--frequency", "4"])
    cfg = resolve_config(args)
    assert cfg.radius == 2.0
    assert cfg.frequency == 4


def test_resolve_config_rejects_bad_override():
    args = build_parser().parse_args(["--radius", "-1"])
    with pytest.raises(ConfigError):
        resolve_config(args)


@pytest.mark.parametrize("argv", [
    ["--frequency", "0"],
    ["--radius", "0"],
    ["--radius", "inf"],
    ["--epsilon", "nan"],
    ["--method", "quarter", "--frequency", "3"],
])
def test_invalid_arguments_exit_2(argv):
    assert main(argv) == 2


def test_missing_config_exit_2(tmp_path):
    assert main(["--config", str(tmp_path / "nope.json")]) == 2


def test_plot_output(tmp_path):
    png = tmp_path / "planet.png"
    assert main(["--frequency", "2", "--plot", str(png)]) == 0
    assert png.exists()
    assert png.stat().st_size > 0


def test_setup_logging_goes_to_stderr(capsys):
    logger = setup_logging(logging.DEBUG)
    logger.getChild("planet").debug("hello planet")
    captured = capsys.readouterr()
    assert "hexsphere.planet - DEBUG - hello planet" in captured.err
    assert captured.out == ""

    # repeated calls replace the handler instead of stacking another
    setup_logging(logging.INFO)
    assert len(logging.getLogger("hexsphere").handlers) == 1


def test_errors_logged_not_printed(capsys):
    assert main(["--radius", "inf"]) == 2
    captured = capsys.readouterr()
    assert "Invalid configuration" in captured.err
    assert "finite" in captured.err
    assert captured.out == ""
