"""Tests for CLI entrypoints."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from clarity_plot import cli
from clarity_plot.errors import RenderError

CsvFactory = Callable[[Sequence[tuple[str, str] | str]], Path]


def test_parse_args_defaults() -> None:
    ns = cli.parse_args(["export.csv"])
    assert ns.csv_file_path == "export.csv"
    assert ns.output == "glucose_levels.png"
    assert ns.tz is None


def test_parse_args_custom_values() -> None:
    ns = cli.parse_args(["e.csv", "--output", "/tmp/out.png", "--tz", "UTC"])
    assert ns.output == "/tmp/out.png"
    assert ns.tz == "UTC"


def test_missing_argument_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_main_end_to_end(
    clarity_csv: CsvFactory,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    p = clarity_csv([("2023-01-01T00:00:00", "120"), ("2023-01-01T00:05:00", "130")])
    monkeypatch.chdir(tmp_path)

    code = cli.main([str(p)])

    assert code == 0
    out = tmp_path / "glucose_levels.png"
    assert out.exists()
    assert out.stat().st_size > 0
    stdout = capsys.readouterr().out
    assert "OK: Readings: 2" in stdout
    assert "Plot has been saved as glucose_levels.png" in stdout


def test_main_custom_output_and_tz(clarity_csv: CsvFactory, tmp_path: Path) -> None:
    p = clarity_csv([("2023-01-01T00:00:00", "120"), ("2023-01-01T00:05:00", "130")])
    out = tmp_path / "charts" / "g.png"
    assert cli.main([str(p), "--output", str(out), "--tz", "UTC"]) == 0
    assert out.stat().st_size > 0


def test_main_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli.main([str(tmp_path / "noexiste.csv")])
    assert code == 1
    assert "file not found" in capsys.readouterr().err


def test_main_header_only_reports_parse_error(
    clarity_csv: CsvFactory, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    p = clarity_csv([])
    code = cli.main([str(p), "--output", str(tmp_path / "x.png")])
    assert code == 1
    assert "No glucose readings" in capsys.readouterr().err
    assert not (tmp_path / "x.png").exists()


def test_main_unknown_tz(
    clarity_csv: CsvFactory, capsys: pytest.CaptureFixture[str]
) -> None:
    p = clarity_csv([("2023-01-01T00:00:00", "120")])
    assert cli.main([str(p), "--tz", "Nowhere/Land"]) == 1
    assert "Unknown time zone" in capsys.readouterr().err


def test_main_reports_render_error(
    clarity_csv: CsvFactory,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def _render(*_: Any) -> Path:
        raise RenderError("disk full")

    monkeypatch.setattr(cli, "render_glucose_png", _render)
    p = clarity_csv([("2023-01-01T00:00:00", "120")])
    assert cli.main([str(p)]) == 1
    assert "Error: disk full" in capsys.readouterr().err


def test_main_skips_non_finite_value(
    clarity_csv: CsvFactory,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    p = clarity_csv([("2023-01-01T00:00:00", "120"), ("2023-01-01T00:05:00", "inf")])
    out = tmp_path / "inf.png"
    assert cli.main([str(p), "--output", str(out)]) == 0
    assert out.stat().st_size > 0
    assert "OK: Readings: 1" in capsys.readouterr().out
