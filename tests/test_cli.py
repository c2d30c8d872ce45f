from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest

from leso_pipeline import cli
from leso_pipeline.config import Settings
from leso_pipeline.errors import DataUnavailableError, LoadError


def _settings(tmp_path: Path, workbook: Path, hexgrid: Path) -> Settings:
    return Settings(
        census_api_key="secret",
        census_year=2019,
        workbook_path=workbook,
        hexgrid_path=hexgrid,
        hexgrid_name_field="google_name",
        output_dir=tmp_path / "output",
    )


def _census(api_key: str, year: int) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "region_name": ["California", "Texas"],
            "population": pd.array([39_000_000, 29_000_000], dtype="Int64"),
        }
    )


def test_stage_tags_pipeline_errors() -> None:
    with pytest.raises(LoadError) as excinfo:
        with cli.stage("load"):
            raise LoadError("boom")
    assert excinfo.value.stage == "load"


def test_run_writes_charts_and_tables(
    tmp_path: Path, workbook: Path, hexgrid_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "get_settings", lambda: _settings(tmp_path, workbook, hexgrid_path))
    monkeypatch.setattr(cli, "fetch_state_population", _census)

    assert cli.main(["run"]) == 0

    out_dir = tmp_path / "output"
    written = sorted(p.name for p in out_dir.iterdir())
    assert written == [
        "cumulative_value_by_region.png",
        "records_by_region.png",
        "region_summary.csv",
        "region_timeseries.csv",
        "value_by_region.png",
        "value_per_capita_by_region.png",
    ]

    summary = pd.read_csv(out_dir / "region_summary.csv").set_index("region_code")
    assert summary.loc["CA", "sum_value"] == 200.0
    assert summary.loc["TX", "sum_value"] == 125.0
    assert summary.loc["TX", "num_records"] == 2
    assert summary.loc["GU", "population"] == 153_836


def test_missing_workbook_aborts_with_stage(
    tmp_path: Path, hexgrid_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        cli, "get_settings", lambda: _settings(tmp_path, tmp_path / "missing.xlsx", hexgrid_path)
    )
    caplog.set_level(logging.INFO)

    assert cli.main(["summary"]) == 1
    assert "Pipeline aborted during load" in caplog.text
    assert not (tmp_path / "output").exists()


def test_unreachable_census_aborts_with_stage(
    tmp_path: Path,
    workbook: Path,
    hexgrid_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def _down(api_key: str, year: int) -> pd.DataFrame:
        raise DataUnavailableError("Census API request failed")

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "get_settings", lambda: _settings(tmp_path, workbook, hexgrid_path))
    monkeypatch.setattr(cli, "fetch_state_population", _down)
    caplog.set_level(logging.INFO)

    assert cli.main(["run"]) == 1
    assert "Pipeline aborted during reference" in caplog.text
    assert not (tmp_path / "output").exists()
