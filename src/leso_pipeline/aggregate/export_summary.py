"""Utilities for exporting the summary tables as CSV.

Rows are validated against the Pydantic summary models before writing so an
exported file never carries negative totals or duplicate keys.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import BaseModel

from leso_pipeline.models import RegionSummary, TimeSeriesPoint, to_native_record

log = logging.getLogger(__name__)

SUMMARY_CSV = "region_summary.csv"
TIMESERIES_CSV = "region_timeseries.csv"


def validate_rows(pdf: pd.DataFrame, model: type[BaseModel]) -> pd.DataFrame:
    """Validate every row against `model` and return the normalized frame.

    Raises:
        pydantic.ValidationError: on the first invalid row.
    """
    rows = [model.model_validate(to_native_record(rec)).model_dump(mode="python") for rec in pdf.to_dict(orient="records")]
    return pd.DataFrame(rows, columns=list(model.model_fields))


def export_summary(
    summary: pd.DataFrame,
    timeseries: pd.DataFrame,
    out_dir: Path,
) -> tuple[Path, Path]:
    """Write the region summary and time series to `out_dir`.

    Args:
        summary: Enriched region summary.
        timeseries: Region time series.
        out_dir: Target directory (created if needed).

    Returns:
        Paths of the summary and time-series CSV files.
    """
    if summary["region_code"].duplicated().any():
        raise ValueError("region_code must be unique in the region summary")

    out_dir.mkdir(parents=True, exist_ok=True)
    summary_path = out_dir / SUMMARY_CSV
    timeseries_path = out_dir / TIMESERIES_CSV

    s = validate_rows(summary, RegionSummary)
    s["population"] = s["population"].astype("Int64")
    s.to_csv(summary_path, index=False)

    validate_rows(timeseries, TimeSeriesPoint).to_csv(timeseries_path, index=False)

    log.info(
        "Exported %d summary rows to %s and %d time-series rows to %s",
        len(summary),
        summary_path,
        len(timeseries),
        timeseries_path,
    )
    return summary_path, timeseries_path
