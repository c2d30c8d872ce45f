"""Summary aggregation functions.

Functions in this module build the per-region tables from the cleaned
transfer records. Grouping runs on Dask; the grouped results are tiny and are
materialized to pandas before ordering and cumulative sums.

Expectations:
- Input: a Dask DataFrame produced by `clean_transfers_ddf` with at least
  `region_code`, `ship_date` and `total_value` columns.
- Outputs: pandas DataFrames with the columns documented on each function.
"""
from __future__ import annotations

from typing import Any
import pandas as pd


def _with_plain_region(ddf: Any) -> Any:
    """Return a copy whose `region_code` is a plain object column."""
    x = ddf.copy()
    x["region_code"] = x["region_code"].astype(object)
    return x


def region_summary(ddf: Any) -> pd.DataFrame:
    """Return total value and record count per region.

    Null `total_value` contributes zero to the sum but is still counted.
    Rows without a region code are excluded.

    Args:
        ddf: Dask DataFrame of cleaned transfer records.

    Returns:
        pandas DataFrame with columns: `region_code`, `sum_value`,
        `num_records`, one row per region sorted by code.
    """
    x = _with_plain_region(ddf)
    grouped = x.groupby("region_code")

    sums = grouped["total_value"].sum().compute()
    counts = grouped.size().compute()

    out = pd.DataFrame({"sum_value": sums, "num_records": counts})
    out["sum_value"] = out["sum_value"].fillna(0.0).astype(float)
    out["num_records"] = out["num_records"].fillna(0).astype(int)
    out.index.name = "region_code"
    return out.reset_index().sort_values("region_code").reset_index(drop=True)


def region_timeseries(ddf: Any) -> pd.DataFrame:
    """Return daily and cumulative value per region.

    Rows with a null ship date cannot be ordered and are excluded. Records
    sharing a region and date are summed into one point before the running
    total is taken.

    Args:
        ddf: Dask DataFrame of cleaned transfer records.

    Returns:
        pandas DataFrame with columns: `region_code`, `ship_date`,
        `daily_sum_value`, `cumulative_daily_sum_value`, ordered by region
        then date ascending.
    """
    x = _with_plain_region(ddf)
    x = x[x["ship_date"].notnull()]

    pdf = (
        x.groupby(["region_code", "ship_date"])["total_value"]
        .sum()
        .compute()
        .rename("daily_sum_value")
        .reset_index()
    )
    if pdf.empty:
        return pd.DataFrame(
            columns=["region_code", "ship_date", "daily_sum_value", "cumulative_daily_sum_value"]
        )

    pdf["daily_sum_value"] = pdf["daily_sum_value"].fillna(0.0).astype(float)
    pdf = pdf.sort_values(["region_code", "ship_date"]).reset_index(drop=True)
    pdf["cumulative_daily_sum_value"] = pdf.groupby("region_code")["daily_sum_value"].cumsum()
    return pdf
