"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is stable and suitable for
Pydantic validation and for the per-region aggregations.

Every step is idempotent: running the cleaner on already-clean data returns
the same values.
"""
from __future__ import annotations

import logging
import numbers
import re
from datetime import date, datetime
from typing import Any, Iterable

import pandas as pd
import dask.dataframe as dd

from leso_pipeline.enrich.region_crosswalk import REGION_NAMES
from leso_pipeline.errors import ParseError

log = logging.getLogger(__name__)

# Canonical names, in workbook column order
TRANSFER_FIELDS: list[str] = [
    "region_code",
    "agency_name",
    "stock_number",
    "item_name",
    "quantity",
    "unit_of_issue",
    "unit_value",
    "demil_code",
    "demil_ic",
    "ship_date",
    "station_type",
]

TEXT_FIELDS = ["agency_name", "stock_number", "item_name"]
CATEGORICAL_FIELDS = ["region_code", "unit_of_issue", "demil_code", "demil_ic", "station_type"]
NUMERIC_FIELDS = ["quantity", "unit_value"]

# Expected vocabularies; values outside them are kept but reported
REGION_CODES = frozenset(REGION_NAMES)
DEMIL_CODES = frozenset({"A", "B", "C", "D", "E", "F", "G", "P", "Q"})
STATION_TYPES = frozenset({"STATE", "FEDERAL", "TRIBAL"})

# Excel stores dates as days since 1899-12-30
EXCEL_EPOCH = pd.Timestamp("1899-12-30")

_SERIAL_RE = re.compile(r"^\d+(\.\d+)?$")
_INTEGRAL_FLOAT_RE = re.compile(r"^(-?\d+)\.0+$")


# -----------------------------
# Scalar helpers
# -----------------------------
def to_calendar_date(value: Any) -> pd.Timestamp:
    """Parse one ship-date cell into a midnight timestamp.

    Null-like values return NaT. Excel serial day numbers (as numbers or
    digit strings) are converted from the 1899-12-30 epoch.

    Raises:
        ParseError: if the value is present but is not a valid date.
    """
    if value is None or value is pd.NaT:
        return pd.NaT
    if isinstance(value, float) and pd.isna(value):
        return pd.NaT
    if value is pd.NA:
        return pd.NaT

    try:
        if isinstance(value, (pd.Timestamp, datetime, date)):
            ts = pd.Timestamp(value)
        elif isinstance(value, numbers.Real) and not isinstance(value, bool):
            ts = EXCEL_EPOCH + pd.to_timedelta(float(value), unit="D")
        else:
            text = str(value).strip()
            if not text:
                return pd.NaT
            if _SERIAL_RE.match(text) and len(text.split(".")[0]) <= 6:
                ts = EXCEL_EPOCH + pd.to_timedelta(float(text), unit="D")
            else:
                ts = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError) as e:
        raise ParseError(f"Unparseable ship date: {value!r}") from e

    if ts is pd.NaT:
        raise ParseError(f"Unparseable ship date: {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def _as_code(value: Any) -> Any:
    """Normalize a categorical cell: trimmed, upper-cased, `1.0` -> `1`."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip().upper()
    m = _INTEGRAL_FLOAT_RE.match(text)
    if m:
        text = m.group(1)
    return text or None


# -----------------------------
# Column helpers
# -----------------------------
def rename_positional(pdf: pd.DataFrame) -> pd.DataFrame:
    """Assign canonical field names by column position."""
    if pdf.shape[1] != len(TRANSFER_FIELDS):
        raise ValueError(
            f"Expected {len(TRANSFER_FIELDS)} columns, got {pdf.shape[1]}"
        )
    out = pdf.copy()
    out.columns = TRANSFER_FIELDS
    return out


def parse_ship_dates(series: pd.Series) -> pd.Series:
    """Parse a ship-date column, turning unparseable cells into NaT."""
    failures = 0

    def _parse(value: Any) -> pd.Timestamp:
        nonlocal failures
        try:
            return to_calendar_date(value)
        except ParseError:
            failures += 1
            return pd.NaT

    parsed = pd.to_datetime(
        pd.Series([_parse(v) for v in series], index=series.index, dtype=object)
    ).astype("datetime64[ns]")
    if failures:
        log.warning("%d ship date value(s) could not be parsed and were set to null", failures)
    return parsed


def normalize_text(series: pd.Series) -> pd.Series:
    """Trim, collapse internal whitespace, and map empty strings to null."""
    def _norm(value: Any) -> Any:
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return None
        text = re.sub(r"\s+", " ", str(value)).strip()
        return text or None

    return pd.Series([_norm(v) for v in series], index=series.index, dtype=object)


def to_categorical(series: pd.Series) -> pd.Series:
    """Normalize codes and store them as a pandas categorical."""
    return pd.Series([_as_code(v) for v in series], index=series.index, dtype=object).astype("category")


def to_number(series: pd.Series) -> pd.Series:
    """Coerce a column to float, stripping `$` and thousands separators."""
    if pd.api.types.is_numeric_dtype(series):
        return series.astype("float64")

    def _strip(value: Any) -> Any:
        if isinstance(value, str):
            return re.sub(r"[$,\s]", "", value)
        if value is None or value is pd.NA:
            return float("nan")
        return value

    text = series.astype(object).map(_strip)
    return pd.to_numeric(text, errors="coerce").astype("float64")


def compute_total_value(quantity: pd.Series, unit_value: pd.Series) -> pd.Series:
    """Return `quantity * unit_value`, null where either is null or negative."""
    valid = quantity.ge(0) & unit_value.ge(0)
    return (quantity * unit_value).where(valid).astype("float64")


def unexpected_categories(series: pd.Series, vocabulary: Iterable[str]) -> list[str]:
    """Return sorted distinct values outside `vocabulary` (nulls ignored)."""
    allowed = set(vocabulary)
    values = {str(v) for v in series.dropna().unique()}
    return sorted(values - allowed)


# -----------------------------
# Partition / DataFrame level
# -----------------------------
def clean_transfers_pdf(pdf: pd.DataFrame) -> pd.DataFrame:
    """Clean a pandas frame of raw or already-clean transfer rows.

    Args:
        pdf: Frame with the eleven workbook columns in canonical order.

    Returns:
        Cleaned frame with `TRANSFER_FIELDS` plus `total_value`.
    """
    pdf = rename_positional(pdf[pdf.columns[: len(TRANSFER_FIELDS)]])

    # -----------------------------
    # Standardize date
    # -----------------------------
    pdf["ship_date"] = parse_ship_dates(pdf["ship_date"])

    # -----------------------------
    # Normalize free text
    # -----------------------------
    for col in TEXT_FIELDS:
        pdf[col] = normalize_text(pdf[col])

    # -----------------------------
    # Bounded categorical codes
    # -----------------------------
    for col in CATEGORICAL_FIELDS:
        pdf[col] = to_categorical(pdf[col])

    # -----------------------------
    # Numbers + derived total
    # -----------------------------
    for col in NUMERIC_FIELDS:
        pdf[col] = to_number(pdf[col])
    pdf["total_value"] = compute_total_value(pdf["quantity"], pdf["unit_value"])

    return pdf


def clean_transfers_ddf(ddf: Any) -> Any:
    """Clean raw workbook rows partition-wise.

    Performs positional renaming, ship-date parsing, text/code
    normalization, numeric coercion and derives `total_value`.

    Returns:
        Transformed Dask DataFrame with a stable schema for downstream steps.
    """
    log.info("Starting clean_transfers_ddf transformation")

    meta = clean_transfers_pdf(ddf._meta.copy())
    out = ddf.map_partitions(clean_transfers_pdf, meta=meta)

    # categories differ per partition
    for col in CATEGORICAL_FIELDS:
        out[col] = out[col].cat.as_unknown()
    return out


def report_unexpected_categories(pdf: pd.DataFrame) -> dict[str, list[str]]:
    """Log and return codes outside the expected vocabularies."""
    checks = {
        "region_code": REGION_CODES,
        "demil_code": DEMIL_CODES,
        "station_type": STATION_TYPES,
    }
    found: dict[str, list[str]] = {}
    for col, vocabulary in checks.items():
        extra = unexpected_categories(pdf[col], vocabulary)
        if extra:
            found[col] = extra
            log.warning("Unexpected %s values kept as-is: %s", col, ", ".join(extra))
    return found
