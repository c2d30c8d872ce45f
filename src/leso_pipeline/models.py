"""Pydantic models used for transfer-record and summary validation.

These models define the expected schema for cleaned transfer records and the
summary outputs exported next to the rendered charts.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field, ConfigDict

class TransferRecord(BaseModel):
    """Schema for one cleaned equipment transfer line item.

    Attributes:
        region_code: Two-letter state/territory code.
        agency_name: Receiving law-enforcement agency.
        stock_number: National Stock Number (NSN) of the item.
        item_name: Item description.
        quantity: Number of units transferred.
        unit_of_issue: Unit of issue (EA, PR, KT, ...).
        unit_value: Acquisition value of a single unit.
        demil_code: Demilitarization code.
        demil_ic: Demilitarization integrity code.
        ship_date: Date the item shipped, if known.
        station_type: Agency jurisdiction (State, Federal, Tribal).
        total_value: `quantity * unit_value`, null when not computable.
    """
    model_config = ConfigDict(extra="forbid")
    region_code: str = Field(..., min_length=2, max_length=2)
    agency_name: str | None = None
    stock_number: str | None = None
    item_name: str | None = None
    quantity: float | None = Field(None, ge=0)
    unit_of_issue: str | None = None
    unit_value: float | None = Field(None, ge=0)
    demil_code: str | None = None
    demil_ic: str | None = None
    ship_date: date | None = None
    station_type: str | None = None
    total_value: float | None = Field(None, ge=0)

class RegionSummary(BaseModel):
    """Per-region totals joined with reference data."""
    model_config = ConfigDict(extra="forbid")
    region_code: str
    region_name: str | None
    sum_value: float = Field(..., ge=0)
    num_records: int = Field(..., ge=0)
    population: int | None = Field(None, ge=0)

class TimeSeriesPoint(BaseModel):
    """Daily and running transfer value for one region on one date."""
    model_config = ConfigDict(extra="forbid")
    region_code: str
    ship_date: date
    daily_sum_value: float = Field(..., ge=0)
    cumulative_daily_sum_value: float = Field(..., ge=0)


def to_native_record(rec: dict[str, Any]) -> dict[str, Any]:
    """Convert pandas/numpy scalars in `rec` into plain Python values.

    Timestamps become `date`, NaN/NaT/NA become ``None`` and numpy scalars are
    unwrapped so Pydantic validates them like native values.
    """
    for k, v in list(rec.items()):
        if v is None:
            continue
        if isinstance(v, pd.Timestamp):
            rec[k] = v.date()
        elif pd.api.types.is_scalar(v) and pd.isna(v):
            rec[k] = None
        elif hasattr(v, "item"):
            rec[k] = v.item()
    return rec
