from __future__ import annotations

import math

import pandas as pd
import dask.dataframe as dd
import pytest

from leso_pipeline.clean.transform import (
    TRANSFER_FIELDS,
    clean_transfers_ddf,
    clean_transfers_pdf,
    compute_total_value,
    to_calendar_date,
    unexpected_categories,
)
from leso_pipeline.errors import ParseError

from conftest import raw_frame, transfer_row


def _clean(rows: list[list[object]]) -> pd.DataFrame:
    ddf = dd.from_pandas(raw_frame(rows), npartitions=1)
    return clean_transfers_ddf(ddf).compute()


def test_cleaning_renames_columns_and_derives_total_value() -> None:
    out = _clean([transfer_row(" ca ", 2, 100.0, "2023-01-05")])
    assert list(out.columns) == TRANSFER_FIELDS + ["total_value"]
    assert out.loc[0, "region_code"] == "CA"
    assert out.loc[0, "total_value"] == 200.0
    assert out.loc[0, "ship_date"] == pd.Timestamp("2023-01-05")


def test_total_value_is_null_for_negative_or_missing_operands() -> None:
    out = _clean([
        transfer_row("CA", -1, 100.0, "2023-01-05"),
        transfer_row("CA", 2, None, "2023-01-05"),
        transfer_row("CA", "n/a", 5.0, "2023-01-05"),
        transfer_row("CA", 3, "$1,000.50", "2023-01-05"),
    ])
    assert out["total_value"].isna().tolist() == [True, True, True, False]
    assert out.loc[3, "total_value"] == pytest.approx(3001.5)


def test_unparseable_ship_date_becomes_null_without_failing() -> None:
    out = _clean([
        transfer_row("TX", 1, 10.0, "not a date"),
        transfer_row("TX", 1, 10.0, None),
        transfer_row("TX", 1, 10.0, 44931),
    ])
    assert pd.isna(out.loc[0, "ship_date"])
    assert pd.isna(out.loc[1, "ship_date"])
    assert out.loc[2, "ship_date"] == pd.Timestamp("2023-01-05")
    assert out["total_value"].tolist() == [10.0, 10.0, 10.0]


def test_categoricals_keep_unknown_values_and_drop_float_suffix() -> None:
    out = _clean([transfer_row("ZZ", 1, 1.0, "2023-01-05", demil_ic=1.0, station="  tribal ")])
    assert out["region_code"].dtype == "category"
    assert out.loc[0, "region_code"] == "ZZ"
    assert out.loc[0, "demil_ic"] == "1"
    assert out.loc[0, "station_type"] == "TRIBAL"
    assert unexpected_categories(out["region_code"], {"CA", "TX"}) == ["ZZ"]


def test_text_fields_are_trimmed_and_collapsed() -> None:
    out = _clean([transfer_row("CA", 1, 1.0, "2023-01-05", agency="  Acme   Police  ")])
    assert out.loc[0, "agency_name"] == "Acme Police"


def test_cleaning_is_idempotent() -> None:
    once = clean_transfers_pdf(raw_frame([
        transfer_row("ca", 2, 100.0, "2023-01-05"),
        transfer_row("TX", -2, 5.0, "bogus"),
    ]))
    twice = clean_transfers_pdf(once)
    pd.testing.assert_frame_equal(once, twice)


def test_to_calendar_date_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        to_calendar_date("31/31/2023")
    assert to_calendar_date("  ") is pd.NaT
    assert to_calendar_date(float("nan")) is pd.NaT


def test_compute_total_value_multiplies_valid_pairs() -> None:
    q = pd.Series([2.0, 0.0, math.nan])
    v = pd.Series([100.0, 50.0, 3.0])
    total = compute_total_value(q, v)
    assert total.iloc[0] == 200.0
    assert total.iloc[1] == 0.0
    assert pd.isna(total.iloc[2])
