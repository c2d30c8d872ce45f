from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

WORKBOOK_HEADER = [
    "State",
    "Agency Name",
    "NSN",
    "Item Name",
    "Quantity",
    "UI",
    "Acquisition Value",
    "DEMIL Code",
    "DEMIL IC",
    "Ship Date",
    "Station Type",
]


def transfer_row(
    state: Any,
    quantity: Any,
    value: Any,
    ship_date: Any,
    *,
    agency: str = "TEST POLICE DEPT",
    item: str = "RIFLE,5.56 MILLIMETER",
    nsn: str = "1005-01-587-7175",
    ui: str = "Each",
    demil: str = "D",
    demil_ic: Any = 1.0,
    station: str = "State",
) -> list[Any]:
    return [state, agency, nsn, item, quantity, ui, value, demil, demil_ic, ship_date, station]


def raw_frame(rows: list[list[Any]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=WORKBOOK_HEADER)


@pytest.fixture
def workbook(tmp_path: Path) -> Path:
    """Two sheets with different header text but the same column order."""
    path = tmp_path / "disp.xlsx"
    sheet_a = raw_frame([
        transfer_row("CA", 2, 100.0, datetime(2023, 1, 5)),
        transfer_row("TX", 1, 50.0, datetime(2023, 2, 1)),
    ])
    sheet_b = raw_frame([
        transfer_row("TX", 3, 25.0, datetime(2023, 2, 1)),
        transfer_row("GU", 1, 10.0, None),
    ])
    sheet_b.columns = [c.upper() for c in WORKBOOK_HEADER]
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        sheet_a.to_excel(writer, sheet_name="Alabama-Georgia", index=False)
        sheet_b.to_excel(writer, sheet_name="Guam-Wyoming", index=False)
    return path


@pytest.fixture
def hexgrid_path(tmp_path: Path) -> Path:
    """Three side-by-side squares named like the common US hexgrid file."""
    gdf = gpd.GeoDataFrame(
        {
            "google_name": [
                "California (United States)",
                "Texas (United States)",
                "Oregon (United States)",
            ],
        },
        geometry=[box(-120, 35, -118, 37), box(-100, 30, -98, 32), box(-122, 43, -120, 45)],
        crs="EPSG:4326",
    )
    path = tmp_path / "hexgrid.geojson"
    gdf.to_file(path, driver="GeoJSON")
    return path
