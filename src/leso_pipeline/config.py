"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads required environment variables (including a check that
`CENSUS_API_KEY` is present).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        census_api_key: Access token for the Census data API.
        census_year: ACS 5-year vintage used for population figures.
        workbook_path: LESO property disposition workbook (.xlsx).
        hexgrid_path: GeoJSON file with one hexagon per state/territory.
        hexgrid_name_field: Feature attribute holding the region name.
        output_dir: Directory receiving chart images and summary exports.
    """
    census_api_key: str
    census_year: int
    workbook_path: Path
    hexgrid_path: Path
    hexgrid_name_field: str
    output_dir: Path



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `CENSUS_API_KEY` is not set in the environment.
    """
    census_api_key = os.getenv("CENSUS_API_KEY", "").strip()
    census_year = int(os.getenv("CENSUS_YEAR", "2019"))
    workbook_path = Path(os.getenv("LESO_WORKBOOK", "data/DISP_AllStatesAndTerritories.xlsx"))
    hexgrid_path = Path(os.getenv("HEXGRID_PATH", "data/us_states_hexgrid.geojson"))
    hexgrid_name_field = os.getenv("HEXGRID_NAME_FIELD", "google_name")
    output_dir = Path(os.getenv("OUTPUT_DIR", "output"))

    if not census_api_key:
        raise RuntimeError(
            "CENSUS_API_KEY is required. Set it in .env "
            "(request one at https://api.census.gov/data/key_signup.html)."
        )

    return Settings(
        census_api_key=census_api_key,
        census_year=census_year,
        workbook_path=workbook_path,
        hexgrid_path=hexgrid_path,
        hexgrid_name_field=hexgrid_name_field,
        output_dir=output_dir,
    )
