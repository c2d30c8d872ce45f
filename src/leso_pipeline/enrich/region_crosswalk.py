"""Static region code -> region name crosswalk.

Covers the 50 states plus the five non-state jurisdictions that appear in the
LESO disposition data: DC, Puerto Rico, Guam, the U.S. Virgin Islands and the
Northern Mariana Islands. Names match the Census API `NAME` field.
"""

from __future__ import annotations

import pandas as pd

STATE_NAMES = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
}

TERRITORY_NAMES = {
    "DC": "District of Columbia",
    "PR": "Puerto Rico",
    "GU": "Guam",
    "VI": "U.S. Virgin Islands",
    "MP": "Northern Mariana Islands",
}

REGION_NAMES: dict[str, str] = {**STATE_NAMES, **TERRITORY_NAMES}


def region_name(code: str | None) -> str | None:
    """Return the full name for a two-letter region code, or ``None``.

    Args:
        code: Region code, case-insensitive.
    """
    if code is None:
        return None
    return REGION_NAMES.get(str(code).strip().upper())


def crosswalk_frame() -> pd.DataFrame:
    """Return the crosswalk as a DataFrame with `region_code`, `region_name`."""
    return pd.DataFrame(
        sorted(REGION_NAMES.items()), columns=["region_code", "region_name"]
    )


def region_code_for(name: str | None) -> str | None:
    """Return the two-letter code for a full region name, or ``None``."""
    if name is None:
        return None
    for code, full in REGION_NAMES.items():
        if full == name:
            return code
    return None
