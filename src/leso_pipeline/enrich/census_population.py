"""Census population fetcher.

Queries the Census ACS 5-year API for total population (`B01003_001E`) of
every state, DC and Puerto Rico. Guam, the U.S. Virgin Islands and the
Northern Mariana Islands are not covered by the ACS, so their 2020 decennial
counts are supplied as literals.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd
import requests

from leso_pipeline.errors import DataUnavailableError

log = logging.getLogger(__name__)

CENSUS_ACS5_URL = "https://api.census.gov/data/{year}/acs/acs5"
POPULATION_VARIABLE = "B01003_001E"
HTTP_TIMEOUT = 30

# 2020 Island Areas decennial census counts
TERRITORY_POPULATION = {
    "Guam": 153_836,
    "U.S. Virgin Islands": 87_146,
    "Northern Mariana Islands": 47_329,
}


def _parse_payload(payload: Any) -> pd.DataFrame:
    """Convert the Census row-array payload into `region_name`, `population`.

    The API answers with a list of rows whose first row is the header.
    """
    if not isinstance(payload, list) or len(payload) < 2:
        raise DataUnavailableError("Census API returned an empty or unexpected payload")

    header, *rows = payload
    try:
        name_idx = header.index("NAME")
        pop_idx = header.index(POPULATION_VARIABLE)
    except (AttributeError, ValueError) as e:
        raise DataUnavailableError(f"Census API payload lacks expected columns: {header!r}") from e

    pdf = pd.DataFrame(
        [(row[name_idx], row[pop_idx]) for row in rows],
        columns=["region_name", "population"],
    )
    pdf["population"] = pd.to_numeric(pdf["population"], errors="coerce").astype("Int64")
    return pdf


def fetch_state_population(
    api_key: str,
    year: int = 2019,
    session: requests.Session | None = None,
    timeout: float = HTTP_TIMEOUT,
) -> pd.DataFrame:
    """Fetch state-level population from the Census ACS 5-year API.

    Args:
        api_key: Census API access token.
        year: ACS 5-year vintage.
        session: Optional requests session (a fresh one is used otherwise).
        timeout: Request timeout in seconds.

    Returns:
        pandas DataFrame with columns `region_name`, `population`.

    Raises:
        DataUnavailableError: if no key is given, the service cannot be
            reached, answers with an error status, or returns an unusable body.
    """
    if not api_key:
        raise DataUnavailableError("A Census API key is required to fetch population data")

    url = CENSUS_ACS5_URL.format(year=year)
    params = {"get": f"NAME,{POPULATION_VARIABLE}", "for": "state:*", "key": api_key}
    http = session or requests.Session()

    log.info("Fetching %s population from %s", year, url)
    try:
        resp = http.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        raise DataUnavailableError(f"Census API request failed: {e}") from e
    except ValueError as e:
        # an invalid key yields an HTML page instead of JSON
        raise DataUnavailableError(f"Census API returned a non-JSON response: {e}") from e

    pdf = _parse_payload(payload)
    log.info("Fetched population for %d regions", len(pdf))
    return pdf


def population_table(census: pd.DataFrame) -> pd.DataFrame:
    """Append the territory literals to the census population figures.

    Census rows win when a territory also appears in the service response.
    """
    territories = pd.DataFrame(
        list(TERRITORY_POPULATION.items()), columns=["region_name", "population"]
    )
    territories["population"] = territories["population"].astype("Int64")
    out = pd.concat([census, territories], ignore_index=True)
    return out.drop_duplicates(subset="region_name", keep="first").reset_index(drop=True)
