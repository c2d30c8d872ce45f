"""Join the per-region summary with reference data.

Region codes are resolved to names through the static crosswalk, then names
are matched to population figures. Unmatched rows are kept with nulls; they
are only dropped later when a chart needs geometry for them.
"""

from __future__ import annotations

import logging

import pandas as pd

from leso_pipeline.enrich.region_crosswalk import REGION_NAMES

log = logging.getLogger(__name__)


def join_region_names(summary: pd.DataFrame) -> pd.DataFrame:
    """Add a `region_name` column resolved from `region_code`.

    Args:
        summary: Frame with a `region_code` column.

    Returns:
        Copy of `summary` with `region_name` (null for unknown codes).
    """
    out = summary.copy()
    out["region_name"] = out["region_code"].map(REGION_NAMES)

    unknown = out.loc[out["region_name"].isna(), "region_code"].tolist()
    if unknown:
        log.warning("No crosswalk entry for region code(s): %s", ", ".join(map(str, unknown)))
    return out


def join_population(summary: pd.DataFrame, population: pd.DataFrame) -> pd.DataFrame:
    """Left-join population figures onto `summary` by `region_name`.

    Args:
        summary: Frame with a `region_name` column.
        population: Frame with `region_name` and `population` columns.

    Returns:
        `summary` with a nullable integer `population` column; row count is
        unchanged.
    """
    pop = population[["region_name", "population"]].drop_duplicates(subset="region_name")
    out = summary.drop(columns=["population"], errors="ignore").merge(
        pop, on="region_name", how="left"
    )
    out["population"] = out["population"].astype("Int64")

    missing = out.loc[out["population"].isna(), "region_code"].tolist()
    if missing:
        log.info("No population figure for region(s): %s", ", ".join(map(str, missing)))
    return out


def enrich_summary(summary: pd.DataFrame, population: pd.DataFrame) -> pd.DataFrame:
    """Resolve region names and attach population.

    Returns:
        Frame with columns `region_code`, `region_name`, `sum_value`,
        `num_records`, `population`.
    """
    out = join_population(join_region_names(summary), population)
    return out[["region_code", "region_name", "sum_value", "num_records", "population"]]
