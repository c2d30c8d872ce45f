"""Render every chart for one pipeline run."""

from __future__ import annotations

import logging
from pathlib import Path

import geopandas as gpd
import pandas as pd

from leso_pipeline.render.choropleth import plot_record_count, plot_total_value, plot_value_per_capita
from leso_pipeline.render.geometry import join_geometry
from leso_pipeline.render.style import configure_matplotlib
from leso_pipeline.render.timeseries import CUMULATIVE_VALUE_PNG, plot_cumulative_value

log = logging.getLogger(__name__)


def render_all(
    summary: pd.DataFrame,
    timeseries: pd.DataFrame,
    hexgrid: gpd.GeoDataFrame,
    out_dir: Path,
) -> dict[str, Path]:
    """Write the three choropleths and the cumulative line chart.

    Args:
        summary: Enriched region summary (`enrich_summary` output).
        timeseries: `region_timeseries` output.
        hexgrid: `load_hexgrid` output.
        out_dir: Directory for the PNG files.

    Returns:
        Mapping of chart name to written path.
    """
    configure_matplotlib()
    out_dir.mkdir(parents=True, exist_ok=True)

    gdf = join_geometry(hexgrid, summary)
    outputs = {
        "total_value": plot_total_value(gdf, out_dir),
        "value_per_capita": plot_value_per_capita(gdf, out_dir),
        "record_count": plot_record_count(gdf, out_dir),
        "cumulative_value": plot_cumulative_value(timeseries, out_dir / CUMULATIVE_VALUE_PNG),
    }
    log.info("Rendered %d charts into %s", len(outputs), out_dir)
    return outputs
