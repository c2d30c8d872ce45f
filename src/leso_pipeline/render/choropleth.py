"""Hexgrid choropleths of transfer value, value per capita and record count.

All three maps share one log colour scale recipe. Shapes with no data (or a
value that a log scale cannot show, i.e. zero) are drawn in a neutral grey
instead of being left out.
"""

from __future__ import annotations

import logging
from pathlib import Path

import geopandas as gpd
import pandas as pd
from matplotlib import pyplot as plt
from matplotlib.colors import LogNorm

from leso_pipeline.enrich.region_crosswalk import region_code_for
from leso_pipeline.render.style import CMAP, FIGSIZE, NO_DATA_COLOR, save_figure

log = logging.getLogger(__name__)

TOTAL_VALUE_PNG = "value_by_region.png"
VALUE_PER_CAPITA_PNG = "value_per_capita_by_region.png"
RECORD_COUNT_PNG = "records_by_region.png"


def value_per_capita(frame: pd.DataFrame) -> pd.Series:
    """Return `sum_value / population`; null when population is null or zero."""
    pop = pd.to_numeric(frame["population"], errors="coerce").astype(float)
    pop = pop.where(pop > 0)
    return frame["sum_value"].astype(float) / pop


def _labels(gdf: gpd.GeoDataFrame) -> list[str]:
    codes = gdf["region_code"] if "region_code" in gdf.columns else pd.Series(None, index=gdf.index)
    return [
        str(code) if pd.notna(code) else (region_code_for(name) or "")
        for code, name in zip(codes, gdf["region_name"])
    ]


def plot_choropleth(
    gdf: gpd.GeoDataFrame,
    column: str,
    title: str,
    legend_label: str,
    out_path: Path,
) -> Path:
    """Draw one log-scaled choropleth of `column` and save it to `out_path`.

    Args:
        gdf: Output of `join_geometry` (one row per shape).
        column: Numeric column to shade by.
        title: Figure title.
        legend_label: Colour bar label.
        out_path: PNG destination.

    Returns:
        `out_path`.
    """
    values = pd.to_numeric(gdf[column], errors="coerce").astype(float)
    # log scale: non-positive values render as "no data"
    values = values.where(values > 0)
    plot_gdf = gdf.assign(_value=values)
    positive = values.dropna()

    fig, ax = plt.subplots(figsize=FIGSIZE)
    if positive.empty:
        log.warning("No positive %s values to shade; drawing shapes only", column)
        plot_gdf.plot(ax=ax, color=NO_DATA_COLOR, edgecolor="white", linewidth=1.5)
    else:
        vmin, vmax = float(positive.min()), float(positive.max())
        if vmin == vmax:
            vmax = vmin * 10
        plot_gdf.plot(
            column="_value",
            ax=ax,
            cmap=CMAP,
            norm=LogNorm(vmin=vmin, vmax=vmax),
            legend=True,
            legend_kwds={"label": legend_label, "shrink": 0.6},
            missing_kwds={"color": NO_DATA_COLOR, "label": "No data"},
            edgecolor="white",
            linewidth=1.5,
        )

    for label, point in zip(_labels(plot_gdf), plot_gdf["centroid"]):
        if label:
            ax.annotate(label, xy=(point.x, point.y), ha="center", va="center", fontsize=10, color="black")

    ax.set_title(title)
    ax.set_axis_off()
    return save_figure(fig, out_path)


def plot_total_value(gdf: gpd.GeoDataFrame, out_dir: Path) -> Path:
    return plot_choropleth(
        gdf,
        "sum_value",
        "Total value of transferred equipment",
        "Total acquisition value (USD, log scale)",
        out_dir / TOTAL_VALUE_PNG,
    )


def plot_value_per_capita(gdf: gpd.GeoDataFrame, out_dir: Path) -> Path:
    return plot_choropleth(
        gdf.assign(value_per_capita=value_per_capita(gdf)),
        "value_per_capita",
        "Value of transferred equipment per resident",
        "Acquisition value per capita (USD, log scale)",
        out_dir / VALUE_PER_CAPITA_PNG,
    )


def plot_record_count(gdf: gpd.GeoDataFrame, out_dir: Path) -> Path:
    return plot_choropleth(
        gdf,
        "num_records",
        "Number of equipment transfer records",
        "Transfer records (log scale)",
        out_dir / RECORD_COUNT_PNG,
    )
