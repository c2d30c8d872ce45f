"""Cumulative transfer value over time, one line per region."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from matplotlib import pyplot as plt
from matplotlib.ticker import StrMethodFormatter

from leso_pipeline.render.style import FIGSIZE, save_figure

log = logging.getLogger(__name__)

CUMULATIVE_VALUE_PNG = "cumulative_value_by_region.png"


def plot_cumulative_value(timeseries: pd.DataFrame, out_path: Path) -> Path:
    """Plot `cumulative_daily_sum_value` per region with an end-of-line label.

    Args:
        timeseries: Output of `region_timeseries`.
        out_path: PNG destination.

    Returns:
        `out_path`.
    """
    fig, ax = plt.subplots(figsize=FIGSIZE)

    if timeseries.empty:
        log.warning("No dated transfers; cumulative chart will be empty")
        ax.text(0.5, 0.5, "No dated transfers", ha="center", va="center", transform=ax.transAxes)

    for code, grp in timeseries.groupby("region_code", sort=True):
        grp = grp.sort_values("ship_date")
        (line,) = ax.plot(grp["ship_date"], grp["cumulative_daily_sum_value"], linewidth=1.2)
        last = grp.iloc[-1]
        ax.annotate(
            str(code),
            xy=(last["ship_date"], last["cumulative_daily_sum_value"]),
            xytext=(4, 0),
            textcoords="offset points",
            va="center",
            fontsize=8,
            color=line.get_color(),
        )

    ax.set_title("Cumulative value of transferred equipment by region")
    ax.set_xlabel("Ship date")
    ax.set_ylabel("Cumulative acquisition value (USD)")
    ax.yaxis.set_major_formatter(StrMethodFormatter("${x:,.0f}"))
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return save_figure(fig, out_path)
