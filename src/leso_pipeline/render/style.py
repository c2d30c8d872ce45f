"""Shared figure settings for all charts."""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from matplotlib import pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

log = logging.getLogger(__name__)

# 16x9 inches at 150 dpi -> 2400x1350 px
FIGSIZE = (16, 9)
DPI = 150
CMAP = "viridis"
NO_DATA_COLOR = "#d9d9d9"


def configure_matplotlib() -> None:
    plt.rcParams.update(
        {
            "axes.spines.right": False,
            "axes.spines.top": False,
            "font.size": 12,
            "axes.titlesize": 18,
        }
    )


def save_figure(fig: Figure, path: Path) -> Path:
    """Write `fig` as a PNG at the fixed size/resolution and close it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.set_size_inches(*FIGSIZE)
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    log.info("Wrote %s", path)
    return path
