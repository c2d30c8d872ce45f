"""Hexgrid geometry loading and joining.

The hexgrid is a GeoJSON file holding one hexagon per state. The widely used
US hexgrid names features like ``"Alabama (United States)"``; that suffix is
stripped so names match the crosswalk.
"""

from __future__ import annotations

import logging
import re
import warnings
from pathlib import Path

import geopandas as gpd
import pandas as pd

from leso_pipeline.errors import GeometryJoinMismatch, LoadError

log = logging.getLogger(__name__)

PLOT_CRS = "EPSG:3857"
_COUNTRY_SUFFIX_RE = re.compile(r"\s*\(United States\)\s*$")


def load_hexgrid(path: Path | str, name_field: str = "google_name") -> gpd.GeoDataFrame:
    """Read the hexgrid and prepare it for plotting.

    Args:
        path: GeoJSON (or other OGR-readable) file.
        name_field: Feature attribute holding the region name.

    Returns:
        GeoDataFrame in Web Mercator with `region_name`, `geometry` and a
        `centroid` point column used for labels.

    Raises:
        LoadError: if the file is missing, unreadable or lacks `name_field`.
    """
    path = Path(path)
    if not path.is_file():
        raise LoadError(f"Hexgrid file not found: {path}")

    try:
        gdf = gpd.read_file(path)
    except Exception as e:
        raise LoadError(f"Cannot read hexgrid {path}: {e}") from e

    if name_field not in gdf.columns:
        raise LoadError(f"Hexgrid {path} has no {name_field!r} attribute")

    if gdf.crs is None:
        gdf = gdf.set_crs(4326)
    gdf = gdf.to_crs(PLOT_CRS)

    out = gpd.GeoDataFrame(
        {
            "region_name": gdf[name_field].astype(str).str.replace(_COUNTRY_SUFFIX_RE, "", regex=True),
        },
        geometry=gdf.geometry,
        crs=gdf.crs,
    )
    out["centroid"] = out.geometry.centroid
    log.info("Loaded %d hexgrid shapes from %s", len(out), path)
    return out


def join_geometry(hexgrid: gpd.GeoDataFrame, frame: pd.DataFrame) -> gpd.GeoDataFrame:
    """Attach data rows to shapes by `region_name`.

    Every shape is kept (shapes without data are drawn as "no data"). Data
    rows whose name has no shape are dropped; the count is logged and a
    `GeometryJoinMismatch` warning is emitted.

    Args:
        hexgrid: Output of `load_hexgrid`.
        frame: Data keyed by `region_name`.

    Returns:
        GeoDataFrame with one row per shape.
    """
    known = set(hexgrid["region_name"])
    unmatched = frame[~frame["region_name"].isin(known) | frame["region_name"].isna()]
    if len(unmatched):
        codes = unmatched["region_code"] if "region_code" in unmatched.columns else unmatched["region_name"]
        labels = [
            str(name) if pd.notna(name) else str(code)
            for name, code in zip(unmatched["region_name"], codes)
        ]
        log.warning("Dropped %d row(s) without hexgrid geometry: %s", len(unmatched), ", ".join(labels))
        warnings.warn(GeometryJoinMismatch(len(unmatched), labels), stacklevel=2)

    matched = frame[frame["region_name"].isin(known)]
    merged = hexgrid.merge(matched, on="region_name", how="left")
    return gpd.GeoDataFrame(merged, geometry="geometry", crs=hexgrid.crs)
