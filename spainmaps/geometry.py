# spainmaps/geometry.py
# Geometry layers for autonomous communities and municipalities, with the
# Canary Islands moved next to the mainland.
from __future__ import annotations
import warnings
from typing import Optional, Tuple

import geopandas as gpd
import pandas as pd
from shapely.geometry import LineString, box

from spainmaps.keys import normalize_key

CANARY_REGION = "05"
CANARY_PROVINCES = ("35", "38")
# Degrees east/north, applied in EPSG:4326
CANARY_OFFSET = (13.0, 2.0)
CRS = "EPSG:4326"


def _read(path, code_col: str, width: int, name_col: Optional[str]) -> gpd.GeoDataFrame:
    gdf = gpd.read_file(path)
    if code_col not in gdf.columns:
        raise ValueError(f"Column '{code_col}' not found in {path}. Available: {list(gdf.columns)}")
    if gdf.crs is None:
        gdf = gdf.set_crs(CRS)
    elif gdf.crs.to_string() != CRS:
        gdf = gdf.to_crs(CRS)
    gdf["identifier"] = normalize_key(gdf[code_col], width)
    if name_col:
        gdf["name"] = gdf[name_col]
    return gdf


def load_regions(path, code_col: str = "codauto", name_col: Optional[str] = None) -> gpd.GeoDataFrame:
    return _read(path, code_col, 2, name_col)


def load_municipalities(path, code_col: str = "LAU_CODE", name_col: Optional[str] = None) -> gpd.GeoDataFrame:
    return _read(path, code_col, 5, name_col)


def is_canary(gdf: gpd.GeoDataFrame, key: str = "identifier") -> pd.Series:
    """
    Canary Islands mask: community code '05' or municipality codes from
    provinces 35/38. Without a key column, or when no code matches (NUTS
    codes such as 'ES70'), geometries south-west of the peninsula.
    """
    if key in gdf.columns:
        codes = gdf[key].astype(str)
        by_region = (codes.str.len() == 2) & (codes == CANARY_REGION)
        by_province = (codes.str.len() == 5) & codes.str[:2].isin(CANARY_PROVINCES)
        by_code = by_region | by_province
        if by_code.any():
            return by_code
    centroids = gdf.geometry.representative_point()
    return (centroids.x < -10) & (centroids.y < 30)


def move_canary_islands(
    gdf: gpd.GeoDataFrame,
    mask: Optional[pd.Series] = None,
    offset: Tuple[float, float] = CANARY_OFFSET,
) -> gpd.GeoDataFrame:
    out = gdf.copy()
    mask = is_canary(out) if mask is None else mask
    if not mask.any():
        warnings.warn("No Canary Islands geometries found; nothing moved")
        return out
    out.loc[mask, out.geometry.name] = out.loc[mask].geometry.translate(xoff=offset[0], yoff=offset[1])
    return out


def canary_box(gdf: gpd.GeoDataFrame, mask: Optional[pd.Series] = None, pad: float = 0.5) -> gpd.GeoDataFrame:
    """Frame line around the (already moved) Canary Islands."""
    mask = is_canary(gdf) if mask is None else mask
    if not mask.any():
        raise ValueError("No Canary Islands geometries to frame")
    minx, miny, maxx, maxy = gdf.loc[mask].total_bounds
    frame = LineString(box(minx - pad, miny - pad, maxx + pad, maxy + pad).exterior.coords)
    return gpd.GeoDataFrame({"kind": ["canary_box"]}, geometry=[frame], crs=gdf.crs)
