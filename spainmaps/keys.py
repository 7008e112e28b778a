# spainmaps/keys.py
# Join keys between INE attribute tables and the geometry layers
from __future__ import annotations
import re
import warnings
from typing import List, Optional, Sequence, Tuple

import geopandas as gpd
import pandas as pd

_LEADING_CODE = re.compile(r"^\s*(\d{4,5})\s+(.+?)\s*$")
_TRAILING_CODE = re.compile(r"^\s*(.+?)\s*-\s*(\d{4,5})\s*$")


def _as_int_code(value) -> int:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        raise ValueError("Missing code")
    text = str(value).strip()
    if text.endswith(".0"):
        text = text[:-2]
    if not text.isdigit():
        raise ValueError(f"Not a numeric code: {value!r}")
    return int(text)


def municipality_code(cpro, cmun) -> str:
    """INE municipality code: 2-digit province + 3-digit municipality ('8', '279' -> '08279')."""
    p, m = _as_int_code(cpro), _as_int_code(cmun)
    if not 0 < p < 100 or not 0 <= m < 1000:
        raise ValueError(f"Code out of range: cpro={cpro!r}, cmun={cmun!r}")
    return f"{p:02d}{m:03d}"


def municipality_codes(df: pd.DataFrame, cpro_col: str = "cpro", cmun_col: str = "cmun") -> pd.Series:
    return pd.Series(
        [municipality_code(p, m) for p, m in zip(df[cpro_col], df[cmun_col])],
        index=df.index,
        dtype=object,
    )


def region_code(ordinal, offset: int = 1) -> str:
    """
    Autonomous community code from a row ordinal. Tables numbered from 0 need
    offset=1 to line up with the INE codes '01'..'19' used by the geometries.
    """
    code = _as_int_code(ordinal) + offset
    if not 0 < code < 100:
        raise ValueError(f"Region code out of range: {ordinal!r} + {offset}")
    return f"{code:02d}"


def region_codes(series: pd.Series, offset: int = 1) -> pd.Series:
    return series.map(lambda v: region_code(v, offset=offset)).astype(object)


def split_ine_label(label: Optional[str]) -> Tuple[str, str]:
    """
    Split INE labels into (code, name).
      - "08279 Terrassa"   -> ("08279", "Terrassa")
      - "Terrassa-08279"   -> ("08279", "Terrassa")
    Codes with 4 digits get their leading zero back.
    """
    if label is None:
        raise ValueError("Missing label")
    s = str(label).strip().strip('"')
    m = _LEADING_CODE.match(s)
    if m:
        return m.group(1).zfill(5), m.group(2)
    m = _TRAILING_CODE.match(s)
    if m:
        return m.group(2).zfill(5), m.group(1)
    raise ValueError(f"No INE code found in {label!r}")


def normalize_key(series: pd.Series, width: int) -> pd.Series:
    """
    String keys, stripped and zero padded; integer-like floats lose their '.0'.
    Missing and blank keys stay NA so they never match each other.
    """
    s = series.astype(str).str.strip().str.replace(r"\.0$", "", regex=True)
    s = s.where(~s.str.isdigit(), s.str.zfill(width))
    return s.where(series.notna() & (s != ""))


def join_attributes(
    geo: gpd.GeoDataFrame,
    table: pd.DataFrame,
    geo_key: str,
    table_key: str,
    columns: Sequence[str],
    width: int = 0,
) -> gpd.GeoDataFrame:
    """
    Left join of `table[columns]` onto every geometry in `geo`.

    Geometries without a matching row keep NA values. Attribute keys with no
    geometry are reported with a warning and left out, as are attribute rows
    without a key. Duplicated attribute keys raise ValueError. Geometry columns
    that share a name with a joined column are replaced by the attribute values.
    """
    for c in [table_key] + list(columns):
        if c not in table.columns:
            raise ValueError(f"Column '{c}' not found in attribute table")
    if geo_key not in geo.columns:
        raise ValueError(f"Column '{geo_key}' not found in geometry table")

    attrs = table[[table_key] + [c for c in columns if c != table_key]].copy()
    attrs["_key"] = normalize_key(attrs[table_key], width)
    attrs = attrs.drop(columns=[table_key])
    unkeyed = int(attrs["_key"].isna().sum())
    if unkeyed:
        warnings.warn(f"{unkeyed} attribute row(s) without key dropped")
        attrs = attrs[attrs["_key"].notna()]
    dups: List[str] = sorted(attrs.loc[attrs["_key"].duplicated(keep=False), "_key"].unique())
    if dups:
        raise ValueError(f"{len(dups)} duplicated key(s) in attribute table: {dups[:10]}")

    overlap = [c for c in attrs.columns if c != "_key" and c in geo.columns]
    if geo_key in overlap or geo.geometry.name in overlap:
        raise ValueError(f"Cannot join {overlap}: they would replace the geometry key or geometry column")
    if overlap:
        warnings.warn(f"Geometry column(s) {overlap} replaced by attribute values")

    left = geo.drop(columns=overlap)
    left["_key"] = normalize_key(left[geo_key], width)

    unmatched = sorted(set(attrs["_key"]) - set(left["_key"].dropna()))
    if unmatched:
        warnings.warn(f"{len(unmatched)} attribute key(s) have no geometry: {unmatched[:10]}")

    merged = left.merge(attrs, on="_key", how="left")
    merged = merged.drop(columns=["_key"])
    return gpd.GeoDataFrame(merged, geometry=geo.geometry.name, crs=geo.crs)
