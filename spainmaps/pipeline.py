"""
Per-map pipeline shared by scripts/regional_map.py and scripts/local_map.py

    1. Joins the attribute table onto every geometry
    2. Prints the quantiles used to pick the breakpoints
    3. Classifies the value column into ordered classes
    4. Moves the Canary Islands and renders the static map
    5. Optionally writes an interactive HTML version
    6. Prints the number of entities per class
"""
from __future__ import annotations
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple

import geopandas as gpd
import pandas as pd

from spainmaps.breaks import Breaks, categorize, category_counts, compute_breaks, suggest_breaks
from spainmaps.geometry import canary_box, is_canary, move_canary_islands
from spainmaps.interactive import build_interactive_map, save_interactive_map
from spainmaps.keys import join_attributes
from spainmaps.palette import diverging_palette
from spainmaps.render import MapStyle, build_map, save_map


@dataclass(frozen=True)
class MapConfig:
    name: str
    table_key: str
    value_col: str
    breaks: Tuple[float, ...]
    style: MapStyle
    out_path: Path
    geo_key: str = "identifier"
    key_width: int = 0
    category_col: str = "categoria"
    palette: str = "RdYlBu"
    reverse_palette: bool = False
    decimals: int = 2
    n_classes: Optional[int] = 5
    suggest_step: Optional[float] = None
    tooltip_cols: Sequence[str] = field(default_factory=tuple)


def build_choropleth(geo: gpd.GeoDataFrame, table: pd.DataFrame, cfg: MapConfig) -> Tuple[gpd.GeoDataFrame, Breaks]:
    """Join `table` onto `geo` and add the category column. Geometries are left untouched."""
    extra = [c for c in cfg.tooltip_cols if c in table.columns and c != cfg.value_col]
    joined = join_attributes(geo, table, cfg.geo_key, cfg.table_key, [cfg.value_col] + extra, width=cfg.key_width)
    breaks = compute_breaks(joined[cfg.value_col], cfg.breaks, decimals=cfg.decimals, n_classes=cfg.n_classes)
    joined[cfg.category_col] = categorize(joined[cfg.value_col], breaks)
    return joined, breaks


def print_quantiles(values: pd.Series, breaks: Breaks, cfg: MapConfig) -> None:
    suggested = suggest_breaks(values, step=cfg.suggest_step)
    print(f"  Quantiles 20/40/60/80: {', '.join(f'{q:,.2f}' for q in suggested)}")
    print(f"  Curated breakpoints:   {', '.join(f'{b:,.2f}' for b in breaks.interior)}")


def print_summary(joined: gpd.GeoDataFrame, breaks: Breaks, cfg: MapConfig) -> None:
    print("\n" + "=" * 80)
    print(f"SUMMARY: {cfg.name}")
    print("=" * 80)
    print(f"Geometries: {len(joined)} ({int(joined[cfg.value_col].isna().sum())} without data)")
    print("Boundaries: " + " | ".join(f"{b:,.2f}" for b in breaks.boundaries))
    counts = category_counts(joined[cfg.category_col], cfg.style.missing_label)
    for i, ((lo, hi), label) in enumerate(zip(breaks.intervals, breaks.labels)):
        opening = "[" if i == 0 else "("
        print(f"  {label:>10}  {opening}{lo:,.2f}, {hi:,.2f}]  {int(counts[label])} entities")
    print(f"  {cfg.style.missing_label:>10}  {int(counts[cfg.style.missing_label])} entities")


def run_map(cfg: MapConfig, table: pd.DataFrame, geo: gpd.GeoDataFrame,
            html_path: Optional[Path] = None) -> Breaks:
    print("\n" + "=" * 80)
    print(f"MAP: {cfg.name}")
    print("=" * 80)
    print(f"\nJoining {len(table)} rows onto {len(geo)} geometries...")
    joined, breaks = build_choropleth(geo, table, cfg)
    print(f"  Matched {int(joined[cfg.value_col].notna().sum())} geometries")

    print("\nBreakpoints...")
    print_quantiles(joined[cfg.value_col], breaks, cfg)
    print(f"  Labels: {', '.join(breaks.labels)}")

    colors = diverging_palette(cfg.palette, n=breaks.n_classes, reverse=cfg.reverse_palette)

    print("\nRendering...")
    mask = is_canary(joined, key=cfg.geo_key)
    moved, box = joined, None
    if mask.any():
        moved = move_canary_islands(joined, mask=mask)
        box = canary_box(moved, mask=mask)
    else:
        warnings.warn("No Canary Islands geometries found; map drawn without the inset frame")
    plot = build_map(moved, breaks, colors, cfg.style, category_col=cfg.category_col, box=box)
    out = save_map(plot, cfg.out_path, cfg.style)
    print(f"  Saved {out}")

    if html_path is not None:
        m = build_interactive_map(joined, breaks, colors, cfg.style,
                                  category_col=cfg.category_col,
                                  tooltip_cols=list(cfg.tooltip_cols) + [cfg.value_col])
        print(f"  Saved {save_interactive_map(m, html_path)}")

    print_summary(joined, breaks, cfg)
    return breaks
