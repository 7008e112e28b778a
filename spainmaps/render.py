# spainmaps/render.py
# Static choropleth rendering with plotnine. The style is an immutable value
# passed to every call.
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import geopandas as gpd
import pandas as pd
from plotnine import (
    ggplot, aes, geom_map, coord_fixed,
    scale_fill_manual, guides, guide_legend,
    labs, theme_void, theme, element_rect, element_text,
)

from spainmaps.breaks import Breaks
from spainmaps.palette import color_mapping

# 1 / cos(40 deg): keeps lon/lat degrees roughly square at Spanish latitudes
ASPECT_RATIO = 1.3


@dataclass(frozen=True)
class MapStyle:
    title: str = ""
    subtitle: str = ""
    caption: str = ""
    legend_title: str = ""
    background: str = "ivory"
    edge_color: str = "white"
    edge_width: float = 0.2
    box_color: str = "grey"
    missing_label: str = "Sin datos"
    missing_color: str = "#bdbdbd"
    figure_size: Tuple[float, float] = (9.0, 8.0)
    dpi: int = 300
    legend_key_width: float = 40
    legend_key_height: float = 10


def prepare_plot_frame(gdf: gpd.GeoDataFrame, category_col: str, style: MapStyle) -> gpd.GeoDataFrame:
    """
    Copy of `gdf` with a `fill` column: the category label, or the missing
    label where the category is NA. Every geometry is kept.
    """
    frame = gdf.copy()
    if frame.geometry.name != "geometry":
        frame = frame.rename_geometry("geometry")
    cats = frame[category_col]
    if not isinstance(cats.dtype, pd.CategoricalDtype):
        cats = cats.astype("category")
    labels = list(cats.cat.categories)
    if style.missing_label in labels:
        raise ValueError(f"Missing label '{style.missing_label}' clashes with a class label")
    fill = cats.cat.add_categories([style.missing_label]).fillna(style.missing_label)
    frame["fill"] = fill.cat.reorder_categories(labels + [style.missing_label], ordered=True)
    return frame


def build_map(
    gdf: gpd.GeoDataFrame,
    breaks: Breaks,
    colors: Sequence[str],
    style: MapStyle,
    category_col: str = "categoria",
    box: Optional[gpd.GeoDataFrame] = None,
) -> ggplot:
    frame = prepare_plot_frame(gdf, category_col, style)
    values = color_mapping(breaks.labels, colors)
    limits = list(breaks.labels)
    if (frame["fill"] == style.missing_label).any():
        limits.append(style.missing_label)
    values[style.missing_label] = style.missing_color

    plot = (
        ggplot(frame)
        + geom_map(aes(fill="fill"), color=style.edge_color, size=style.edge_width)
        + scale_fill_manual(values=values, limits=limits, name=style.legend_title)
        + coord_fixed(ratio=ASPECT_RATIO)
        + guides(fill=guide_legend(nrow=1))
        + labs(title=style.title, subtitle=style.subtitle, caption=style.caption)
        + theme_void()
        + theme(
            figure_size=style.figure_size,
            dpi=style.dpi,
            plot_background=element_rect(fill=style.background, color=style.background),
            panel_background=element_rect(fill=style.background, color=style.background),
            legend_background=element_rect(fill=style.background, color=style.background),
            legend_position="bottom",
            legend_direction="horizontal",
            legend_title_position="top",
            legend_text_position="bottom",
            legend_key_width=style.legend_key_width,
            legend_key_height=style.legend_key_height,
            plot_title=element_text(size=16, weight="bold"),
            plot_subtitle=element_text(size=11),
            plot_caption=element_text(size=8, color="grey"),
        )
    )
    if box is not None:
        plot += geom_map(data=box, color=style.box_color, size=0.4, inherit_aes=False)
    return plot


def save_map(plot: ggplot, path, style: MapStyle) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    width, height = style.figure_size
    plot.save(filename=str(path), width=width, height=height, dpi=style.dpi, verbose=False)
    return path
