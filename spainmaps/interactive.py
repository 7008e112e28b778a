# spainmaps/interactive.py
# Folium version of the same classification, for browsing municipalities one by one
from __future__ import annotations
from pathlib import Path
from typing import Optional, Sequence

import folium
import geopandas as gpd

from spainmaps.breaks import Breaks
from spainmaps.palette import color_mapping
from spainmaps.render import MapStyle, prepare_plot_frame

SPAIN_CENTER = [40.3, -3.7]


def build_interactive_map(
    gdf: gpd.GeoDataFrame,
    breaks: Breaks,
    colors: Sequence[str],
    style: MapStyle,
    category_col: str = "categoria",
    tooltip_cols: Optional[Sequence[str]] = None,
) -> folium.Map:
    frame = prepare_plot_frame(gdf, category_col, style)
    frame["fill"] = frame["fill"].astype(str)
    palette = color_mapping(breaks.labels, colors)
    palette[style.missing_label] = style.missing_color

    keep = ["fill", "geometry"] + [c for c in (tooltip_cols or []) if c in frame.columns and c != "fill"]
    frame = frame[keep]

    m = folium.Map(location=SPAIN_CENTER, zoom_start=5, tiles="cartodbpositron")

    def style_function(feature):
        return {
            "fillColor": palette.get(feature["properties"]["fill"], style.missing_color),
            "color": style.edge_color,
            "weight": 0.5,
            "fillOpacity": 0.8,
        }

    fields = [c for c in keep if c != "geometry"]
    folium.GeoJson(
        frame.to_json(),
        name=style.title or "choropleth",
        style_function=style_function,
        tooltip=folium.GeoJsonTooltip(fields=fields, aliases=[style.legend_title or "Clase"] + fields[1:]),
    ).add_to(m)
    return m


def save_interactive_map(m: folium.Map, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    m.save(str(path))
    return path
