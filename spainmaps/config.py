# spainmaps/config.py
"""
Paths, curated breakpoints and styles shared by both maps.

Paths can be overridden through environment variables or a `.env` file:
    SPAINMAPS_DATA_DIR, SPAINMAPS_OUTPUT_DIR,
    SPAINMAPS_REGIONS_PATH, SPAINMAPS_MUNICIPALITIES_PATH
"""
from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

from spainmaps.render import MapStyle

load_dotenv()

DATA_DIR = Path(os.getenv("SPAINMAPS_DATA_DIR", "data"))
OUTPUT_DIR = Path(os.getenv("SPAINMAPS_OUTPUT_DIR", "out"))

REGIONS_PATH = os.getenv("SPAINMAPS_REGIONS_PATH", str(DATA_DIR / "ccaa.geojson"))
MUNICIPALITIES_PATH = os.getenv("SPAINMAPS_MUNICIPALITIES_PATH", str(DATA_DIR / "municipios.geojson"))

YOUTH_INCOME_CSV = DATA_DIR / "renta_jovenes_ccaa.csv"
MUNICIPAL_INCOME_CSV = DATA_DIR / "renta_municipios.csv"

# Rounded by hand after looking at the 20/40/60/80th percentiles
# (see spainmaps.breaks.suggest_breaks).
REGIONAL_BREAKS = (0.75, 0.85, 0.95, 1.05)
MUNICIPAL_BREAKS = (9000, 10500, 12000, 13500)

PALETTE = "RdYlBu"

CAPTION = "Fuente: INE, Consejo de la Juventud de España. Geometrías: GISCO"

REGIONAL_STYLE = MapStyle(
    title="Renta relativa de la juventud",
    subtitle="Renta de las personas jóvenes respecto a la renta media, por CCAA",
    caption=CAPTION,
    legend_title="Renta relativa",
    edge_width=0.3,
)

MUNICIPAL_STYLE = MapStyle(
    title="Renta media por municipio",
    subtitle="Renta neta media por persona (euros)",
    caption=CAPTION,
    legend_title="Euros por persona",
    edge_color="#f5f5f5",
    edge_width=0.02,
)
