import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box


def square(x, y, size=1.0):
    return box(x, y, x + size, y + size)


@pytest.fixture
def regions():
    # Andalucía, Canarias, Madrid, Melilla
    return gpd.GeoDataFrame(
        {
            "identifier": ["01", "05", "13", "19"],
            "name": ["Andalucía", "Canarias", "Madrid", "Melilla"],
        },
        geometry=[square(-5, 37), square(-17, 28), square(-4, 40), square(-3, 35, 0.2)],
        crs="EPSG:4326",
    )


@pytest.fixture
def youth_table():
    return pd.DataFrame({
        "codauto": ["01", "05", "13"],
        "ccaa": ["Andalucía", "Canarias", "Madrid"],
        "renta_relativa": [0.60, 1.40, 0.90],
    })


@pytest.fixture
def municipalities():
    return gpd.GeoDataFrame(
        {"identifier": ["28079", "35016", "38038", "08279"]},
        geometry=[square(-3.7, 40.4, 0.1), square(-15.4, 28.1, 0.1), square(-16.3, 28.4, 0.1), square(2.0, 41.5, 0.1)],
        crs="EPSG:4326",
    )
