import geopandas as gpd
import pytest

from spainmaps.geometry import (
    CANARY_OFFSET, canary_box, is_canary, load_municipalities, load_regions, move_canary_islands,
)


def test_is_canary_by_region_code(regions):
    assert list(is_canary(regions)) == [False, True, False, False]


def test_is_canary_by_province(municipalities):
    assert list(is_canary(municipalities)) == [False, True, True, False]


def test_is_canary_by_position(regions):
    anonymous = regions.drop(columns=["identifier"])
    assert list(is_canary(anonymous)) == [False, True, False, False]


def test_move_canary_islands(regions):
    moved = move_canary_islands(regions)
    dx, dy = CANARY_OFFSET

    before = regions.geometry.iloc[1].bounds
    after = moved.geometry.iloc[1].bounds
    assert after == pytest.approx((before[0] + dx, before[1] + dy, before[2] + dx, before[3] + dy))
    assert moved.geometry.iloc[0].equals(regions.geometry.iloc[0])
    assert regions.geometry.iloc[1].bounds == before


def test_move_canary_islands_custom_offset(municipalities):
    moved = move_canary_islands(municipalities, offset=(1.0, 0.0))
    assert moved.geometry.iloc[1].bounds[0] == pytest.approx(municipalities.geometry.iloc[1].bounds[0] + 1.0)


def test_move_without_canary_islands_warns(regions):
    mainland = regions[regions["identifier"] != "05"]
    with pytest.warns(UserWarning, match="Canary"):
        moved = move_canary_islands(mainland)
    assert moved.geometry.geom_equals(mainland.geometry).all()


def test_canary_box_frames_moved_islands(regions):
    moved = move_canary_islands(regions)
    frame = canary_box(moved, pad=0.5)

    assert len(frame) == 1
    assert frame.geometry.iloc[0].geom_type == "LineString"
    minx, miny, maxx, maxy = moved.geometry.iloc[1].bounds
    assert frame.total_bounds == pytest.approx([minx - 0.5, miny - 0.5, maxx + 0.5, maxy + 0.5])
    assert frame.crs == regions.crs


def test_canary_box_requires_islands(regions):
    with pytest.raises(ValueError):
        canary_box(regions[regions["identifier"] != "05"])


def test_load_regions_pads_codes(tmp_path, regions):
    path = tmp_path / "ccaa.geojson"
    src = regions.drop(columns=["identifier"]).assign(codauto=[1, 5, 13, 19])
    src.to_file(path, driver="GeoJSON")

    gdf = load_regions(path, name_col="name")
    assert list(gdf["identifier"]) == ["01", "05", "13", "19"]
    assert list(gdf["name"]) == list(regions["name"])
    assert gdf.crs.to_epsg() == 4326


def test_load_municipalities_reprojects(tmp_path, municipalities):
    path = tmp_path / "municipios.geojson"
    src = municipalities.rename(columns={"identifier": "LAU_CODE"}).to_crs("EPSG:3857")
    src.to_file(path, driver="GeoJSON")

    gdf = load_municipalities(path)
    assert list(gdf["identifier"]) == ["28079", "35016", "38038", "08279"]
    assert gdf.crs.to_epsg() == 4326
    assert gdf.total_bounds[0] == pytest.approx(municipalities.total_bounds[0], abs=1e-6)


def test_load_requires_code_column(tmp_path, regions):
    path = tmp_path / "ccaa.geojson"
    regions.to_file(path, driver="GeoJSON")
    with pytest.raises(ValueError, match="codauto"):
        load_regions(path)


def test_is_canary_falls_back_to_position_for_unknown_codes(regions):
    nuts = regions.assign(identifier=["ES61", "ES70", "ES30", "ES64"])
    assert list(is_canary(nuts)) == [False, True, False, False]
