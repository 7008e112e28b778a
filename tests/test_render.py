import pandas as pd
import pytest
from plotnine import ggplot

from spainmaps.breaks import classify
from spainmaps.geometry import canary_box, move_canary_islands
from spainmaps.keys import join_attributes
from spainmaps.palette import diverging_palette
from spainmaps.render import MapStyle, build_map, prepare_plot_frame, save_map

SMALL = MapStyle(title="Test", subtitle="Sub", caption="Src", legend_title="Clase",
                 figure_size=(4.0, 4.0), dpi=40)


@pytest.fixture
def classified(regions, youth_table):
    joined = join_attributes(regions, youth_table, "identifier", "codauto", ["renta_relativa"])
    breaks, cats = classify(joined["renta_relativa"], (0.75, 0.85, 0.95, 1.05))
    joined["categoria"] = cats
    return joined, breaks


def test_unmatched_geometry_is_tagged_missing(classified):
    joined, breaks = classified
    frame = prepare_plot_frame(joined, "categoria", SMALL)

    assert len(frame) == len(joined)
    assert frame.loc[frame["identifier"] == "19", "fill"].iloc[0] == SMALL.missing_label
    assert list(frame["fill"].cat.categories) == list(breaks.labels) + [SMALL.missing_label]
    assert pd.isna(joined.loc[3, "categoria"])


def test_prepare_plot_frame_rejects_label_clash(classified):
    joined, _ = classified
    with pytest.raises(ValueError, match="clashes"):
        prepare_plot_frame(joined, "categoria", MapStyle(missing_label="0.75"))


def test_build_map(classified):
    joined, breaks = classified
    plot = build_map(joined, breaks, diverging_palette("RdYlBu", 5), SMALL)
    assert isinstance(plot, ggplot)
    assert "fill" in plot.data.columns


def test_build_map_rejects_wrong_palette_length(classified):
    joined, breaks = classified
    with pytest.raises(ValueError):
        build_map(joined, breaks, diverging_palette("RdYlBu", 4), SMALL)


def test_save_map_with_canary_box(tmp_path, classified):
    joined, breaks = classified
    moved = move_canary_islands(joined)
    plot = build_map(moved, breaks, diverging_palette("RdYlBu", 5), SMALL, box=canary_box(moved))

    out = save_map(plot, tmp_path / "maps" / "ccaa.png", SMALL)
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_style_is_immutable():
    with pytest.raises(Exception):
        SMALL.background = "white"
