# spainmaps/palette.py
from __future__ import annotations
from typing import Dict, List, Sequence

import matplotlib
import numpy as np
from matplotlib.colors import to_hex


def diverging_palette(name: str = "RdYlBu", n: int = 5, reverse: bool = False) -> List[str]:
    """`n` hex colours sampled evenly from a matplotlib (Brewer) colormap, extremes included."""
    if n < 1:
        raise ValueError("n must be >= 1")
    cmap = matplotlib.colormaps[name]
    positions = np.linspace(0, 1, n) if n > 1 else np.array([0.5])
    colors = [to_hex(cmap(p)) for p in positions]
    return colors[::-1] if reverse else colors


def color_mapping(labels: Sequence[str], colors: Sequence[str]) -> Dict[str, str]:
    """Pair labels and colours in order, so the first colour goes to the lowest class."""
    if len(labels) != len(colors):
        raise ValueError(f"Got {len(colors)} colours for {len(labels)} labels")
    return dict(zip(labels, colors))
