# spainmaps/breaks.py
"""
Break and label derivation for discrete choropleth legends.

Breakpoints are curated by hand: look at the quantiles of the data
(`suggest_breaks`), round them to readable numbers, and pass those interior
breakpoints to `compute_breaks`. The observed minimum and maximum bracket them.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

DEFAULT_PROBS = (0.2, 0.4, 0.6, 0.8)


@dataclass(frozen=True)
class Breaks:
    boundaries: Tuple[float, ...]
    labels: Tuple[str, ...]

    @property
    def interior(self) -> Tuple[float, ...]:
        return self.boundaries[1:-1]

    @property
    def n_classes(self) -> int:
        return len(self.labels)

    @property
    def intervals(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self.boundaries[:-1], self.boundaries[1:]))


def format_edge(value: float, decimals: int = 2) -> str:
    """Round to `decimals` and drop trailing zeros: 1.40 -> '1.4', 12000.0 -> '12000'."""
    text = f"{round(float(value), decimals):.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _as_float_series(values: Iterable) -> pd.Series:
    if isinstance(values, pd.Series):
        return pd.to_numeric(values, errors="coerce").astype(float)
    return pd.Series(pd.to_numeric(pd.Series(list(values)), errors="coerce"), dtype=float)


def _observed_range(values: pd.Series) -> Tuple[float, float]:
    present = values.dropna()
    if present.empty:
        raise ValueError("Cannot compute breaks: every value is missing")
    return float(present.min()), float(present.max())


def compute_breaks(values: Iterable, interior: Sequence[float], decimals: int = 2,
                   n_classes: Optional[int] = 5) -> Breaks:
    """
    Bracket the curated `interior` breakpoints with the observed min and max.

    Each interval is labelled by its own upper edge rounded to `decimals`, so
    four interior breakpoints give six boundaries, five intervals and five labels.
    `n_classes` fixes the number of intervals (so `n_classes - 1` breakpoints);
    pass None to accept any non-empty list.
    Raises ValueError when the column is all missing, when the breakpoint count
    is wrong, when the breakpoints are not strictly ascending and strictly inside
    (min, max), or when two labels collide after rounding.
    """
    s = _as_float_series(values)
    vmin, vmax = _observed_range(s)

    inner = [float(b) for b in interior]
    if not inner:
        raise ValueError("At least one interior breakpoint is required")
    if n_classes is not None and len(inner) != n_classes - 1:
        raise ValueError(f"{n_classes} classes need {n_classes - 1} interior breakpoints, got {len(inner)}")
    if any(not np.isfinite(b) for b in inner):
        raise ValueError(f"Interior breakpoints must be finite numbers, got {inner}")
    for lo, hi in zip(inner, inner[1:]):
        if not lo < hi:
            raise ValueError(f"Interior breakpoints must be strictly ascending, got {inner}")
    if not vmin < inner[0]:
        raise ValueError(f"First breakpoint {inner[0]} is not above the observed minimum {vmin}")
    if not inner[-1] < vmax:
        raise ValueError(f"Last breakpoint {inner[-1]} is not below the observed maximum {vmax}")

    boundaries = tuple([vmin] + inner + [vmax])
    labels = tuple(format_edge(upper, decimals) for _, upper in zip(boundaries[:-1], boundaries[1:]))
    if len(set(labels)) != len(labels):
        raise ValueError(
            f"Labels collide after rounding to {decimals} decimals: {list(labels)}. "
            "Spread the breakpoints or increase the number of decimals."
        )
    return Breaks(boundaries=boundaries, labels=labels)


def categorize(values: Iterable, breaks: Breaks) -> pd.Series:
    """Ordered categorical of labels; the first interval includes the minimum, NA stays NA."""
    s = _as_float_series(values)
    return pd.cut(
        s,
        bins=list(breaks.boundaries),
        labels=list(breaks.labels),
        right=True,
        include_lowest=True,
        ordered=True,
    )


def classify(values: Iterable, interior: Sequence[float], decimals: int = 2,
             n_classes: Optional[int] = 5) -> Tuple[Breaks, pd.Series]:
    breaks = compute_breaks(values, interior, decimals=decimals, n_classes=n_classes)
    return breaks, categorize(values, breaks)


def round_to_step(value: float, step: float) -> float:
    if step <= 0:
        raise ValueError("step must be positive")
    return float(np.round(value / step) * step)


def suggest_breaks(values: Iterable, probs: Sequence[float] = DEFAULT_PROBS,
                   step: Optional[float] = None) -> list:
    """
    Quantiles of the non-missing values, optionally snapped to multiples of `step`.
    Only a starting point for the hand-picked breakpoints; nothing calls it implicitly.
    """
    s = _as_float_series(values).dropna()
    if s.empty:
        raise ValueError("Cannot suggest breaks: every value is missing")
    qs = [float(q) for q in s.quantile(list(probs)).values]
    if step is not None:
        qs = [round_to_step(q, step) for q in qs]
    return qs


def category_counts(categories: pd.Series, missing_label: str = "Sin datos") -> pd.Series:
    labels = list(categories.cat.categories)
    counts = categories.value_counts(dropna=True)
    values = [int(counts.get(label, 0)) for label in labels] + [int(categories.isna().sum())]
    return pd.Series(values, index=labels + [missing_label], dtype=int)
