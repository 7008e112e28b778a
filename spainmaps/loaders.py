# spainmaps/loaders.py
from __future__ import annotations
import numpy as np
import pandas as pd

from spainmaps.keys import municipality_codes, region_codes, split_ine_label

INE_INDICATOR = "Renta neta media por persona"


def to_number(series: pd.Series) -> pd.Series:
    """Spanish formatted numbers ('12.345,6') to float; '..' and blanks become NaN."""
    if pd.api.types.is_numeric_dtype(series):
        return series.astype(float)
    s = series.astype(str).str.strip()
    # dots are thousands separators only next to a decimal comma or in 3-digit groups
    thousands = s.str.contains(",", regex=False) | s.str.match(r"^-?\d{1,3}(\.\d{3})+$")
    s = s.where(~thousands, s.str.replace(".", "", regex=False))
    s = s.str.replace(",", ".", regex=False)
    s = s.replace({"": np.nan, "nan": np.nan, "None": np.nan})
    return pd.to_numeric(s, errors="coerce")


def load_youth_income(path, ordinal_col: str = "id", value_col: str = "renta_relativa",
                      offset: int = 1) -> pd.DataFrame:
    """Regional table: one row per community, numbered from 0 in `ordinal_col`."""
    df = pd.read_csv(path)
    for c in (ordinal_col, value_col):
        if c not in df.columns:
            raise ValueError(f"Column '{c}' not found in {path}")
    df[value_col] = to_number(df[value_col])
    df["codauto"] = region_codes(df[ordinal_col], offset=offset)
    return df


def load_municipal_income(path, cpro_col: str = "cpro", cmun_col: str = "cmun",
                          value_col: str = "renta_media") -> pd.DataFrame:
    """Municipal table with province and municipality codes in separate columns."""
    df = pd.read_csv(path, dtype={cpro_col: str, cmun_col: str})
    for c in (cpro_col, cmun_col, value_col):
        if c not in df.columns:
            raise ValueError(f"Column '{c}' not found in {path}")
    df[value_col] = to_number(df[value_col])
    df["LAU_CODE"] = municipality_codes(df, cpro_col, cmun_col)
    return df


def parse_ine_income(df: pd.DataFrame, indicator: str = INE_INDICATOR, period=None) -> pd.DataFrame:
    """
    Raw INE income atlas export -> tidy municipal table.

    Keeps municipal totals (no district, no section), one indicator and one
    period (latest if None). Output columns: cpro, cmun, municipio, renta_media.
    """
    required = ["Municipios", "Indicadores de renta media", "Periodo", "Total"]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Not an INE income export, missing columns: {missing}")

    rows = df[df["Indicadores de renta media"] == indicator].copy()
    for c in ("Distritos", "Secciones"):
        if c in rows.columns:
            rows = rows[rows[c].isna() | (rows[c].astype(str).str.strip() == "")]
    if rows.empty:
        raise ValueError(f"No municipal rows for indicator '{indicator}'")

    rows["Periodo"] = pd.to_numeric(rows["Periodo"], errors="coerce")
    if period is None:
        period = rows["Periodo"].max()
    rows = rows[rows["Periodo"] == int(period)]
    if rows.empty:
        raise ValueError(f"No rows for period {period}")

    parsed = rows["Municipios"].apply(split_ine_label)
    codes = parsed.str[0]
    return pd.DataFrame({
        "cpro": codes.str[:2].values,
        "cmun": codes.str[2:].values,
        "municipio": parsed.str[1].values,
        "renta_media": to_number(rows["Total"]).values,
    })


def read_ine_income(path, indicator: str = INE_INDICATOR, period=None) -> pd.DataFrame:
    raw = pd.read_csv(path, sep=";", dtype=str, encoding="utf-8")
    tidy = parse_ine_income(raw, indicator=indicator, period=period)
    tidy["LAU_CODE"] = municipality_codes(tidy)
    return tidy
