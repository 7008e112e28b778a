"""
Local map: average net income per person by municipality.

    1. Loads the municipal income table (tidy CSV with cpro/cmun, or a raw INE export)
    2. Loads the municipality geometries (5-digit LAU codes)
    3. Classifies and renders with the curated MUNICIPAL_BREAKS
"""
import sys
import argparse as ap
from pathlib import Path

from spainmaps import config
from spainmaps.geometry import load_municipalities
from spainmaps.loaders import load_municipal_income, read_ine_income
from spainmaps.pipeline import MapConfig, run_map


def main(data_path, geometry_path, out_path, html_path=None, code_col="LAU_CODE",
         name_col=None, ine_export=False, period=None):
    print("\n" + "=" * 80)
    print("LOCAL MAP: AVERAGE INCOME BY MUNICIPALITY")
    print("=" * 80)

    try:
        print(f"\nLoading data from {data_path}...")
        if ine_export:
            table = read_ine_income(data_path, period=period)
        else:
            table = load_municipal_income(data_path)
        print(f"Loaded {len(table)} municipalities")

        print(f"Loading geometries from {geometry_path}...")
        geo = load_municipalities(geometry_path, code_col=code_col, name_col=name_col)

        cfg = MapConfig(
            name="Renta media por municipio",
            table_key="LAU_CODE",
            value_col="renta_media",
            breaks=config.MUNICIPAL_BREAKS,
            style=config.MUNICIPAL_STYLE,
            out_path=Path(out_path),
            key_width=5,
            palette=config.PALETTE,
            suggest_step=500,
            tooltip_cols=("municipio", "name"),
        )
        run_map(cfg, table, geo, html_path=Path(html_path) if html_path else None)

        print("\n" + "=" * 80)
        print("Local map completed successfully")
        print("=" * 80)
    except Exception as e:
        print(f"\nError: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    parser = ap.ArgumentParser(description="Render the average income map by municipality.")
    parser.add_argument("--data-path", type=str, default=str(config.MUNICIPAL_INCOME_CSV), help="Municipal income CSV.")
    parser.add_argument("--ine-export", action="store_true", help="Data path is a raw INE income atlas export (';' separated).")
    parser.add_argument("--period", type=int, default=None, help="Year to keep from an INE export (latest by default).")
    parser.add_argument("--geometry-path", type=str, default=config.MUNICIPALITIES_PATH, help="Municipality boundaries.")
    parser.add_argument("--code-col", type=str, default="LAU_CODE", help="Municipality code column in the geometry file.")
    parser.add_argument("--name-col", type=str, default=None, help="Optional municipality name column in the geometry file.")
    parser.add_argument("--out-path", type=str, default=str(config.OUTPUT_DIR / "mapa_municipios.png"), help="Output PNG.")
    parser.add_argument("--html-path", type=str, default=None, help="Also write an interactive HTML map here.")
    args = parser.parse_args()
    main(
        data_path=args.data_path,
        geometry_path=args.geometry_path,
        out_path=args.out_path,
        html_path=args.html_path,
        code_col=args.code_col,
        name_col=args.name_col,
        ine_export=args.ine_export,
        period=args.period,
    )
