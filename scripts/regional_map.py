"""
Regional map: relative income of young people by autonomous community.

    1. Loads the youth income table (communities numbered from 0)
    2. Loads the community geometries (INE codes '01'..'19')
    3. Classifies and renders with the curated REGIONAL_BREAKS
"""
import sys
import argparse as ap
from pathlib import Path

from spainmaps import config
from spainmaps.geometry import load_regions
from spainmaps.loaders import load_youth_income
from spainmaps.pipeline import MapConfig, run_map


def main(data_path, geometry_path, out_path, html_path=None, code_col="codauto", name_col=None):
    print("\n" + "=" * 80)
    print("REGIONAL MAP: YOUTH RELATIVE INCOME")
    print("=" * 80)

    try:
        print(f"\nLoading data from {data_path}...")
        table = load_youth_income(data_path)
        print(f"Loaded {len(table)} communities")

        print(f"Loading geometries from {geometry_path}...")
        geo = load_regions(geometry_path, code_col=code_col, name_col=name_col)

        cfg = MapConfig(
            name="Renta relativa de la juventud por CCAA",
            table_key="codauto",
            value_col="renta_relativa",
            breaks=config.REGIONAL_BREAKS,
            style=config.REGIONAL_STYLE,
            out_path=Path(out_path),
            key_width=2,
            palette=config.PALETTE,
            suggest_step=0.05,
            tooltip_cols=("ccaa", "name"),
        )
        run_map(cfg, table, geo, html_path=Path(html_path) if html_path else None)

        print("\n" + "=" * 80)
        print("Regional map completed successfully")
        print("=" * 80)
    except Exception as e:
        print(f"\nError: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    parser = ap.ArgumentParser(description="Render the youth relative income map by autonomous community.")
    parser.add_argument("--data-path", type=str, default=str(config.YOUTH_INCOME_CSV), help="CSV with id and renta_relativa columns.")
    parser.add_argument("--geometry-path", type=str, default=config.REGIONS_PATH, help="Community boundaries (any format geopandas reads).")
    parser.add_argument("--code-col", type=str, default="codauto", help="Community code column in the geometry file.")
    parser.add_argument("--name-col", type=str, default=None, help="Optional community name column in the geometry file.")
    parser.add_argument("--out-path", type=str, default=str(config.OUTPUT_DIR / "mapa_ccaa.png"), help="Output PNG.")
    parser.add_argument("--html-path", type=str, default=None, help="Also write an interactive HTML map here.")
    args = parser.parse_args()
    main(
        data_path=args.data_path,
        geometry_path=args.geometry_path,
        out_path=args.out_path,
        html_path=args.html_path,
        code_col=args.code_col,
        name_col=args.name_col,
    )
