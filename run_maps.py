#!/usr/bin/env python3
"""
Quick launcher that renders both maps (regional, then local)
"""

import subprocess
import sys
import argparse
from pathlib import Path

from spainmaps import config

SCRIPTS = {
    "regional": "regional_map.py",
    "local": "local_map.py",
}


def main():
    parser = argparse.ArgumentParser(description="Render the Spanish income maps")
    parser.add_argument(
        "--only",
        choices=sorted(SCRIPTS),
        default=None,
        help="Render a single map instead of both"
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Also write interactive HTML maps next to the PNGs"
    )
    args = parser.parse_args()

    names = [args.only] if args.only else list(SCRIPTS)
    failed = []
    for name in names:
        script = Path(__file__).parent / "scripts" / SCRIPTS[name]
        if not script.exists():
            print(f"Script not found at {script}")
            sys.exit(1)

        cmd = [sys.executable, str(script)]
        if args.html:
            cmd.extend(["--html-path", str(config.OUTPUT_DIR / f"mapa_{name}.html")])

        print(f"Rendering {name} map...")
        result = subprocess.run(cmd)
        if result.returncode != 0:
            failed.append(name)

    if failed:
        print(f"\nFailed: {', '.join(failed)}")
        sys.exit(1)
    print("\nAll maps rendered")


if __name__ == "__main__":
    main()
