"""Shapesmith command-line interface.

Usage:
    shapesmith https://example.com/roads.zip
    shapesmith data/parcels --epsg 4490 --indent 2
    shapesmith bundle.zip --whitelist geojson kml --config shapesmith.yaml
    shapesmith --version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from shapesmith import __version__
from shapesmith.config import ShapesmithConfig, load_config
from shapesmith.utils.errors import ShapesmithError
from shapesmith.workflows.reader import read_shapefile


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapesmith",
        description="Read a shapefile and print it as reprojected GeoJSON",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Local .zip, URL of a .zip, or base path/URL of .shp/.dbf/.prj files",
    )
    parser.add_argument("--whitelist", nargs="+", metavar="EXT",
                        help="Extra archive extensions to return untouched")
    parser.add_argument("--epsg", metavar="ID",
                        help="EPSG identifier overriding the archive's .prj")
    parser.add_argument("--config", "-c", metavar="FILE",
                        help="YAML or JSON configuration file")
    parser.add_argument("--indent", type=int, default=None,
                        help="Indent the JSON output")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log progress to stderr")
    parser.add_argument("--version", action="store_true",
                        help="Print version and exit")
    return parser


def _read_source(source: str) -> object:
    # Local archives are handed over as bytes; base paths stay strings
    path = Path(source)
    if path.suffix.lower() == ".zip" and path.is_file():
        return path.read_bytes()
    return source


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"shapesmith {__version__}")
        return

    if args.source is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args.config) if args.config else ShapesmithConfig()
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else config.log_level,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            stream=sys.stderr,
        )
        result = read_shapefile(
            _read_source(args.source),
            whitelist=args.whitelist,
            epsg=args.epsg,
            config=config,
        )
    except (ShapesmithError, FileNotFoundError) as e:
        print(f"shapesmith: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=args.indent, default=str))


if __name__ == "__main__":
    main()
