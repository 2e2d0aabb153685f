"""Layer 4: Workflows - Public entry points.

Workflows provide the public entry points users call. Workflows can import
I/O libraries. Put fetching, archive extraction and caching here.
"""

from shapesmith.workflows.archive import extract_archive, read_archive
from shapesmith.workflows.fetch import Fetcher, with_suffix
from shapesmith.workflows.reader import (
    ShapefileReader,
    default_reader,
    get_shapefile,
    parse_archive,
    parse_attributes,
    parse_geometry,
    read_shapefile,
)
from shapesmith.workflows.source import SourceResolver

__all__ = [
    "Fetcher",
    "ShapefileReader",
    "SourceResolver",
    "default_reader",
    "extract_archive",
    "get_shapefile",
    "parse_archive",
    "parse_attributes",
    "parse_geometry",
    "read_archive",
    "read_shapefile",
    "with_suffix",
]
