"""Shapesmith: read shapefiles into reprojected GeoJSON feature collections.

Layered like the rest of the toolkit:
- objects: plain data structures
- primitives: normalization, CRS resolution, classification, decoding
- tasks: layer assembly
- workflows: fetching, archives and the public reader
"""

from shapesmith.config import ShapesmithConfig, load_config
from shapesmith.primitives import (
    ProjectionMode,
    SpatialReference,
    SpatialReferenceResolver,
    combine,
    normalize,
    to_dataframe,
)
from shapesmith.utils.cache import ResultCache
from shapesmith.utils.errors import (
    FetchError,
    InvalidArchiveError,
    InvalidInputError,
    NoLayersFoundError,
    ShapesmithError,
)
from shapesmith.workflows import (
    Fetcher,
    ShapefileReader,
    default_reader,
    get_shapefile,
    parse_archive,
    parse_attributes,
    parse_geometry,
    read_shapefile,
)

__version__ = "0.1.0"

__all__ = [
    "Fetcher",
    "FetchError",
    "InvalidArchiveError",
    "InvalidInputError",
    "NoLayersFoundError",
    "ProjectionMode",
    "ResultCache",
    "ShapefileReader",
    "ShapesmithConfig",
    "ShapesmithError",
    "SpatialReference",
    "SpatialReferenceResolver",
    "combine",
    "default_reader",
    "get_shapefile",
    "load_config",
    "normalize",
    "parse_archive",
    "parse_attributes",
    "parse_geometry",
    "read_shapefile",
    "to_dataframe",
    "__version__",
]
