"""Layer 2: Primitives - Pure operations on bytes and component maps.

This layer can import numpy, pandas, pyproj and pyshp. No network access,
no archive handling and no caching.
"""

from shapesmith.primitives.buffers import normalize
from shapesmith.primitives.classify import (
    EXTENSION_ROLES,
    METADATA_MARKER,
    canonical_name,
    classify_components,
    member_role,
    split_extension,
)
from shapesmith.primitives.decoders import (
    decode_attributes,
    decode_geometry,
    reproject_coordinates,
    resolve_encoding,
)
from shapesmith.primitives.features import combine, tag_file_name, to_dataframe
from shapesmith.primitives.spatial_reference import (
    DEFAULT_TARGET_CRS,
    ProjectionMode,
    SpatialReference,
    SpatialReferenceResolver,
)

__all__ = [
    "DEFAULT_TARGET_CRS",
    "EXTENSION_ROLES",
    "METADATA_MARKER",
    "ProjectionMode",
    "SpatialReference",
    "SpatialReferenceResolver",
    "canonical_name",
    "classify_components",
    "combine",
    "decode_attributes",
    "decode_geometry",
    "member_role",
    "normalize",
    "reproject_coordinates",
    "resolve_encoding",
    "split_extension",
    "tag_file_name",
    "to_dataframe",
]
