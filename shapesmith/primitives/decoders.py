"""Geometry and attribute decoders backed by pyshp.

Both decoders work on in-memory bytes: no ``.shx`` index is needed, the
geometry stream is read sequentially.
"""

import codecs
import io
import logging
from typing import Any, Optional, Union

import numpy as np
import shapefile

from shapesmith.primitives.spatial_reference import SpatialReference

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def _is_position(value: Any) -> bool:
    return len(value) > 0 and isinstance(value[0], (int, float, np.floating))


def reproject_coordinates(
    coordinates: Any, spatial_reference: Optional[SpatialReference]
) -> list:
    """Walk nested GeoJSON coordinates, reprojecting every position.

    Each innermost run of positions is transformed as one numpy array.
    Without a spatial reference the structure is only converted to lists.
    """
    if len(coordinates) == 0:
        return []
    if _is_position(coordinates):
        return reproject_coordinates([coordinates], spatial_reference)[0]
    if _is_position(coordinates[0]):
        positions = np.asarray(coordinates, dtype=np.float64)
        if spatial_reference is not None:
            positions = spatial_reference.transform(positions)
        return positions.tolist()
    return [reproject_coordinates(part, spatial_reference) for part in coordinates]


def _shape_to_geometry(
    shape: shapefile.Shape, spatial_reference: Optional[SpatialReference]
) -> Optional[dict]:
    if shape.shapeType == shapefile.NULL:
        return None
    geometry = dict(shape.__geo_interface__)
    geometry["coordinates"] = reproject_coordinates(
        geometry["coordinates"], spatial_reference
    )
    return geometry


def decode_geometry(
    data: bytes, spatial_reference: Optional[SpatialReference] = None
) -> list[Optional[dict]]:
    """Decode a ``.shp`` stream into GeoJSON geometry dicts.

    Args:
        data: Raw ``.shp`` bytes.
        spatial_reference: Transform to apply, or None to keep source
            coordinates.

    Returns:
        One geometry per record, in file order; None for null shapes.
    """
    reader = shapefile.Reader(shp=io.BytesIO(data))
    try:
        geometries = [
            _shape_to_geometry(shape, spatial_reference) for shape in reader.iterShapes()
        ]
    finally:
        reader.close()
    logger.debug(f"Decoded {len(geometries)} geometries")
    return geometries


def resolve_encoding(encoding: Union[str, bytes, None]) -> str:
    """Map ``.cpg`` contents to a Python codec name.

    Unknown or missing code pages fall back to UTF-8.
    """
    if isinstance(encoding, (bytes, bytearray)):
        encoding = bytes(encoding).decode("ascii", errors="ignore")
    if not encoding or not encoding.strip():
        return DEFAULT_ENCODING
    name = encoding.strip()
    if name.isdigit():
        name = f"cp{name}"
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.warning(f"Unknown code page {name!r}, decoding attributes as UTF-8")
        return DEFAULT_ENCODING


def decode_attributes(
    data: bytes, encoding: Union[str, bytes, None] = None
) -> list[dict[str, Any]]:
    """Decode a ``.dbf`` table into one dict per record.

    Records flagged as deleted keep their slot as an empty dict, so record
    ``i`` always belongs to shape ``i``. Text that does not decode cleanly
    is replaced rather than rejected.

    Args:
        data: Raw ``.dbf`` bytes.
        encoding: ``.cpg`` contents or a codec name.

    Returns:
        Attribute records in file order, one per table row.
    """
    reader = shapefile.Reader(
        dbf=io.BytesIO(data),
        encoding=resolve_encoding(encoding),
        encodingErrors="replace",
    )
    records: list[dict[str, Any]] = []
    deleted = 0
    try:
        for i in range(reader.numRecords):
            record = reader.record(i)
            if record is None:
                deleted += 1
                records.append({})
            else:
                records.append(record.as_dict())
    finally:
        reader.close()
    if deleted:
        logger.debug(f"{deleted} deleted attribute records kept as empty properties")
    logger.debug(f"Decoded {len(records)} attribute records")
    return records
