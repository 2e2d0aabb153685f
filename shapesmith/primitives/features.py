"""Build GeoJSON-style feature collections from decoded sequences."""

from typing import Any, Optional, Sequence

import pandas as pd


def combine(
    geometries: Sequence[Optional[dict]],
    records: Optional[Sequence[dict]] = None,
) -> dict[str, Any]:
    """Pair geometries and attribute records by position.

    The collection is truncated to the shorter of the two sequences; order
    follows decoder output and nothing is filtered or deduplicated. Without
    an attribute table every feature gets empty properties.

    Args:
        geometries: Decoded geometries (None for null shapes).
        records: Decoded attribute records, or None when there is no table.

    Returns:
        ``{"type": "FeatureCollection", "features": [...]}``

    Example:
        >>> combine([{"type": "Point", "coordinates": [1, 2]}], [{"id": 1}])["features"][0]
        {'type': 'Feature', 'geometry': {'type': 'Point', 'coordinates': [1, 2]}, 'properties': {'id': 1}}
    """
    if records is None:
        records = [{} for _ in geometries]

    features = [
        {"type": "Feature", "geometry": geometry, "properties": properties}
        for geometry, properties in zip(geometries, records)
    ]
    return {"type": "FeatureCollection", "features": features}


def tag_file_name(result: Any, file_name: str) -> Any:
    """Attach ``fileName`` to a result, wrapping non-dict payloads."""
    if isinstance(result, dict):
        result["fileName"] = file_name
        return result
    return {"fileName": file_name, "content": result}


def to_dataframe(collection: dict[str, Any]) -> pd.DataFrame:
    """Tabulate a feature collection.

    One row per feature: the attribute columns followed by a ``geometry``
    column holding the geometry dict.
    """
    features = collection.get("features", [])
    frame = pd.DataFrame([feature.get("properties") or {} for feature in features])
    frame["geometry"] = [feature.get("geometry") for feature in features]
    return frame
