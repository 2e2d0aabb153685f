"""Static reference data bundled with Shapesmith."""

from shapesmith.data.epsg import EPSG_DEFINITIONS, PROJECTION_PATTERNS, ProjectionPattern

__all__ = ["EPSG_DEFINITIONS", "PROJECTION_PATTERNS", "ProjectionPattern"]
