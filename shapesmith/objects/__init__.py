"""Layer 1: Objects - Plain data representations.

This layer contains only data structures. No I/O libraries and no decoders.
"""

from shapesmith.objects.layer import (
    ClassifiedComponents,
    ComponentMap,
    ComponentRole,
    Layer,
)

__all__ = [
    "ClassifiedComponents",
    "ComponentMap",
    "ComponentRole",
    "Layer",
]
