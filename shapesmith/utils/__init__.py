"""Utility modules for Shapesmith."""

from shapesmith.utils.cache import DEFAULT_CAPACITY, ResultCache
from shapesmith.utils.errors import (
    FetchError,
    InvalidArchiveError,
    InvalidInputError,
    NoLayersFoundError,
    ParameterError,
    ShapesmithError,
    SpatialReferenceResolutionFailure,
    format_parameter_error,
    raise_parameter_error,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "ResultCache",
    "ShapesmithError",
    "InvalidInputError",
    "InvalidArchiveError",
    "NoLayersFoundError",
    "FetchError",
    "ParameterError",
    "SpatialReferenceResolutionFailure",
    "format_parameter_error",
    "raise_parameter_error",
]
