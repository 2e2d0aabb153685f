"""Standardized errors for Shapesmith.

Provides a consistent error hierarchy across the ingestion pipeline so
callers can tell user errors (bad input, empty archives) from transport
failures.
"""

from typing import Any, Optional


class ShapesmithError(Exception):
    """Base exception for Shapesmith errors."""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize Shapesmith error.

        Args:
            message: Primary error message.
            suggestion: Optional suggestion for fixing the error.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with suggestion if available."""
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class InvalidInputError(ShapesmithError):
    """Error raised when no usable bytes were supplied."""

    pass


class InvalidArchiveError(InvalidInputError):
    """Error raised when supplied bytes are not a readable zip archive."""

    pass


class NoLayersFoundError(ShapesmithError):
    """Error raised when an archive or file set holds no recognizable layer."""

    pass


class FetchError(ShapesmithError):
    """Error raised when a remote or local resource cannot be retrieved."""

    def __init__(
        self,
        location: str,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.location = location
        self.status_code = status_code
        if message is None:
            if status_code is not None:
                message = f"Failed to fetch {location}: HTTP {status_code}"
            else:
                message = f"Failed to fetch {location}"
        super().__init__(
            message, details={"location": location, "status_code": status_code}
        )


class ParameterError(ShapesmithError):
    """Error raised when parameters are invalid."""

    pass


class SpatialReferenceResolutionFailure(ShapesmithError):
    """Raised internally when a projection cannot be parsed.

    The resolver always catches this and degrades to an unprojected
    result; it never reaches callers of the public API.
    """

    pass


def format_parameter_error(
    parameter_name: str,
    value: Any,
    valid_values: Optional[list[str]] = None,
    suggestion: Optional[str] = None,
) -> str:
    """Format a standardized parameter error message.

    Args:
        parameter_name: Name of the invalid parameter.
        value: Invalid value that was provided.
        valid_values: List of valid values (optional).
        suggestion: How to fix the error (optional).

    Returns:
        Formatted error message string.
    """
    parts = [f"Invalid value for parameter '{parameter_name}': {value}"]
    if valid_values:
        parts.append(f"Valid values: {', '.join(map(str, valid_values))}")
    if suggestion:
        parts.append(f"Suggestion: {suggestion}")
    return "\n".join(parts)


def raise_parameter_error(
    parameter_name: str,
    value: Any,
    valid_values: Optional[list[str]] = None,
    suggestion: Optional[str] = None,
) -> None:
    """Raise a standardized parameter error.

    Raises:
        ParameterError: Always raises this exception.
    """
    error_msg = format_parameter_error(parameter_name, value, valid_values, suggestion)
    raise ParameterError(error_msg, suggestion=suggestion)
