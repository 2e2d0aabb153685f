"""Coerce supported binary inputs into ``bytes``."""

import array
import logging
from typing import Any

import numpy as np

from shapesmith.utils.errors import InvalidInputError

logger = logging.getLogger(__name__)


def _is_empty(data: Any) -> bool:
    if data is None:
        return True
    if isinstance(data, np.ndarray):
        return data.size == 0
    if isinstance(data, memoryview):
        return data.nbytes == 0
    try:
        return len(data) == 0
    except TypeError:
        return False


def _backing_bytes(view: np.ndarray) -> bytes:
    """Return the whole buffer a numpy view was sliced from."""
    root = view
    while isinstance(root, np.ndarray) and root.base is not None:
        root = root.base
    if isinstance(root, np.ndarray):
        return root.tobytes()
    return bytes(memoryview(root).cast("B"))


def normalize(data: Any) -> bytes:
    """Normalize raw input into a single ``bytes`` object.

    ``bytes`` pass through unchanged. Views whose item size is one byte
    (``bytearray``, ``memoryview``, ``uint8`` arrays) are copied as-is. Wider
    typed views are treated as windows onto a larger buffer and the whole
    underlying buffer is returned. Binary file-like objects are read.

    Malformed but present bytes are not checked here; the decoders report
    those.

    Args:
        data: Raw input.

    Returns:
        The canonical byte sequence.

    Raises:
        InvalidInputError: If ``data`` is absent, empty or of an unsupported type.
    """
    if _is_empty(data):
        raise InvalidInputError(
            "No input bytes were supplied",
            suggestion="Pass the shapefile or zip archive contents as bytes",
        )

    if isinstance(data, bytes):
        return data
    if isinstance(data, bytearray):
        return bytes(data)
    if isinstance(data, np.ndarray):
        if data.itemsize == 1:
            return data.tobytes()
        return _backing_bytes(data)
    if isinstance(data, memoryview):
        if data.itemsize == 1:
            return data.tobytes()
        if data.obj is not None:
            return bytes(memoryview(data.obj).cast("B"))
        return data.tobytes()
    if isinstance(data, array.array):
        return data.tobytes()
    if hasattr(data, "read"):
        content = data.read()
        if isinstance(content, str):
            raise InvalidInputError(
                "File-like input must be opened in binary mode",
                suggestion="Open the file with mode 'rb'",
            )
        return normalize(content)

    raise InvalidInputError(
        f"Unsupported input type: {type(data).__name__}",
        suggestion="Use bytes, bytearray, memoryview, numpy array or a binary file",
    )
