"""Zip archive extraction.

Layer 4: Workflows - I/O operations.
"""

import asyncio
import io
import logging
import zipfile

from shapesmith.utils.errors import InvalidArchiveError

logger = logging.getLogger(__name__)

# Members kept as raw bytes; everything else is decoded as text.
BINARY_EXTENSIONS = ("shp", "dbf")


def _is_binary_member(name: str) -> bool:
    return name.rpartition(".")[2].lower() in BINARY_EXTENSIONS


def read_archive(data: bytes) -> dict:
    """Read every file member of a zip archive.

    ``.shp`` and ``.dbf`` members are returned as bytes; all other members
    are decoded as UTF-8 text. Directory entries are skipped.

    Args:
        data: Raw zip bytes.

    Returns:
        Mapping of member name to contents, in archive order.

    Raises:
        InvalidArchiveError: If ``data`` is not a readable zip archive.
    """
    members = {}
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as z:
            for name in z.namelist():
                if name.endswith("/"):
                    continue
                content = z.read(name)
                if _is_binary_member(name):
                    members[name] = content
                else:
                    members[name] = content.decode("utf-8", errors="replace")
    except zipfile.BadZipFile as e:
        raise InvalidArchiveError(
            f"Input is not a valid zip archive: {e}",
            suggestion="Pass a zipped shapefile or a base location of the .shp/.dbf files",
        ) from e

    logger.debug(f"Extracted {len(members)} archive members")
    return members


async def extract_archive(data: bytes) -> dict:
    """Extract a zip archive without blocking the event loop."""
    return await asyncio.to_thread(read_archive, data)
