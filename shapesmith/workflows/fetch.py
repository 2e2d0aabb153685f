"""Fetch shapefile members from URLs or local paths.

Layer 4: Workflows - I/O operations. HTTP(S) locations go through httpx;
anything else is read from the local filesystem in a worker thread.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from shapesmith.utils.errors import FetchError

logger = logging.getLogger(__name__)

# Members a shapefile can be read without.
OPTIONAL_SUFFIXES = frozenset({"dbf", "prj", "cpg"})

_REMOTE_SCHEMES = ("http", "https")


def is_remote(location: str) -> bool:
    return urlsplit(location).scheme.lower() in _REMOTE_SCHEMES


def location_path(location: str) -> str:
    """Return the path segment of a URL, or the location itself for files."""
    if is_remote(location):
        return urlsplit(location).path
    return location


def with_suffix(location: str, suffix: Optional[str] = None) -> str:
    """Append ``.suffix`` to the path of ``location``, before any query string.

    Example:
        >>> with_suffix("https://example.com/data/roads?token=x", "shp")
        'https://example.com/data/roads.shp?token=x'
    """
    if not suffix:
        return location
    if is_remote(location):
        parts = urlsplit(location)
        return urlunsplit(parts._replace(path=f"{parts.path}.{suffix}"))
    return f"{location}.{suffix}"


class Fetcher:
    """Retrieve raw bytes for a location and optional member suffix.

    Args:
        client: httpx.AsyncClient to reuse. When omitted a client is opened
            per request with ``timeout``.
        timeout: Request timeout in seconds.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    async def _get(self, client: httpx.AsyncClient, url: str) -> bytes:
        try:
            resp = await client.get(url, timeout=self.timeout, follow_redirects=True)
        except httpx.HTTPError as e:
            raise FetchError(url, message=f"Failed to fetch {url}: {e}") from e
        if resp.status_code >= 400:
            raise FetchError(url, status_code=resp.status_code)
        return resp.content

    async def _fetch_remote(self, url: str) -> bytes:
        if self.client is not None:
            return await self._get(self.client, url)
        async with httpx.AsyncClient() as client:
            return await self._get(client, url)

    async def _fetch_local(self, path: str) -> bytes:
        try:
            return await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            raise FetchError(path, message=f"Failed to read {path}: {e}") from e

    async def fetch(self, location: str, suffix: Optional[str] = None) -> Optional[bytes]:
        """Fetch ``location`` (with ``.suffix`` appended when given).

        Args:
            location: URL or local path.
            suffix: Member extension such as ``"shp"`` or ``"prj"``.

        Returns:
            The bytes, or None when an optional member (dbf, prj, cpg)
            cannot be retrieved.

        Raises:
            FetchError: If a required resource cannot be retrieved.
        """
        target = with_suffix(location, suffix)
        logger.debug(f"Fetching {target}")
        try:
            if is_remote(target):
                return await self._fetch_remote(target)
            return await self._fetch_local(target)
        except FetchError as e:
            if suffix in OPTIONAL_SUFFIXES:
                logger.debug(f"Optional member unavailable: {e.message}")
                return None
            raise
