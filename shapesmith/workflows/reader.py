"""Public entry points for reading shapefiles.

Layer 4: Workflows - Public entry points.

Example:
    >>> import asyncio
    >>> from shapesmith import ShapefileReader
    >>>
    >>> reader = ShapefileReader()
    >>> roads = asyncio.run(reader.get_shapefile("https://example.com/roads.zip"))
    >>> print(roads["fileName"], len(roads["features"]))
"""

import asyncio
import logging
import os
from typing import Any, Iterable, Optional, Sequence, Union

from shapesmith.config import ShapesmithConfig
from shapesmith.primitives.buffers import normalize
from shapesmith.primitives.decoders import decode_attributes, decode_geometry
from shapesmith.primitives.features import combine as combine_features
from shapesmith.primitives.spatial_reference import (
    ProjectionMode,
    SpatialReference,
    SpatialReferenceResolver,
)
from shapesmith.tasks.assembletask import LayerAssembler
from shapesmith.utils.cache import ResultCache
from shapesmith.workflows.fetch import Fetcher
from shapesmith.workflows.source import SourceResolver

logger = logging.getLogger(__name__)

Projection = Union[SpatialReference, str, bytes, bytearray, None]


class ShapefileReader:
    """Reads shapefiles from bytes, archives and locations.

    Owns its own ResultCache, so two readers never share results.

    Args:
        config: Reader settings; defaults to ``ShapesmithConfig()``.
        fetcher: Fetcher for string sources.
        resolver: Spatial reference resolver.
        cache: Result cache; a new one sized by ``config.cache_capacity`` is
            created when omitted.
    """

    def __init__(
        self,
        config: Optional[ShapesmithConfig] = None,
        fetcher: Optional[Fetcher] = None,
        resolver: Optional[SpatialReferenceResolver] = None,
        cache: Optional[ResultCache] = None,
    ):
        self.config = config or ShapesmithConfig()
        self.fetcher = fetcher or Fetcher(timeout=self.config.fetch_timeout)
        self.resolver = resolver or SpatialReferenceResolver(
            target_crs=self.config.target_crs
        )
        self.cache = cache if cache is not None else ResultCache(self.config.cache_capacity)
        self._pending: dict[str, asyncio.Task] = {}
        self.sources = SourceResolver(
            fetcher=self.fetcher,
            resolver=self.resolver,
            assembler=LayerAssembler(),
            archive_mode=self.config.archive_projection_mode,
            remote_mode=self.config.remote_projection_mode,
            metadata_marker=self.config.metadata_marker,
        )

    def _whitelist(self, whitelist: Optional[Iterable[str]]) -> list[str]:
        if whitelist is None:
            return list(self.config.whitelist)
        return list(whitelist)

    async def get_shapefile(
        self,
        source: Any,
        whitelist: Optional[Iterable[str]] = None,
        epsg: Union[str, int, None] = None,
    ) -> Union[dict, list]:
        """Read a shapefile from any supported source.

        String sources are memoized by identity: a repeated call with the
        same string returns the cached object without fetching again, and
        concurrent calls for a string still being read share one read.

        Args:
            source: Archive bytes, a ``.zip`` location, or the base location
                of a ``.shp``/``.dbf``/``.prj`` file set.
            whitelist: Extra archive extensions to return untouched.
            epsg: EPSG identifier overriding the archive's ``.prj`` members.

        Returns:
            A FeatureCollection dict, or a list of them for multi-layer archives.
        """
        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        if not isinstance(source, str):
            return await self.sources.resolve(source, self._whitelist(whitelist), epsg)

        cached = self.cache.get(source)
        if cached is not None:
            logger.debug(f"Cache hit for {source}")
            return cached

        task = self._pending.get(source)
        if task is None:
            task = asyncio.ensure_future(self._read_and_cache(source, whitelist, epsg))
            self._pending[source] = task
        else:
            logger.debug(f"Joining in-flight read of {source}")
        return await asyncio.shield(task)

    async def _read_and_cache(
        self,
        source: str,
        whitelist: Optional[Iterable[str]],
        epsg: Union[str, int, None],
    ) -> Union[dict, list]:
        try:
            result = await self.sources.resolve(source, self._whitelist(whitelist), epsg)
            self.cache.set(source, result)
            return result
        finally:
            self._pending.pop(source, None)

    async def parse_archive(
        self,
        data: Any,
        whitelist: Optional[Iterable[str]] = None,
        epsg: Union[str, int, None] = None,
    ) -> Union[dict, list]:
        """Read every layer from zip archive bytes."""
        return await self.sources.parse_archive(data, self._whitelist(whitelist), epsg)

    def parse_geometry(self, data: Any, projection: Projection = None) -> list:
        """Decode ``.shp`` bytes, reprojecting when a projection resolves.

        Args:
            data: ``.shp`` bytes in any form ``normalize`` accepts.
            projection: A SpatialReference, ``.prj`` text or ``.prj`` bytes.
                Descriptions that fail to parse leave the geometry unprojected.
        """
        spatial_reference = projection
        if projection is not None and not isinstance(projection, SpatialReference):
            spatial_reference = self.resolver.resolve(projection, mode=ProjectionMode.LENIENT)
        return decode_geometry(normalize(data), spatial_reference)

    def parse_attributes(self, data: Any, encoding: Union[str, bytes, None] = None) -> list:
        """Decode ``.dbf`` bytes into attribute records."""
        return decode_attributes(normalize(data), encoding)

    @staticmethod
    def combine(geometries: Sequence[Optional[dict]], records: Optional[Sequence[dict]]) -> dict:
        """Pair geometries and records into a FeatureCollection."""
        return combine_features(geometries, records)


_default_reader: Optional[ShapefileReader] = None


def default_reader() -> ShapefileReader:
    """Return the process-wide reader behind the module-level functions."""
    global _default_reader
    if _default_reader is None:
        _default_reader = ShapefileReader()
    return _default_reader


async def get_shapefile(
    source: Any,
    whitelist: Optional[Iterable[str]] = None,
    epsg: Union[str, int, None] = None,
    config: Optional[ShapesmithConfig] = None,
) -> Union[dict, list]:
    """Read a shapefile through the shared default reader and its cache.

    Passing ``config`` reads with a fresh reader built from it instead, so
    nothing is cached across calls.
    """
    reader = default_reader() if config is None else ShapefileReader(config=config)
    return await reader.get_shapefile(source, whitelist, epsg)


async def parse_archive(
    data: Any,
    whitelist: Optional[Iterable[str]] = None,
    epsg: Union[str, int, None] = None,
) -> Union[dict, list]:
    return await ShapefileReader().parse_archive(data, whitelist, epsg)


def parse_geometry(data: Any, projection: Projection = None) -> list:
    return ShapefileReader().parse_geometry(data, projection)


def parse_attributes(data: Any, encoding: Union[str, bytes, None] = None) -> list:
    return ShapefileReader().parse_attributes(data, encoding)


def read_shapefile(
    source: Any,
    whitelist: Optional[Iterable[str]] = None,
    epsg: Union[str, int, None] = None,
    config: Optional[ShapesmithConfig] = None,
) -> Union[dict, list]:
    """Synchronous wrapper around ``get_shapefile`` for scripts.

    Must not be called from a running event loop.
    """
    return asyncio.run(get_shapefile(source, whitelist, epsg, config))
