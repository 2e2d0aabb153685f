"""Resolve a source into assembled layers.

Layer 4: Workflows. Decides how a source is acquired (bytes already in
hand, a zip archive at a location, or a set of sibling files sharing a base
location) and drives extraction, classification and assembly.
"""

import asyncio
import logging
import os
from typing import Any, Iterable, Optional, Union

from shapesmith.primitives.buffers import normalize
from shapesmith.primitives.classify import METADATA_MARKER, classify_components
from shapesmith.primitives.features import combine
from shapesmith.primitives.spatial_reference import (
    ProjectionMode,
    SpatialReferenceResolver,
)
from shapesmith.tasks.assembletask import LayerAssembler
from shapesmith.workflows.archive import extract_archive
from shapesmith.workflows.fetch import Fetcher, location_path

logger = logging.getLogger(__name__)


def is_archive_location(location: str) -> bool:
    """True when the trailing path segment of ``location`` names a zip file."""
    return location_path(location).lower().endswith(".zip")


def base_location(location: str) -> str:
    """Strip a trailing ``.shp`` so sibling members can be addressed."""
    if location_path(location).lower().endswith(".shp"):
        head, sep, query = location.partition("?")
        head = head[: -len(".shp")]
        return f"{head}{sep}{query}"
    return location


class SourceResolver:
    """Acquire, classify and assemble the layers behind one source.

    Args:
        fetcher: Fetcher used for string sources.
        resolver: Spatial reference resolver.
        assembler: LayerAssembler turning layers into output objects.
        archive_mode: ProjectionMode for ``.prj`` members inside archives.
        remote_mode: ProjectionMode for ``.prj`` files next to a base location.
        metadata_marker: Archive members containing this are skipped.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        resolver: Optional[SpatialReferenceResolver] = None,
        assembler: Optional[LayerAssembler] = None,
        archive_mode: Union[ProjectionMode, str] = ProjectionMode.STRICT,
        remote_mode: Union[ProjectionMode, str] = ProjectionMode.LENIENT,
        metadata_marker: str = METADATA_MARKER,
    ):
        self.fetcher = fetcher or Fetcher()
        self.resolver = resolver or SpatialReferenceResolver()
        self.assembler = assembler or LayerAssembler()
        self.archive_mode = ProjectionMode(archive_mode)
        self.remote_mode = ProjectionMode(remote_mode)
        self.metadata_marker = metadata_marker

    async def parse_archive(
        self,
        data: Any,
        whitelist: Optional[Iterable[str]] = None,
        identifier: Union[str, int, None] = None,
    ) -> Union[dict, list]:
        """Assemble every layer in a zip archive.

        Args:
            data: Archive bytes in any form ``normalize`` accepts.
            whitelist: Extra extensions to return untouched as layers.
            identifier: EPSG identifier overriding every ``.prj`` member.

        Returns:
            The single layer result, or a list in archive order when the
            archive holds more than one layer.
        """
        whitelist = list(whitelist or [])
        members = await extract_archive(normalize(data))
        classified = classify_components(
            members,
            whitelist=whitelist,
            resolver=self.resolver,
            identifier=identifier,
            mode=self.archive_mode,
            metadata_marker=self.metadata_marker,
        )
        results = [
            self.assembler.assemble(name, classified.component_map, whitelist)
            for name in classified.layer_names
        ]
        logger.info(f"Assembled {len(results)} layer(s) from archive")
        if len(results) == 1:
            return results[0]
        return results

    async def _read_geometry(self, location: str) -> list:
        shp, prj = await asyncio.gather(
            self.fetcher.fetch(location, "shp"),
            self.fetcher.fetch(location, "prj"),
        )
        spatial_reference = None
        if prj:
            spatial_reference = self.resolver.resolve(prj, mode=self.remote_mode)
        return self.assembler.geometry_decoder(shp, spatial_reference)

    async def _read_attributes(self, location: str) -> Optional[list]:
        dbf, cpg = await asyncio.gather(
            self.fetcher.fetch(location, "dbf"),
            self.fetcher.fetch(location, "cpg"),
        )
        if not dbf:
            return None
        return self.assembler.attribute_decoder(dbf, cpg)

    async def parse_base_location(self, location: str) -> dict:
        """Assemble the single layer whose members share ``location``."""
        location = base_location(location)
        geometries, records = await asyncio.gather(
            self._read_geometry(location),
            self._read_attributes(location),
        )
        logger.info(f"Assembled layer from base location {location}")
        return combine(geometries, records)

    async def resolve(
        self,
        source: Any,
        whitelist: Optional[Iterable[str]] = None,
        identifier: Union[str, int, None] = None,
    ) -> Union[dict, list]:
        """Resolve any supported source to its assembled result.

        Strings and path-like objects are locations: a ``.zip`` is fetched
        and parsed as an archive, anything else is treated as the base of a
        ``.shp``/``.dbf``/``.prj``/``.cpg`` file set. Every other source is
        taken to be archive bytes.
        """
        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        if not isinstance(source, str):
            return await self.parse_archive(source, whitelist, identifier)
        if is_archive_location(source):
            data = await self.fetcher.fetch(source)
            return await self.parse_archive(data, whitelist, identifier)
        return await self.parse_base_location(source)
