"""Coordinate Reference System (CRS) resolution for shapefile layers.

Turns an EPSG identifier or a ``.prj`` description into a reusable
transform to the canonical output CRS, using pyproj. Resolution never
raises: anything that cannot be resolved yields None and the layer is
decoded unprojected.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from shapesmith.data.epsg import EPSG_DEFINITIONS, PROJECTION_PATTERNS, ProjectionPattern
from shapesmith.utils.errors import SpatialReferenceResolutionFailure

logger = logging.getLogger(__name__)

DEFAULT_TARGET_CRS = "EPSG:4326"


class ProjectionMode(str, Enum):
    """How a ``.prj`` description is turned into a transform.

    STRICT runs the full chain (identifier override, reference table, direct
    parse) and reports an unresolved description at WARNING; the archive
    path stores the resulting None as the layer's projection. LENIENT only
    tries a direct parse and swallows failures quietly; it is what the
    base-location path uses.
    """

    STRICT = "strict"
    LENIENT = "lenient"


class SpatialReference:
    """A source CRS bound to a transformer into the target CRS."""

    def __init__(
        self,
        crs: CRS,
        target_crs: Union[str, int, CRS] = DEFAULT_TARGET_CRS,
        identifier: Optional[str] = None,
    ):
        """Initialize spatial reference.

        Args:
            crs: Source CRS of the layer coordinates.
            target_crs: CRS the coordinates are reprojected into.
            identifier: Identifier the CRS was resolved from, if any.
        """
        self._crs = crs
        self._target_crs = CRS.from_user_input(target_crs)
        self.identifier = identifier
        self._transformer = Transformer.from_crs(
            self._crs, self._target_crs, always_xy=True
        )

    @property
    def crs(self) -> CRS:
        """Get the source CRS object."""
        return self._crs

    @property
    def target_crs(self) -> CRS:
        return self._target_crs

    def transform(self, coordinates: np.ndarray) -> np.ndarray:
        """Transform coordinates to the target CRS.

        Args:
            coordinates: Input coordinates [N, 2] or [N, k]; only the first two
                columns (x, y) are reprojected, the rest are carried through.

        Returns:
            Transformed coordinates with the same shape as the input.
        """
        coordinates = np.asarray(coordinates, dtype=np.float64)
        if coordinates.ndim != 2 or coordinates.shape[1] < 2:
            raise ValueError(
                f"Coordinates must be an [N, 2+] array, got shape {coordinates.shape}"
            )

        x_new, y_new = self._transformer.transform(coordinates[:, 0], coordinates[:, 1])
        result = coordinates.copy()
        result[:, 0] = x_new
        result[:, 1] = y_new
        return result

    def get_epsg(self) -> Optional[int]:
        """Get the EPSG code of the source CRS if one matches."""
        try:
            return self._crs.to_epsg()
        except CRSError:
            return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpatialReference):
            return NotImplemented
        return self._crs == other._crs and self._target_crs == other._target_crs

    def __hash__(self) -> int:
        return hash((self._crs.to_wkt(), self._target_crs.to_wkt()))

    def __repr__(self) -> str:
        """String representation."""
        if self.identifier:
            return f"SpatialReference(crs=EPSG:{self.identifier})"
        epsg = self.get_epsg()
        if epsg:
            return f"SpatialReference(crs=EPSG:{epsg})"
        return f"SpatialReference(crs={self._crs.name!r})"


def _as_text(description: Union[str, bytes, None]) -> Optional[str]:
    if description is None:
        return None
    if isinstance(description, (bytes, bytearray)):
        return bytes(description).decode("utf-8", errors="replace")
    return str(description)


class SpatialReferenceResolver:
    """Builds ``SpatialReference`` objects from identifiers and descriptions.

    Identifiers are registered on first use, so repeated lookups of the same
    code share one transform.

    Example:
        >>> resolver = SpatialReferenceResolver()
        >>> mercator = resolver.resolve_by_identifier("3857")
        >>> same = resolver.resolve_by_description('PROJCS["WGS_1984_Web_Mercator"]')
        >>> mercator == same
        True
    """

    def __init__(
        self,
        definitions: Optional[dict[str, str]] = None,
        patterns: Optional[Sequence[ProjectionPattern]] = None,
        target_crs: Union[str, int, CRS] = DEFAULT_TARGET_CRS,
    ):
        self.definitions = dict(EPSG_DEFINITIONS if definitions is None else definitions)
        self.patterns = list(PROJECTION_PATTERNS if patterns is None else patterns)
        self.target_crs = CRS.from_user_input(target_crs)
        self._registry: dict[str, SpatialReference] = {}

    def _build(self, definition: str, identifier: Optional[str] = None) -> SpatialReference:
        try:
            crs = CRS.from_user_input(definition)
            return SpatialReference(crs, self.target_crs, identifier=identifier)
        except (CRSError, ProjError, ValueError, TypeError) as e:
            raise SpatialReferenceResolutionFailure(
                f"Could not parse projection definition: {e}",
                details={"definition": definition, "identifier": identifier},
            ) from e

    def resolve_by_identifier(
        self, identifier: Union[str, int, None]
    ) -> Optional[SpatialReference]:
        """Resolve an EPSG identifier to a transform.

        The identifier table is consulted first; codes it does not list are
        looked up in the pyproj EPSG registry.

        Args:
            identifier: EPSG code such as ``"3857"`` or ``4326``.

        Returns:
            SpatialReference, or None if ``identifier`` is falsy or unknown.
        """
        if not identifier:
            return None
        key = str(identifier).upper().removeprefix("EPSG:")
        if key in self._registry:
            return self._registry[key]

        definition = self.definitions.get(key, f"EPSG:{key}")
        try:
            spatial_reference = self._build(definition, identifier=key)
        except SpatialReferenceResolutionFailure as e:
            logger.warning(f"Unknown spatial reference identifier {key}: {e.message}")
            return None

        self._registry[key] = spatial_reference
        logger.info(f"Registered spatial reference EPSG:{key}")
        return spatial_reference

    def match_identifier(self, description: Union[str, bytes, None]) -> Optional[str]:
        """Return the identifier of the first table entry matching ``description``."""
        text = _as_text(description)
        if not text:
            return None
        for pattern in self.patterns:
            if any(substring in text for substring in pattern.match_substrings):
                return pattern.identifier
        return None

    def resolve_by_description(
        self, description: Union[str, bytes, None]
    ) -> Optional[SpatialReference]:
        """Resolve a ``.prj`` description through the reference table.

        Returns:
            SpatialReference for the first matching entry, or None if the
            description is empty or matches nothing.
        """
        identifier = self.match_identifier(description)
        if identifier is None:
            return None
        logger.debug(f"Projection description matched EPSG:{identifier}")
        return self.resolve_by_identifier(identifier)

    def resolve_definition(
        self, description: Union[str, bytes, None]
    ) -> Optional[SpatialReference]:
        """Parse a WKT, ESRI WKT or PROJ string directly."""
        text = _as_text(description)
        if not text or not text.strip():
            return None
        try:
            return self._build(text.strip())
        except SpatialReferenceResolutionFailure as e:
            logger.debug(e.message)
            return None

    def resolve(
        self,
        description: Union[str, bytes, None],
        identifier: Union[str, int, None] = None,
        mode: Union[ProjectionMode, str] = ProjectionMode.STRICT,
    ) -> Optional[SpatialReference]:
        """Resolve a layer's projection using the chain selected by ``mode``.

        Args:
            description: ``.prj`` contents.
            identifier: Optional identifier that overrides the description
                (STRICT mode only).
            mode: ProjectionMode or its string value.

        Returns:
            SpatialReference, or None when nothing resolves.
        """
        mode = ProjectionMode(mode)
        if mode is ProjectionMode.LENIENT:
            return self.resolve_definition(description)

        spatial_reference = (
            self.resolve_by_identifier(identifier)
            or self.resolve_by_description(description)
            or self.resolve_definition(description)
        )
        if spatial_reference is None:
            logger.warning(
                "Projection could not be resolved; layer will be left unprojected"
            )
        return spatial_reference
