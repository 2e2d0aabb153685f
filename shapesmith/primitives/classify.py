"""Group archive members into layers by extension.

The rules live in ``EXTENSION_ROLES``; extension matching is
case-insensitive and only the extension segment of a member name is
re-cased, never its stem.
"""

import logging
from typing import Iterable, Optional, Union

from shapesmith.objects.layer import ClassifiedComponents, ComponentMap, ComponentRole
from shapesmith.primitives.spatial_reference import (
    ProjectionMode,
    SpatialReferenceResolver,
)
from shapesmith.utils.errors import NoLayersFoundError

logger = logging.getLogger(__name__)

METADATA_MARKER = "__MACOSX"

EXTENSION_ROLES: dict[str, ComponentRole] = {
    "shp": ComponentRole.GEOMETRY,
    "dbf": ComponentRole.ATTRIBUTES,
    "cpg": ComponentRole.ENCODING,
    "prj": ComponentRole.PROJECTION,
    "json": ComponentRole.STRUCTURED,
}

# .geojson, .topojson and friends are parsed like .json.
STRUCTURED_SUFFIX = "json"


def split_extension(name: str) -> tuple[str, str]:
    """Split ``name`` into stem and extension (without the dot)."""
    stem, dot, extension = name.rpartition(".")
    if not dot:
        return name, ""
    return stem, extension


def canonical_name(name: str) -> str:
    """Lower-case the extension of ``name`` while keeping its stem intact."""
    stem, extension = split_extension(name)
    if not extension:
        return name
    return f"{stem}.{extension.lower()}"


def member_role(name: str, whitelist: Iterable[str] = ()) -> ComponentRole:
    """Classify a member name by its extension.

    Args:
        name: Archive member name.
        whitelist: Extra extensions to pass through as their own layers.

    Returns:
        The ComponentRole; IGNORED for anything unrecognized.
    """
    _, extension = split_extension(name)
    extension = extension.lower()
    role = EXTENSION_ROLES.get(extension)
    if role is not None:
        return role
    if extension.endswith(STRUCTURED_SUFFIX):
        return ComponentRole.STRUCTURED
    if extension and extension in {item.lower().lstrip(".") for item in whitelist}:
        return ComponentRole.PASS_THROUGH
    return ComponentRole.IGNORED


def classify_components(
    component_map: ComponentMap,
    whitelist: Optional[Iterable[str]] = None,
    resolver: Optional[SpatialReferenceResolver] = None,
    identifier: Union[str, int, None] = None,
    mode: Union[ProjectionMode, str] = ProjectionMode.STRICT,
    metadata_marker: str = METADATA_MARKER,
) -> ClassifiedComponents:
    """Tag every member by role and collect the layer names.

    ``component_map`` is updated in place: recognized members are stored
    under their canonical name, and ``.prj`` members are replaced with the
    resolved SpatialReference (or None when resolution fails).

    Args:
        component_map: Member name to payload mapping.
        whitelist: Extensions of members to return as-is as their own layers.
        resolver: Resolver for ``.prj`` members.
        identifier: EPSG identifier that overrides every ``.prj`` member.
        mode: Projection resolution mode for ``.prj`` members.
        metadata_marker: Members whose name contains this are skipped.

    Returns:
        ClassifiedComponents with the layer names and the updated map.

    Raises:
        NoLayersFoundError: If no geometry, JSON or whitelisted member exists.
    """
    whitelist = list(whitelist or [])
    resolver = resolver or SpatialReferenceResolver()
    layer_names: list[str] = []

    for name in list(component_map):
        if metadata_marker and metadata_marker in name:
            continue

        role = member_role(name, whitelist)
        key = canonical_name(name)
        logger.debug(f"Member {name!r} classified as {role.value}")

        if role is ComponentRole.GEOMETRY:
            layer_names.append(split_extension(name)[0])
            component_map[key] = component_map[name]
        elif role is ComponentRole.PROJECTION:
            component_map[key] = resolver.resolve(
                component_map[name], identifier=identifier, mode=mode
            )
        elif role in (ComponentRole.STRUCTURED, ComponentRole.PASS_THROUGH):
            layer_names.append(key)
            component_map[key] = component_map[name]
        elif role in (ComponentRole.ATTRIBUTES, ComponentRole.ENCODING):
            component_map[key] = component_map[name]

    if not layer_names:
        raise NoLayersFoundError(
            "No layers found",
            suggestion="The archive needs at least one .shp, .json or whitelisted member",
            details={"members": sorted(component_map)},
        )

    return ClassifiedComponents(layer_names=layer_names, component_map=component_map)
