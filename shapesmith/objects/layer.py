"""Layer and component-map data structures.

A component map is the flat ``member name -> payload`` view of an archive or
fetched file set. The classifier turns it into a list of layer names; a
``Layer`` gathers the members that share one base name.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

ComponentMap = dict[str, Any]


class ComponentRole(str, Enum):
    """Role of an archive member, derived from its extension."""

    GEOMETRY = "geometry"
    ATTRIBUTES = "attributes"
    ENCODING = "encoding"
    PROJECTION = "projection"
    STRUCTURED = "structured"
    PASS_THROUGH = "pass_through"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ClassifiedComponents:
    """Result of classifying a component map.

    Attributes:
        layer_names: Layer names in member order. Geometry layers are stored
            by base name; structured and pass-through layers keep their
            canonical extension.
        component_map: The same map, with recognized members re-keyed under
            a lower-case extension.
    """

    layer_names: list[str]
    component_map: ComponentMap


@dataclass
class Layer:
    """One logical geometry+attributes unit derived from a shared base name.

    Attributes:
        name: Base member name with the extension stripped.
        geometry: Raw ``.shp`` bytes.
        attributes: Raw ``.dbf`` bytes.
        encoding: ``.cpg`` contents naming the attribute text encoding.
        spatial_reference: Resolved ``.prj`` transform, or None.
        payload: Already-structured content for pass-through members.
        extension: Canonical extension of a pass-through member.
    """

    name: str
    geometry: Optional[bytes] = None
    attributes: Optional[bytes] = None
    encoding: Optional[Union[str, bytes]] = None
    spatial_reference: Optional[Any] = None
    payload: Optional[Any] = None
    extension: Optional[str] = None

    @property
    def is_pass_through(self) -> bool:
        return self.extension is not None
