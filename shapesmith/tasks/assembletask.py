"""Layer assembly task.

Layer 3: Tasks - turns one classified layer into its output object by
calling the decoders and merging their results.
"""

import json
import logging
from typing import Any, Callable, Optional

from shapesmith.objects.layer import ComponentMap, ComponentRole, Layer
from shapesmith.primitives.classify import STRUCTURED_SUFFIX, member_role, split_extension
from shapesmith.primitives.decoders import decode_attributes, decode_geometry
from shapesmith.primitives.features import combine, tag_file_name

logger = logging.getLogger(__name__)


def collect_layer(
    layer_name: str, component_map: ComponentMap, whitelist: Optional[list[str]] = None
) -> Layer:
    """Gather the members belonging to ``layer_name`` into a Layer.

    Args:
        layer_name: A name produced by the classifier.
        component_map: Classified component map.
        whitelist: Whitelisted pass-through extensions.

    Returns:
        Layer with its members filled in.
    """
    role = member_role(layer_name, whitelist or [])
    is_geometry_layer = f"{layer_name}.shp" in component_map
    if not is_geometry_layer and role in (
        ComponentRole.STRUCTURED,
        ComponentRole.PASS_THROUGH,
    ):
        stem, extension = split_extension(layer_name)
        return Layer(name=stem, payload=component_map[layer_name], extension=extension)

    return Layer(
        name=layer_name,
        geometry=component_map.get(f"{layer_name}.shp"),
        attributes=component_map.get(f"{layer_name}.dbf"),
        encoding=component_map.get(f"{layer_name}.cpg"),
        spatial_reference=component_map.get(f"{layer_name}.prj"),
    )


class LayerAssembler:
    """Decode and merge the members of one layer.

    Args:
        geometry_decoder: ``(bytes, SpatialReference | None) -> list``.
        attribute_decoder: ``(bytes, encoding) -> list[dict]``.
    """

    def __init__(
        self,
        geometry_decoder: Callable[..., list] = decode_geometry,
        attribute_decoder: Callable[..., list] = decode_attributes,
    ):
        self.geometry_decoder = geometry_decoder
        self.attribute_decoder = attribute_decoder

    def assemble_layer(self, layer: Layer) -> Any:
        """Build the output object for a collected Layer."""
        if layer.is_pass_through:
            payload = layer.payload
            if layer.extension.lower().endswith(STRUCTURED_SUFFIX):
                payload = json.loads(payload)
            return tag_file_name(payload, layer.name)

        records = None
        if layer.attributes:
            records = self.attribute_decoder(layer.attributes, layer.encoding)
        geometries = self.geometry_decoder(layer.geometry, layer.spatial_reference)

        if records is not None and len(records) != len(geometries):
            logger.warning(
                f"Layer {layer.name!r} has {len(geometries)} geometries and "
                f"{len(records)} records; keeping the first "
                f"{min(len(geometries), len(records))}"
            )
        collection = combine(geometries, records)
        logger.info(f"Assembled layer {layer.name!r} with {len(collection['features'])} features")
        return tag_file_name(collection, layer.name)

    def assemble(
        self,
        layer_name: str,
        component_map: ComponentMap,
        whitelist: Optional[list[str]] = None,
    ) -> Any:
        """Assemble ``layer_name`` from a classified component map.

        Returns:
            A FeatureCollection dict tagged with ``fileName``, or the
            pass-through payload tagged the same way.
        """
        return self.assemble_layer(collect_layer(layer_name, component_map, whitelist))
