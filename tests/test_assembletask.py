"""Tests for the layer assembly task."""

import pytest
from conftest import make_dbf, make_shp, mark_deleted

from shapesmith.tasks.assembletask import LayerAssembler, collect_layer


class RecordingDecoders:
    """Stub decoders that remember their arguments."""

    def __init__(self, geometries, records):
        self.geometries = geometries
        self.records = records
        self.geometry_calls = []
        self.attribute_calls = []

    def geometry(self, data, spatial_reference):
        self.geometry_calls.append((data, spatial_reference))
        return self.geometries

    def attributes(self, data, encoding):
        self.attribute_calls.append((data, encoding))
        return self.records


@pytest.fixture
def decoders():
    geometries = [{"type": "Point", "coordinates": [i, i]} for i in range(3)]
    records = [{"id": i} for i in range(2)]
    return RecordingDecoders(geometries, records)


@pytest.fixture
def assembler(decoders):
    return LayerAssembler(geometry_decoder=decoders.geometry, attribute_decoder=decoders.attributes)


class TestCollectLayer:
    """Tests for collect_layer."""

    def test_geometry_layer(self):
        """Test that sibling members are gathered by base name."""
        components = {"a.shp": b"shp", "a.dbf": b"dbf", "a.cpg": "UTF-8", "a.prj": None}
        layer = collect_layer("a", components)
        assert layer.geometry == b"shp"
        assert layer.attributes == b"dbf"
        assert layer.encoding == "UTF-8"
        assert layer.spatial_reference is None
        assert not layer.is_pass_through

    def test_pass_through_layer(self):
        """Test that structured members keep their extension."""
        layer = collect_layer("b.json", {"b.json": "{}"})
        assert layer.name == "b"
        assert layer.extension == "json"
        assert layer.is_pass_through

    def test_dotted_geometry_name(self):
        """Test that a .shp named like a structured file stays a geometry layer."""
        layer = collect_layer("city.json", {"city.json.shp": b"shp"})
        assert not layer.is_pass_through
        assert layer.geometry == b"shp"


class TestLayerAssembler:
    """Tests for LayerAssembler."""

    def test_geometry_layer_merged_and_tagged(self, assembler, decoders):
        """Test decoding, truncation and fileName tagging."""
        marker = object()
        components = {"a.shp": b"shp", "a.dbf": b"dbf", "a.cpg": "1252", "a.prj": marker}
        result = assembler.assemble("a", components)

        assert result["type"] == "FeatureCollection"
        assert result["fileName"] == "a"
        assert len(result["features"]) == 2
        assert decoders.geometry_calls == [(b"shp", marker)]
        assert decoders.attribute_calls == [(b"dbf", "1252")]

    def test_missing_attribute_table(self, assembler, decoders):
        """Test that a layer without .dbf keeps every geometry."""
        result = assembler.assemble("a", {"a.shp": b"shp"})
        assert len(result["features"]) == 3
        assert all(f["properties"] == {} for f in result["features"])
        assert decoders.attribute_calls == []
        assert decoders.geometry_calls == [(b"shp", None)]

    def test_json_pass_through(self, assembler, decoders):
        """Test that JSON members are parsed and tagged with the base name."""
        components = {"places.json": '{"type": "FeatureCollection", "features": []}'}
        result = assembler.assemble("places.json", components)
        assert result == {"type": "FeatureCollection", "features": [], "fileName": "places"}
        assert decoders.geometry_calls == []

    @pytest.mark.parametrize("name", ["roads.geojson", "roads.TopoJSON"])
    def test_json_flavours_parsed(self, assembler, name):
        """Test that any *json extension is parsed, even when whitelisted."""
        components = {name: '{"type": "FeatureCollection", "features": []}'}
        result = assembler.assemble(name, components, whitelist=["geojson"])
        assert result == {"type": "FeatureCollection", "features": [], "fileName": "roads"}

    def test_whitelisted_pass_through(self, assembler):
        """Test that whitelisted members are returned untouched."""
        result = assembler.assemble("notes.kml", {"notes.kml": "<kml/>"}, whitelist=["kml"])
        assert result == {"fileName": "notes", "content": "<kml/>"}

    def test_decoder_errors_propagate(self):
        """Test that decoder failures are not caught."""

        def broken(data, spatial_reference):
            raise ValueError("bad shp")

        assembler = LayerAssembler(geometry_decoder=broken)
        with pytest.raises(ValueError, match="bad shp"):
            assembler.assemble("a", {"a.shp": b"shp"})

    def test_deleted_record_keeps_pairing(self):
        """Test that a deleted .dbf row does not shift later records."""
        components = {
            "a.shp": make_shp([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]),
            "a.dbf": mark_deleted(make_dbf([("a", 1), ("b", 2), ("c", 3)]), 1),
        }
        result = LayerAssembler().assemble("a", components)
        pairs = [
            (f["geometry"]["coordinates"], f["properties"].get("name"))
            for f in result["features"]
        ]
        assert pairs == [([0.0, 0.0], "a"), ([1.0, 1.0], None), ([2.0, 2.0], "c")]
