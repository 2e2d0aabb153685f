"""Tests for the pyshp-backed decoders."""

import io

import pytest
import shapefile
from conftest import MERCATOR_DEGREE, make_dbf, make_shp, mark_deleted

from shapesmith.primitives.decoders import (
    decode_attributes,
    decode_geometry,
    reproject_coordinates,
    resolve_encoding,
)
from shapesmith.primitives.spatial_reference import SpatialReferenceResolver


@pytest.fixture
def mercator():
    return SpatialReferenceResolver().resolve_by_identifier("3857")


class TestDecodeGeometry:
    """Tests for decode_geometry."""

    def test_points_unprojected(self, point_shp, points):
        """Test that points decode in file order without a projection."""
        geometries = decode_geometry(point_shp)
        assert [g["type"] for g in geometries] == ["Point"] * len(points)
        assert [g["coordinates"] for g in geometries] == [list(p) for p in points]

    def test_points_reprojected(self, mercator):
        """Test that a spatial reference reprojects every position."""
        geometries = decode_geometry(make_shp([(MERCATOR_DEGREE, 0.0)]), mercator)
        assert geometries[0]["coordinates"] == pytest.approx([1.0, 0.0], abs=1e-9)

    def test_polygon_and_null_shapes(self):
        """Test polygons decode and null shapes become None."""
        shp, shx = io.BytesIO(), io.BytesIO()
        w = shapefile.Writer(shp=shp, shx=shx, shapeType=shapefile.POLYGON)
        w.poly([[[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]])
        w.null()
        w.close()

        geometries = decode_geometry(shp.getvalue())
        assert len(geometries) == 2
        assert geometries[0]["type"] == "Polygon"
        assert len(geometries[0]["coordinates"][0]) == 5
        assert geometries[1] is None

    def test_malformed_bytes_propagate(self):
        """Test that decoder errors are not swallowed."""
        with pytest.raises(Exception):
            decode_geometry(b"not a shapefile at all")


class TestReprojectCoordinates:
    """Tests for reproject_coordinates."""

    def test_nested_structure_preserved(self, mercator):
        """Test that nesting depth survives reprojection."""
        rings = [[(0.0, 0.0), (MERCATOR_DEGREE, 0.0)], [(0.0, 0.0), (0.0, 0.0)]]
        result = reproject_coordinates([rings], mercator)
        assert len(result) == 1
        assert len(result[0]) == 2
        assert result[0][0][1] == pytest.approx([1.0, 0.0], abs=1e-9)

    def test_without_spatial_reference(self):
        """Test that tuples are converted to lists unchanged."""
        assert reproject_coordinates([(1.0, 2.0)], None) == [[1.0, 2.0]]
        assert reproject_coordinates((1.0, 2.0), None) == [1.0, 2.0]
        assert reproject_coordinates((), None) == []


class TestDecodeAttributes:
    """Tests for decode_attributes."""

    def test_records(self, point_dbf, rows):
        """Test that records decode to dicts in file order."""
        records = decode_attributes(point_dbf)
        assert records == [{"name": name, "value": value} for name, value in rows]

    def test_code_page_from_cpg(self):
        """Test that the .cpg code page is used to decode text."""
        dbf = make_dbf([("café", 1)], encoding="cp1252")
        assert decode_attributes(dbf, b"1252")[0]["name"] == "café"
        assert decode_attributes(dbf, "windows-1252")[0]["name"] == "café"

    def test_undecodable_text_replaced(self):
        """Test that bytes invalid in the code page do not raise."""
        dbf = make_dbf([("café", 1)], encoding="cp1252")
        name = decode_attributes(dbf)[0]["name"]
        assert name.startswith("caf")
        assert "�" in name

    def test_deleted_record_keeps_slot(self, point_dbf):
        """Test that a deleted row becomes an empty dict in its own position."""
        records = decode_attributes(mark_deleted(point_dbf, 1))
        assert records == [{"name": "alpha", "value": 1}, {}, {"name": "gamma", "value": 3}]


class TestResolveEncoding:
    """Tests for resolve_encoding."""

    @pytest.mark.parametrize(
        "cpg, expected",
        [
            (None, "utf-8"),
            ("", "utf-8"),
            ("UTF-8", "utf-8"),
            (b"UTF-8\r\n", "utf-8"),
            ("1252", "cp1252"),
            ("ISO-8859-1", "iso8859-1"),
            ("not-a-codec", "utf-8"),
        ],
    )
    def test_resolve_encoding(self, cpg, expected):
        """Test mapping .cpg contents to codec names."""
        assert resolve_encoding(cpg) == expected
