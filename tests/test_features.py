"""Tests for feature collection assembly helpers."""

import pandas as pd

from shapesmith.primitives.features import combine, tag_file_name, to_dataframe


def _point(x):
    return {"type": "Point", "coordinates": [x, 0.0]}


class TestCombine:
    """Tests for combine."""

    def test_equal_lengths(self):
        """Test positional pairing of equal-length sequences."""
        geometries = [_point(1), _point(2)]
        records = [{"id": 1}, {"id": 2}]
        collection = combine(geometries, records)
        assert collection["type"] == "FeatureCollection"
        assert [f["type"] for f in collection["features"]] == ["Feature", "Feature"]

    def test_truncates_to_fewer_records(self):
        """Test that extra geometries are dropped."""
        geometries = [_point(i) for i in range(5)]
        records = [{"id": i} for i in range(3)]
        features = combine(geometries, records)["features"]
        assert len(features) == 3
        for i, feature in enumerate(features):
            assert feature["geometry"] is geometries[i]
            assert feature["properties"] is records[i]

    def test_truncates_to_fewer_geometries(self):
        """Test that extra records are dropped."""
        geometries = [_point(0)]
        records = [{"id": 0}, {"id": 1}]
        assert len(combine(geometries, records)["features"]) == 1

    def test_without_records(self):
        """Test that a missing attribute table gives empty properties."""
        features = combine([_point(0), None])["features"]
        assert len(features) == 2
        assert features[0]["properties"] == {}
        assert features[1]["geometry"] is None

    def test_empty(self):
        """Test combining empty sequences."""
        assert combine([], [])["features"] == []


class TestTagFileName:
    """Tests for tag_file_name."""

    def test_dict_tagged_in_place(self):
        """Test that dict results gain a fileName key."""
        result = {"type": "FeatureCollection", "features": []}
        assert tag_file_name(result, "roads") is result
        assert result["fileName"] == "roads"

    def test_non_dict_wrapped(self):
        """Test that other payloads are wrapped with their fileName."""
        assert tag_file_name("<kml/>", "places") == {"fileName": "places", "content": "<kml/>"}


class TestToDataFrame:
    """Tests for to_dataframe."""

    def test_columns(self):
        """Test that properties become columns next to the geometry."""
        collection = combine([_point(1), _point(2)], [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        frame = to_dataframe(collection)
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["id", "name", "geometry"]
        assert frame["id"].tolist() == [1, 2]
        assert frame["geometry"].iloc[0] == _point(1)

    def test_empty_collection(self):
        """Test an empty collection gives an empty frame."""
        frame = to_dataframe({"type": "FeatureCollection", "features": []})
        assert len(frame) == 0
        assert "geometry" in frame.columns
