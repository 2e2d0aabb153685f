"""Tests for zip archive extraction."""

import asyncio

import pytest
from conftest import make_zip

from shapesmith.utils.errors import InvalidArchiveError, InvalidInputError
from shapesmith.workflows.archive import extract_archive, read_archive


class TestReadArchive:
    """Tests for read_archive."""

    def test_member_types(self):
        """Test that .shp/.dbf stay bytes and other members become text."""
        data = make_zip(
            {"a.SHP": b"\x00\x01", "a.dbf": b"\x03", "a.prj": "GEOGCS[]", "a.cpg": "UTF-8"}
        )
        members = read_archive(data)
        assert members == {
            "a.SHP": b"\x00\x01",
            "a.dbf": b"\x03",
            "a.prj": "GEOGCS[]",
            "a.cpg": "UTF-8",
        }

    def test_directories_skipped(self):
        """Test that directory entries are not returned."""
        data = make_zip({"nested/": "", "nested/a.shp": b"\x00"})
        assert list(read_archive(data)) == ["nested/a.shp"]

    def test_invalid_archive(self):
        """Test that non-zip bytes raise InvalidArchiveError."""
        with pytest.raises(InvalidArchiveError) as exc_info:
            read_archive(b"definitely not a zip")
        assert isinstance(exc_info.value, InvalidInputError)

    def test_async_extract(self):
        """Test the event-loop friendly wrapper."""
        members = asyncio.run(extract_archive(make_zip({"a.shp": b"\x00"})))
        assert members == {"a.shp": b"\x00"}
