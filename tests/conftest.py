"""Shared fixtures: in-memory shapefiles and archives built with pyshp."""

import io
import struct
import zipfile

import pytest
import shapefile

WGS84_PRJ = (
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",'
    'SPHEROID["WGS_1984",6378137.0,298.257223563]],'
    'PRIMEM["Greenwich",0.0],UNIT["Degree",0.0174532925199433]]'
)

WEB_MERCATOR_PRJ = (
    'PROJCS["WGS_1984_Web_Mercator_Auxiliary_Sphere",'
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",'
    'SPHEROID["WGS_1984",6378137.0,298.257223563]],'
    'PRIMEM["Greenwich",0.0],UNIT["Degree",0.0174532925199433]],'
    'PROJECTION["Mercator_Auxiliary_Sphere"],PARAMETER["False_Easting",0.0],'
    'PARAMETER["False_Northing",0.0],PARAMETER["Central_Meridian",0.0],'
    'PARAMETER["Standard_Parallel_1",0.0],PARAMETER["Auxiliary_Sphere_Type",0.0],'
    'UNIT["Meter",1.0]]'
)

# One degree of longitude at the equator in Web Mercator metres.
MERCATOR_DEGREE = 111319.49079327357

MERCATOR_PROJ4 = (
    "+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 "
    "+x_0=0 +y_0=0 +k=1 +units=m +no_defs"
)


def make_shp(points):
    """Build ``.shp`` bytes holding one point per (x, y) pair."""
    shp, shx = io.BytesIO(), io.BytesIO()
    w = shapefile.Writer(shp=shp, shx=shx, shapeType=shapefile.POINT)
    for x, y in points:
        w.point(x, y)
    w.close()
    return shp.getvalue()


def make_dbf(rows, encoding="utf-8"):
    """Build ``.dbf`` bytes with a ``name`` and ``value`` column."""
    dbf = io.BytesIO()
    w = shapefile.Writer(dbf=dbf, encoding=encoding)
    w.field("name", "C", size=40)
    w.field("value", "N", size=10, decimal=0)
    for row in rows:
        w.record(*row)
    w.close()
    return dbf.getvalue()


def mark_deleted(dbf, index):
    """Flag row ``index`` of ``.dbf`` bytes as deleted."""
    header_length, record_length = struct.unpack("<HH", dbf[8:12])
    data = bytearray(dbf)
    data[header_length + index * record_length] = ord("*")
    return bytes(data)


def make_zip(members):
    """Zip a ``{name: content}`` mapping into archive bytes."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as z:
        for name, content in members.items():
            z.writestr(name, content)
    return buf.getvalue()


@pytest.fixture
def points():
    return [(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)]


@pytest.fixture
def rows():
    return [("alpha", 1), ("beta", 2), ("gamma", 3)]


@pytest.fixture
def point_shp(points):
    return make_shp(points)


@pytest.fixture
def point_dbf(rows):
    return make_dbf(rows)


@pytest.fixture
def layer_archive(point_shp, point_dbf):
    """Archive with one WGS84 point layer named ``layer``."""
    return make_zip(
        {
            "layer.shp": point_shp,
            "layer.dbf": point_dbf,
            "layer.prj": WGS84_PRJ,
        }
    )
