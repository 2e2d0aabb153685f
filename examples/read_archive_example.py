"""Example: Reading a zipped shapefile into GeoJSON.

Builds a small Web Mercator point layer in memory, zips it, and reads it
back with Shapesmith, which reprojects the points to longitude/latitude.
"""

import asyncio
import io
import zipfile

import shapefile

from shapesmith import ShapefileReader, to_dataframe

WEB_MERCATOR_PRJ = 'PROJCS["WGS_1984_Web_Mercator_Auxiliary_Sphere"]'


def build_archive() -> bytes:
    """Write a three-point layer with attributes into a zip archive."""
    shp, shx, dbf = io.BytesIO(), io.BytesIO(), io.BytesIO()
    w = shapefile.Writer(shp=shp, shx=shx, dbf=dbf, shapeType=shapefile.POINT)
    w.field("city", "C", size=20)
    for city, x, y in [
        ("Quito", -8738435.0, -24877.0),
        ("Kampala", 3629575.0, 35736.0),
        ("Singapore", 11559745.0, 143836.0),
    ]:
        w.point(x, y)
        w.record(city)
    w.close()

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as z:
        z.writestr("equator.shp", shp.getvalue())
        z.writestr("equator.dbf", dbf.getvalue())
        z.writestr("equator.prj", WEB_MERCATOR_PRJ)
    return buf.getvalue()


def main():
    """Run archive reading example."""
    print("=" * 60)
    print("Zipped Shapefile to GeoJSON Example")
    print("=" * 60)

    print("\n1. Building archive...")
    archive = build_archive()
    print(f"Archive size: {len(archive)} bytes")

    print("\n2. Reading archive...")
    reader = ShapefileReader()
    collection = asyncio.run(reader.parse_archive(archive))
    print(f"Layer {collection['fileName']!r}: {len(collection['features'])} features")

    print("\n3. Reprojected coordinates:")
    frame = to_dataframe(collection)
    for _, row in frame.iterrows():
        lon, lat = row["geometry"]["coordinates"]
        print(f"  {row['city']:<10} lon={lon:9.4f} lat={lat:8.4f}")


if __name__ == "__main__":
    main()
