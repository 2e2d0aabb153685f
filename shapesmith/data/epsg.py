"""Static spatial-reference tables.

``EPSG_DEFINITIONS`` maps an EPSG identifier to a PROJ definition string.
``PROJECTION_PATTERNS`` lists, in match order, the substrings that identify
a known coordinate system inside a verbose ``.prj`` description. Entries are
checked top to bottom and the first hit wins, so the more specific names
must come first.
"""

from dataclasses import dataclass

_WEB_MERCATOR = (
    "+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 "
    "+x_0=0 +y_0=0 +k=1 +units=m +no_defs"
)
_CGCS2000_GK = (
    "+proj=tmerc +lat_0=0 +lon_0={lon_0} +k=1 +x_0={x_0} +y_0=0 "
    "+ellps=GRS80 +units=m +no_defs"
)

# CGCS2000 3-degree Gauss-Kruger, zones 25..45 (EPSG:4513..4533) carry the
# zone number in the false easting; the CM variants (EPSG:4534..4554) do not.
_GK_ZONES = range(25, 46)


@dataclass(frozen=True)
class ProjectionPattern:
    """A reference-table row: identifier plus substrings that select it."""

    identifier: str
    match_substrings: tuple[str, ...]


EPSG_DEFINITIONS: dict[str, str] = {
    "4326": "+proj=longlat +datum=WGS84 +no_defs",
    "4490": "+proj=longlat +ellps=GRS80 +no_defs",
    "3857": _WEB_MERCATOR,
    "900913": _WEB_MERCATOR,
}
EPSG_DEFINITIONS.update(
    {
        str(4513 + i): _CGCS2000_GK.format(lon_0=zone * 3, x_0=f"{zone}500000")
        for i, zone in enumerate(_GK_ZONES)
    }
)
EPSG_DEFINITIONS.update(
    {
        str(4534 + i): _CGCS2000_GK.format(lon_0=zone * 3, x_0="500000")
        for i, zone in enumerate(_GK_ZONES)
    }
)

PROJECTION_PATTERNS: list[ProjectionPattern] = [
    ProjectionPattern(
        "3857",
        (
            "WGS_1984_Web_Mercator",
            "WGS_84_Pseudo_Mercator",
            "Popular Visualisation CRS / Mercator",
        ),
    ),
    *(
        ProjectionPattern(
            str(4513 + i), (f'CGCS2000_3_Degree_GK_Zone_{zone}"',)
        )
        for i, zone in enumerate(_GK_ZONES)
    ),
    *(
        ProjectionPattern(
            str(4534 + i), (f'CGCS2000_3_Degree_GK_CM_{zone * 3}E"',)
        )
        for i, zone in enumerate(_GK_ZONES)
    ),
]
