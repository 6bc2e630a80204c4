"""
Geo Projection

Conversions between tile coordinates, WGS84 longitude/latitude (EPSG:4326)
and Web Mercator meters (EPSG:3857).

Tile math uses the closed-form slippy-map formulas; point transforms between
the two reference systems go through pyproj. None of these functions
validate geographic range: out-of-range input gives mathematically defined
but meaningless output.
"""

import math
from functools import lru_cache
from typing import NamedTuple, Tuple

from pyproj import Transformer
from shapely.geometry import box
from shapely.geometry.base import BaseGeometry

from ..coordinates.coord import Coordinate

WGS84_EPSG = 4326
WEB_MERCATOR_EPSG = 3857

# Earth radius 6378137 m
CIRCUMFERENCE_METERS = 40075016.685578487813
HALF_CIRCUMFERENCE_METERS = 20037508.342789243907

MAX_LONGITUDE = 180.0
MAX_LATITUDE = 90.0

# Distance from an integer below which a tile index is treated as exact
_SNAP_EPSILON = 1e-6


class Point(NamedTuple):
    """A 2D point: longitude/latitude in degrees or easting/northing in meters."""
    x: float
    y: float


class Bounds(NamedTuple):
    """Axis-aligned rectangle in degrees or meters, depending on the producer."""
    minx: float
    miny: float
    maxx: float
    maxy: float

    def to_polygon(self):
        """Return the rectangle as a shapely Polygon."""
        return box(self.minx, self.miny, self.maxx, self.maxy)

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> "Bounds":
        """Bounding box of any shapely geometry."""
        return cls(*geometry.bounds)


@lru_cache(maxsize=None)
def _transformer(source_epsg: int, target_epsg: int) -> Transformer:
    return Transformer.from_crs(source_epsg, target_epsg, always_xy=True)


def _to_tile_index(value: float) -> int:
    nearest = round(value)
    if abs(value - nearest) < _SNAP_EPSILON:
        return int(nearest)
    return int(value)


def coord_to_lnglat(coord: Coordinate) -> Point:
    """Longitude/latitude of the top-left corner of a tile."""
    n = 2.0 ** coord.z
    lng_deg = coord.x / n * 360.0 - 180.0
    lat_rad = math.atan(math.sinh(math.pi * (1 - 2 * coord.y / n)))
    return Point(lng_deg, math.degrees(lat_rad))


def lnglat_to_coord(lnglat: Point, zoom: int) -> Coordinate:
    """Tile containing a longitude/latitude at the given zoom."""
    lng_deg, lat_deg = lnglat
    n = 2.0 ** zoom
    lat_rad = math.radians(lat_deg)
    x = (lng_deg + 180.0) / 360.0 * n
    y = (1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n
    return Coordinate(x=int(x), y=int(y), z=zoom)


def coord_to_bounds(coord: Coordinate) -> Bounds:
    """
    Bounding box of a tile in degrees.

    Tiles on the grid edge can compute corners past the valid range, so
    maxx is clamped to 180 and maxy to 90.
    """
    topleft = coord_to_lnglat(coord)
    bottomright = coord_to_lnglat(Coordinate(coord.x + 1, coord.y + 1, coord.z))
    return Bounds(
        minx=topleft.x,
        miny=bottomright.y,
        maxx=min(MAX_LONGITUDE, bottomright.x),
        maxy=min(MAX_LATITUDE, topleft.y),
    )


def _corner_coords(
    topleft: Coordinate,
    bottomright: Coordinate,
    zoom: int
) -> Tuple[Coordinate, ...]:
    max_index = (1 << zoom) - 1
    bottomright = Coordinate(
        x=min(max_index, bottomright.x),
        y=min(max_index, bottomright.y),
        z=zoom,
    )
    if topleft.x == bottomright.x and topleft.y == bottomright.y:
        return (topleft,)
    return (topleft, bottomright)


def bounds_to_coords(bounds: Bounds, zoom: int) -> Tuple[Coordinate, ...]:
    """
    Tiles covering degree bounds at a zoom level.

    Args:
        bounds: Bounds in degrees
        zoom: Zoom level

    Returns:
        A single coordinate when one tile covers the bounds, otherwise the
        inclusive (top-left, bottom-right) pair. The bottom-right tile is
        clamped to the grid.
    """
    minx, miny, maxx, maxy = bounds
    topleft = lnglat_to_coord(Point(minx, maxy), zoom)
    bottomright = lnglat_to_coord(Point(maxx, miny), zoom)
    return _corner_coords(topleft, bottomright, zoom)


def mercator_to_wgs84(point: Point) -> Point:
    """Web Mercator meters to longitude/latitude degrees."""
    return Point(*_transformer(WEB_MERCATOR_EPSG, WGS84_EPSG).transform(*point))


def wgs84_to_mercator(point: Point) -> Point:
    """Longitude/latitude degrees to Web Mercator meters."""
    return Point(*_transformer(WGS84_EPSG, WEB_MERCATOR_EPSG).transform(*point))


mercator_to_lnglat = mercator_to_wgs84
lnglat_to_mercator = wgs84_to_mercator


def coord_to_mercator(coord: Coordinate) -> Point:
    """Web Mercator position of the top-left corner of a tile."""
    tile_meters = CIRCUMFERENCE_METERS / (2.0 ** coord.z)
    x = coord.x * tile_meters - HALF_CIRCUMFERENCE_METERS
    # tile rows grow downwards from the top of the map
    y = HALF_CIRCUMFERENCE_METERS - coord.y * tile_meters
    return Point(x, y)


def _mercator_tile_position(point: Point, zoom: int) -> Tuple[float, float]:
    mx, my = point
    tile_meters = CIRCUMFERENCE_METERS / (2.0 ** zoom)
    x = (mx + HALF_CIRCUMFERENCE_METERS) / tile_meters
    y = (HALF_CIRCUMFERENCE_METERS - my) / tile_meters
    return x, y


def mercator_to_coord(point: Point, zoom: int) -> Coordinate:
    """
    Tile containing a Web Mercator point at the given zoom.

    Values within a hair of a tile edge snap to that edge, so tile corners
    produced by :func:`coord_to_mercator` map back to the same tile.
    """
    x, y = _mercator_tile_position(point, zoom)
    return Coordinate(x=_to_tile_index(x), y=_to_tile_index(y), z=zoom)


def coord_to_mercator_bounds(coord: Coordinate) -> Bounds:
    """Bounding box of a tile in Web Mercator meters."""
    topleft = coord_to_mercator(coord)
    bottomright = coord_to_mercator(Coordinate(coord.x + 1, coord.y + 1, coord.z))
    return Bounds(
        minx=min(topleft.x, bottomright.x),
        miny=min(topleft.y, bottomright.y),
        maxx=max(topleft.x, bottomright.x),
        maxy=max(topleft.y, bottomright.y),
    )


def mercator_bounds_to_coords(bounds: Bounds, zoom: int) -> Tuple[Coordinate, ...]:
    """
    Tiles covering Web Mercator bounds; same contract as :func:`bounds_to_coords`.

    Only the top-left corner snaps to a nearby tile edge. The bottom-right
    corner truncates, so bounds ending just short of an edge do not pull in
    the next column or row.
    """
    minx, miny, maxx, maxy = bounds
    topleft = mercator_to_coord(Point(minx, maxy), zoom)
    right, bottom = _mercator_tile_position(Point(maxx, miny), zoom)
    bottomright = Coordinate(x=int(right), y=int(bottom), z=zoom)
    return _corner_coords(topleft, bottomright, zoom)
