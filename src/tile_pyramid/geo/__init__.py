"""
Geo Module

Tile coordinate conversions to and from WGS84 degrees and Web Mercator
meters, plus the Point and Bounds value types.
"""

from .projection import (
    Point,
    Bounds,
    coord_to_lnglat,
    lnglat_to_coord,
    coord_to_bounds,
    bounds_to_coords,
    mercator_to_wgs84,
    wgs84_to_mercator,
    mercator_to_lnglat,
    lnglat_to_mercator,
    coord_to_mercator,
    mercator_to_coord,
    coord_to_mercator_bounds,
    mercator_bounds_to_coords,
)

__all__ = [
    "Point",
    "Bounds",
    "coord_to_lnglat",
    "lnglat_to_coord",
    "coord_to_bounds",
    "bounds_to_coords",
    "mercator_to_wgs84",
    "wgs84_to_mercator",
    "mercator_to_lnglat",
    "lnglat_to_mercator",
    "coord_to_mercator",
    "mercator_to_coord",
    "coord_to_mercator_bounds",
    "mercator_bounds_to_coords",
]
