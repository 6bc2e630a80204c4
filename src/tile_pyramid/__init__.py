"""
Tile Pyramid

Coordinate algebra for quad-tree map tile pyramids: tile addresses and
their string, packed-integer and quadkey forms, conversions to WGS84 and
Web Mercator, and bounded-memory enumeration of tile ranges across zoom
levels.
"""

__version__ = "1.0.0"

from . import coordinates
from . import geo
from . import enumeration
from . import monitoring
from . import utils

from .coordinates import Coordinate
from .geo import Bounds, Point
from .enumeration import EnumerationCursor, CoordinateGroup, PyramidSeeder

__all__ = [
    "coordinates",
    "geo",
    "enumeration",
    "monitoring",
    "utils",
    "Coordinate",
    "Bounds",
    "Point",
    "EnumerationCursor",
    "CoordinateGroup",
    "PyramidSeeder",
]
