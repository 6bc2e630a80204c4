"""
Coordinates Module

The tile address value type and its codecs: "z/x/y" strings, the packed
64-bit integer form and quadkeys.
"""

from .coord import Coordinate
from .encoding import encode, decode, encoded_zoom_up
from .quadkey import coord_to_quadkey, quadkey_to_coord

__all__ = [
    "Coordinate",
    "encode",
    "decode",
    "encoded_zoom_up",
    "coord_to_quadkey",
    "quadkey_to_coord",
]
