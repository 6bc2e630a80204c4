"""
Quadkey Codec

Bing-maps-style tile keys: one base-4 digit per zoom level, most significant
level first. Bit i of x contributes 1 and bit i of y contributes 2.
"""

from .coord import Coordinate
from ..utils.exceptions import QuadkeyParseError

_DIGITS = "0123"


def coord_to_quadkey(coord: Coordinate) -> str:
    """Return the quadkey of a coordinate; zoom 0 yields an empty string."""
    digits = []
    for i in range(coord.z, 0, -1):
        mask = 1 << (i - 1)
        digit = 0
        if coord.x & mask:
            digit += 1
        if coord.y & mask:
            digit += 2
        digits.append(_DIGITS[digit])
    return "".join(digits)


def quadkey_to_coord(quadkey: str) -> Coordinate:
    """
    Decode a quadkey into a coordinate whose zoom is the key length.

    Raises:
        QuadkeyParseError: If any character is outside '0'..'3'
    """
    x = y = 0
    z = len(quadkey)
    for position, char in enumerate(quadkey):
        mask = 1 << (z - position - 1)
        if char == "0":
            continue
        elif char == "1":
            x |= mask
        elif char == "2":
            y |= mask
        elif char == "3":
            x |= mask
            y |= mask
        else:
            raise QuadkeyParseError(
                f"Invalid quadkey digit {char!r} at position {position} in {quadkey!r}"
            )
    return Coordinate(x=x, y=y, z=z)
