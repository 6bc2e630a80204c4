"""
Compact Coordinate Encoding

Packs a coordinate into a single 64-bit unsigned integer, laid out from the
low bits up as 5 bits zoom, 29 bits row, 29 bits column and 1 unused bit.

Coordinates with z <= 31 and x, y < 2^29 round-trip exactly. Larger values
overflow into neighbouring fields; that is a limitation of the format.
Sorting by encoded value does not match the (z, x, y) coordinate order
because the zoom occupies the low bits.
"""

from typing import Optional

from .coord import Coordinate

UINT64_MASK = 0xFFFFFFFFFFFFFFFF

ZOOM_BITS = 5
ROW_BITS = 29
COL_BITS = 29

ZOOM_MASK = (1 << ZOOM_BITS) - 1        # 31
ROW_MASK = (1 << ROW_BITS) - 1          # 536870911
COL_MASK = (1 << COL_BITS) - 1          # 536870911
ROW_OFFSET = ZOOM_BITS                  # 5
COL_OFFSET = ZOOM_BITS + ROW_BITS       # 34

# Every bit set except the highest row bit (bit 33)
HIGH_ROW_MASK = 18446744065119617023
# Every bit set except the five zoom bits
ALL_BUT_ZOOM_MASK = 18446744073709551584


def encode(coord: Coordinate) -> int:
    """Pack a coordinate into a 64-bit integer."""
    value = coord.z | (coord.y << ROW_OFFSET) | (coord.x << COL_OFFSET)
    return value & UINT64_MASK


def decode(value: int) -> Coordinate:
    """Unpack a 64-bit integer produced by :func:`encode`."""
    return Coordinate(
        x=COL_MASK & (value >> COL_OFFSET),
        y=ROW_MASK & (value >> ROW_OFFSET),
        z=ZOOM_MASK & value,
    )


def encoded_zoom_up(value: int) -> Optional[int]:
    """
    Compute the encoded parent of an encoded coordinate without decoding it.

    Shifting the whole value right by one halves row and column at once,
    but the lowest column bit drops into the top of the row field, so that
    bit is cleared before the zoom bits are replaced with ``zoom - 1``.

    Args:
        value: Encoded coordinate

    Returns:
        Encoded parent, or None when the encoded zoom is 0
    """
    zoom = ZOOM_MASK & value
    if zoom == 0:
        return None

    shifted = ((value & UINT64_MASK) >> 1) & HIGH_ROW_MASK
    return (shifted & ALL_BUT_ZOOM_MASK) | (zoom - 1)
