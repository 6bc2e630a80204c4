"""
Tile Coordinate

The (x, y, z) address of a tile in a quad-tree pyramid, where zoom level z
is a 2^z by 2^z grid. x is the column, y the row.

This module provides:
- Immutable coordinate values with (z, x, y) total ordering
- Parent/child derivation and zooming between levels
- Grid validity checks
- "z/x/y" string serialization and parsing
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import List, Optional, TextIO

from ..utils.config import MAX_ENCODABLE_ZOOM
from ..utils.exceptions import BufferTooSmallError, CoordinateParseError

# Three integer fields of at most ten digits, an optional trailing newline
# and nothing else
_COORD_PATTERN = re.compile(r"(-?[0-9]{1,10})/(-?[0-9]{1,10})/(-?[0-9]{1,10})\r?\n?")


@total_ordering
@dataclass(frozen=True)
class Coordinate:
    """A tile address: column x, row y, zoom z."""
    x: int
    y: int
    z: int

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    def __lt__(self, other: "Coordinate") -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return (self.z, self.x, self.y) < (other.z, other.x, other.y)

    @property
    def column(self) -> int:
        return self.x

    @property
    def row(self) -> int:
        return self.y

    @property
    def zoom_level(self) -> int:
        return self.z

    def zoom(self, delta: int) -> "Coordinate":
        """
        Move the coordinate ``delta`` levels down (positive) or up (negative).

        Zooming in scales x and y by 2^delta. Zooming out truncates, so every
        tile maps onto the ancestor that contains it.

        Args:
            delta: Number of levels to move

        Returns:
            Coordinate at zoom ``z + delta``
        """
        if delta >= 0:
            return Coordinate(self.x << delta, self.y << delta, self.z + delta)
        shift = -delta
        return Coordinate(self.x >> shift, self.y >> shift, self.z + delta)

    def parent(self) -> Optional["Coordinate"]:
        """Return the containing tile one level up, or None at zoom 0."""
        if self.z <= 0:
            return None
        return Coordinate(self.x >> 1, self.y >> 1, self.z - 1)

    def children(self) -> List["Coordinate"]:
        """
        Return the four tiles one level down.

        Ordered top-left, top-right, bottom-left, bottom-right.
        """
        x = self.x << 1
        y = self.y << 1
        z = self.z + 1
        return [
            Coordinate(x, y, z),
            Coordinate(x + 1, y, z),
            Coordinate(x, y + 1, z),
            Coordinate(x + 1, y + 1, z),
        ]

    def is_valid(self) -> bool:
        """True if x and y fall inside the grid of zoom z."""
        if self.z < 0 or self.x < 0 or self.y < 0:
            return False
        return self.x >> self.z == 0 and self.y >> self.z == 0

    def compare(self, other: "Coordinate") -> int:
        """Return -1, 0 or 1 comparing (z, x, y) lexicographically."""
        lhs = (self.z, self.x, self.y)
        rhs = (other.z, other.x, other.y)
        return (lhs > rhs) - (lhs < rhs)

    def serialize(self, capacity: Optional[int] = None) -> str:
        """
        Render the coordinate as "z/x/y".

        Args:
            capacity: Optional maximum number of characters the destination
                can hold

        Returns:
            The serialized string

        Raises:
            BufferTooSmallError: If the string needs more than ``capacity``
                characters. Nothing is truncated.
        """
        text = str(self)
        if capacity is not None and len(text) > capacity:
            raise BufferTooSmallError(required=len(text), available=capacity)
        return text

    def write(self, stream: TextIO, newline: bool = False) -> None:
        """Write "z/x/y" to a text stream, optionally followed by a newline."""
        stream.write(str(self))
        if newline:
            stream.write("\n")

    @classmethod
    def deserialize(cls, text: str) -> "Coordinate":
        """
        Parse a "z/x/y" string.

        A single trailing newline is accepted. Leading whitespace, signs
        and trailing garbage are rejected, as are zooms above
        MAX_ENCODABLE_ZOOM and coordinates outside the grid of their zoom
        level.

        Raises:
            CoordinateParseError: If the text is malformed or the
                coordinate is not valid
        """
        match = _COORD_PATTERN.fullmatch(text)
        if match is None:
            raise CoordinateParseError(f"Malformed coordinate string: {text!r}")

        z, x, y = (int(group) for group in match.groups())
        if z < 0 or x < 0 or y < 0:
            raise CoordinateParseError(f"Negative coordinate component: {text!r}")
        if z > MAX_ENCODABLE_ZOOM:
            raise CoordinateParseError(
                f"Zoom {z} exceeds the maximum of {MAX_ENCODABLE_ZOOM}: {text!r}"
            )

        coord = cls(x=x, y=y, z=z)
        if not coord.is_valid():
            raise CoordinateParseError(
                f"Coordinate {coord} lies outside the {1 << z}x{1 << z} grid"
            )
        return coord


def zoom(delta: int, coord: Coordinate) -> Coordinate:
    return coord.zoom(delta)


def parent(coord: Coordinate) -> Optional[Coordinate]:
    return coord.parent()


def children(coord: Coordinate) -> List[Coordinate]:
    return coord.children()


def is_valid(coord: Coordinate) -> bool:
    return coord.is_valid()


def compare(lhs: Coordinate, rhs: Coordinate) -> int:
    return lhs.compare(rhs)


def equal(lhs: Coordinate, rhs: Coordinate) -> bool:
    return lhs.compare(rhs) == 0


def serialize(coord: Coordinate, capacity: Optional[int] = None) -> str:
    return coord.serialize(capacity)


def deserialize(text: str) -> Coordinate:
    return Coordinate.deserialize(text)
