"""
Tile Enumeration

Walks ranges of tile coordinates across zoom levels, ascending by zoom.

Traversal modes:
- Whole zoom range: every tile of every level
- Column/row rectangle projected down through a zoom range
- Geographic bounds, re-derived from the bounds at each level
- Ancestor chain from a tile up to a zoom level
- Resumable batches driven by an explicit cursor, so a whole-pyramid walk
  never holds more than one batch in memory

The first four are generators. ``for_each`` adapts any of them to a
callback taking the coordinate and an opaque caller value.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Tuple

import structlog

from ..coordinates.coord import Coordinate
from ..geo.projection import Bounds, bounds_to_coords, mercator_bounds_to_coords
from ..utils.exceptions import ValidationError

logger = structlog.get_logger(__name__)

CoordCallback = Callable[[Coordinate, Any], None]


@dataclass
class EnumerationCursor:
    """
    Saved position of a resumable traversal.

    (x, y, z) is the next tile to produce; zoom_until is the last zoom level
    included. Once the traversal completes the cursor sits past zoom_until.
    """
    x: int = 0
    y: int = 0
    z: int = 0
    zoom_until: int = 0

    @property
    def is_exhausted(self) -> bool:
        return self.z > self.zoom_until


@dataclass
class CoordinateGroup:
    """Fixed-capacity output batch reused across resumable calls."""
    capacity: int
    coords: List[Coordinate] = field(default_factory=list)

    def __post_init__(self):
        if self.capacity < 1:
            raise ValidationError(f"Batch capacity must be at least 1, got {self.capacity}")

    @property
    def n(self) -> int:
        """Number of coordinates written by the last fill."""
        return len(self.coords)

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.coords)


def for_zoom_range(zoom_start: int, zoom_until: int) -> Iterator[Coordinate]:
    """Yield every tile at each zoom in [zoom_start, zoom_until]."""
    for z in range(zoom_start, zoom_until + 1):
        limit = 1 << z
        for x in range(limit):
            for y in range(limit):
                yield Coordinate(x=x, y=y, z=z)


def for_zoom_range_batch(cursor: EnumerationCursor, group: CoordinateGroup) -> bool:
    """
    Fill ``group`` with the next tiles of a whole-range traversal.

    Traversal resumes exactly at the cursor and follows the order of
    :func:`for_zoom_range`. The group is cleared first; afterwards
    ``group.n`` is the number of tiles written.

    Args:
        cursor: Traversal position, updated in place
        group: Output batch, overwritten in place

    Returns:
        True when the traversal reached zoom_until with room to spare,
        False when the batch filled first. In the latter case the cursor
        holds the next unvisited tile.
    """
    coords = group.coords
    coords.clear()
    capacity = group.capacity

    x, y, z = cursor.x, cursor.y, cursor.z
    while z <= cursor.zoom_until:
        limit = 1 << z
        while x < limit:
            while y < limit:
                if len(coords) >= capacity:
                    cursor.x, cursor.y, cursor.z = x, y, z
                    logger.debug(
                        "Coordinate batch filled",
                        n=len(coords),
                        next_coord=f"{z}/{x}/{y}"
                    )
                    return False
                coords.append(Coordinate(x=x, y=y, z=z))
                y += 1
            y = 0
            x += 1
        x = 0
        z += 1

    cursor.x, cursor.y, cursor.z = 0, 0, max(z, cursor.zoom_until + 1)
    logger.debug("Coordinate traversal complete", n=len(coords), zoom_until=cursor.zoom_until)
    return True


def iter_batches(
    zoom_start: int,
    zoom_until: int,
    batch_size: int
) -> Iterator[List[Coordinate]]:
    """
    Yield successive batches of at most ``batch_size`` tiles over a zoom range.

    Each yielded list is a fresh copy, so callers may keep it.
    """
    cursor = EnumerationCursor(z=zoom_start, zoom_until=zoom_until)
    group = CoordinateGroup(capacity=batch_size)
    while True:
        complete = for_zoom_range_batch(cursor, group)
        if group.n:
            yield list(group.coords)
        if complete:
            return


def for_coord_zoom_range(
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    start_zoom: int,
    end_zoom: int
) -> Iterator[Coordinate]:
    """
    Yield the tiles under a column/row rectangle at each zoom level.

    The inclusive rectangle is given at ``start_zoom`` and scaled by
    2^(z - start_zoom) at each deeper level up to ``end_zoom`` inclusive.
    """
    multiplier = 1
    for z in range(start_zoom, end_zoom + 1):
        for x in range(start_x * multiplier, (end_x + 1) * multiplier):
            for y in range(start_y * multiplier, (end_y + 1) * multiplier):
                yield Coordinate(x=x, y=y, z=z)
        multiplier *= 2


def _tile_range(coords: Tuple[Coordinate, ...]) -> Tuple[int, int, int, int]:
    start, until = coords[0], coords[-1]
    return start.x, start.y, until.x, until.y


def _for_covering_range(
    to_coords: Callable[[Bounds, int], Tuple[Coordinate, ...]],
    bounds: Bounds,
    zoom_start: int,
    zoom_until: int
) -> Iterator[Coordinate]:
    for z in range(zoom_start, zoom_until + 1):
        start_x, start_y, until_x, until_y = _tile_range(to_coords(bounds, z))
        logger.debug(
            "Enumerating bounds at zoom",
            zoom=z,
            columns=until_x - start_x + 1,
            rows=until_y - start_y + 1
        )
        for y in range(start_y, until_y + 1):
            for x in range(start_x, until_x + 1):
                yield Coordinate(x=x, y=y, z=z)


def for_bounds(bounds: Bounds, zoom_start: int, zoom_until: int) -> Iterator[Coordinate]:
    """
    Yield the tiles covering degree bounds at each zoom level.

    The covering rectangle is recomputed from the bounds at every level
    rather than doubled from the previous one, so grid-edge clamping never
    drifts.
    """
    return _for_covering_range(bounds_to_coords, bounds, zoom_start, zoom_until)


def for_mercator_bounds(bounds: Bounds, zoom_start: int, zoom_until: int) -> Iterator[Coordinate]:
    """Yield the tiles covering Web Mercator bounds at each zoom level."""
    return _for_covering_range(mercator_bounds_to_coords, bounds, zoom_start, zoom_until)


def for_coord_parents(start: Coordinate, zoom_until: int) -> Iterator[Coordinate]:
    """
    Yield ``start`` and its ancestors, descending in zoom, down to ``zoom_until``.

    Stops at zoom 0 regardless of ``zoom_until``.
    """
    coord = start
    while coord is not None and coord.z >= zoom_until:
        yield coord
        coord = coord.parent()


def for_each(coords: Iterable[Coordinate], for_coord: CoordCallback, userdata: Any = None) -> None:
    """Invoke ``for_coord(coord, userdata)`` for every coordinate."""
    for coord in coords:
        for_coord(coord, userdata)


def n_for_zoom(zoom: int) -> int:
    """Total number of tiles in zoom levels 0 through ``zoom``."""
    # geometric series, each level holds four times the tiles of the last
    return (4 ** (zoom + 1) - 1) // 3
