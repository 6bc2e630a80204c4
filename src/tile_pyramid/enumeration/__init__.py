"""
Enumeration Module

Traversal of tile ranges across zoom levels: generators for whole ranges,
rectangles, bounds and ancestor chains, the cursor-driven batch engine,
and the seeder that feeds packed batches to a sink.
"""

from .tile_enumerator import (
    EnumerationCursor,
    CoordinateGroup,
    for_zoom_range,
    for_zoom_range_batch,
    iter_batches,
    for_coord_zoom_range,
    for_bounds,
    for_mercator_bounds,
    for_coord_parents,
    for_each,
    n_for_zoom,
)
from .pyramid_seeder import PyramidSeeder

__all__ = [
    "EnumerationCursor",
    "CoordinateGroup",
    "for_zoom_range",
    "for_zoom_range_batch",
    "iter_batches",
    "for_coord_zoom_range",
    "for_bounds",
    "for_mercator_bounds",
    "for_coord_parents",
    "for_each",
    "n_for_zoom",
    "PyramidSeeder",
]
