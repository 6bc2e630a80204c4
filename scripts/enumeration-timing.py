#!/usr/bin/env python3
"""
Enumeration Timing

Times a full callback traversal of a zoom range against the cursor-driven
batch traversal of the same range.
"""

import os
import sys
import time
from pathlib import Path

import structlog

sys.path.append(str(Path(__file__).parent.parent / "src"))

from tile_pyramid.enumeration import (
    CoordinateGroup,
    EnumerationCursor,
    for_each,
    for_zoom_range,
    for_zoom_range_batch,
    n_for_zoom,
)
from tile_pyramid.utils import Config, ValidationError, configure_from_config

# Configuration: batch size, log settings and zoom ceiling come from the
# TILE_PYRAMID_* variables, the timed zoom range from ZOOM_START / ZOOM_UNTIL
CONFIG = Config.from_env()
ZOOM_START = int(os.getenv("ZOOM_START", "0"))
ZOOM_UNTIL = int(os.getenv("ZOOM_UNTIL", "10"))
BATCH_SIZE = CONFIG.batch_size

configure_from_config(CONFIG)
logger = structlog.get_logger()


def _noop(coord, userdata):
    pass


def time_callback_traversal() -> float:
    start = time.time()
    for_each(for_zoom_range(ZOOM_START, ZOOM_UNTIL), _noop)
    return time.time() - start


def time_batch_traversal() -> float:
    cursor = EnumerationCursor(z=ZOOM_START, zoom_until=ZOOM_UNTIL)
    group = CoordinateGroup(capacity=BATCH_SIZE)
    start = time.time()
    while not for_zoom_range_batch(cursor, group):
        pass
    return time.time() - start


def main():
    if not 0 <= ZOOM_START <= ZOOM_UNTIL <= CONFIG.max_zoom:
        raise ValidationError(
            f"Zoom range must lie within 0..{CONFIG.max_zoom}, got {ZOOM_START}..{ZOOM_UNTIL}"
        )

    logger.info(
        "Timing zoom range traversal",
        zoom_start=ZOOM_START,
        zoom_until=ZOOM_UNTIL,
        batch_size=BATCH_SIZE,
        tiles=n_for_zoom(ZOOM_UNTIL) - (n_for_zoom(ZOOM_START - 1) if ZOOM_START > 0 else 0)
    )
    logger.info("Callback traversal finished", seconds=round(time_callback_traversal(), 3))
    logger.info("Batch traversal finished", seconds=round(time_batch_traversal(), 3))


if __name__ == "__main__":
    main()
