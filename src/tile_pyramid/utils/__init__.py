"""
Utilities

Configuration, structured logging setup and the error taxonomy shared by
the coordinate, geo and enumeration modules.
"""

from .config import Config, MAX_ENCODABLE_ZOOM
from .exceptions import (
    TilePyramidError,
    ValidationError,
    BufferTooSmallError,
    CoordinateParseError,
    QuadkeyParseError,
)
from .logging_setup import configure_logging, configure_from_config

__all__ = [
    "Config",
    "MAX_ENCODABLE_ZOOM",
    "TilePyramidError",
    "ValidationError",
    "BufferTooSmallError",
    "CoordinateParseError",
    "QuadkeyParseError",
    "configure_logging",
    "configure_from_config",
]
