"""
Tile Pyramid Exceptions

Error taxonomy for coordinate parsing, serialization and quadkey decoding.
Every failure is deterministic: malformed input always fails the same way
and nothing is retried.
"""


class TilePyramidError(Exception):
    """Base class for all tile pyramid errors."""


class ValidationError(TilePyramidError, ValueError):
    """Raised when input cannot be turned into a valid value."""


class BufferTooSmallError(ValidationError):
    """Raised when a serialized coordinate does not fit the destination."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Serialized coordinate needs {required} characters, "
            f"only {available} available"
        )


class CoordinateParseError(ValidationError):
    """Raised when a "z/x/y" string cannot be parsed into a valid coordinate."""


class QuadkeyParseError(ValidationError):
    """Raised when a quadkey contains a character outside '0'..'3'."""
