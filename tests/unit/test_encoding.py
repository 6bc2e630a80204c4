"""
Unit Tests for the Packed Coordinate Encoding and Quadkeys
"""

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent.parent / "src"))

from tile_pyramid.coordinates.coord import Coordinate
from tile_pyramid.coordinates.encoding import (
    ALL_BUT_ZOOM_MASK,
    HIGH_ROW_MASK,
    UINT64_MASK,
    decode,
    encode,
    encoded_zoom_up,
)
from tile_pyramid.coordinates.quadkey import coord_to_quadkey, quadkey_to_coord
from tile_pyramid.enumeration.tile_enumerator import for_zoom_range
from tile_pyramid.utils.exceptions import QuadkeyParseError


class TestCompactEncoding(unittest.TestCase):

    def test_layout(self):
        value = encode(Coordinate(x=1, y=1, z=1))
        self.assertEqual(1 | (1 << 5) | (1 << 34), value)

    def test_mask_constants(self):
        self.assertEqual(UINT64_MASK ^ (1 << 33), HIGH_ROW_MASK)
        self.assertEqual(UINT64_MASK ^ 31, ALL_BUT_ZOOM_MASK)

    def test_round_trip_up_to_zoom_5(self):
        for coord in for_zoom_range(0, 5):
            self.assertEqual(coord, decode(encode(coord)))

    def test_round_trip_examples(self):
        for coord in (
            Coordinate(x=1002463, y=312816, z=20),
            Coordinate(x=12345678, y=12345678, z=30),
            Coordinate(x=(1 << 29) - 1, y=(1 << 29) - 1, z=31),
        ):
            self.assertEqual(coord, decode(encode(coord)))

    def test_encoded_value_fits_63_bits(self):
        value = encode(Coordinate(x=(1 << 29) - 1, y=(1 << 29) - 1, z=31))
        self.assertLess(value, 1 << 63)

    def test_zoom_up_examples(self):
        examples = [
            (Coordinate(x=31, y=31, z=5), Coordinate(x=15, y=15, z=4)),
            (Coordinate(x=1, y=1, z=2), Coordinate(x=0, y=0, z=1)),
        ]
        for coord, expected in examples:
            self.assertEqual(expected, decode(encoded_zoom_up(encode(coord))))

    def test_zoom_up_matches_parent(self):
        for x in range(5):
            for y in range(5):
                for z in range(1, 6):
                    coord = Coordinate(x=x, y=y, z=z)
                    self.assertEqual(encode(coord.parent()), encoded_zoom_up(encode(coord)))

    def test_zoom_up_odd_column_does_not_leak_into_row(self):
        coord = Coordinate(x=(1 << 29) - 1, y=0, z=31)
        self.assertEqual(coord.parent(), decode(encoded_zoom_up(encode(coord))))

    def test_zoom_up_at_zoom_zero(self):
        self.assertIsNone(encoded_zoom_up(encode(Coordinate(x=0, y=0, z=0))))


class TestQuadkey(unittest.TestCase):

    def setUp(self):
        self.examples = [
            (Coordinate(x=2, y=2, z=3), "030"),
            (Coordinate(x=1, y=1, z=1), "3"),
            (Coordinate(x=0, y=1, z=2), "02"),
            (Coordinate(x=5, y=0, z=3), "101"),
        ]

    def test_coord_to_quadkey(self):
        for coord, quadkey in self.examples:
            self.assertEqual(quadkey, coord_to_quadkey(coord))

    def test_quadkey_to_coord(self):
        for coord, quadkey in self.examples:
            self.assertEqual(coord, quadkey_to_coord(quadkey))

    def test_zoom_zero_is_empty(self):
        self.assertEqual("", coord_to_quadkey(Coordinate(x=0, y=0, z=0)))
        self.assertEqual(Coordinate(x=0, y=0, z=0), quadkey_to_coord(""))

    def test_invalid_digit(self):
        for quadkey in ("4", "01a", "0 1"):
            with self.assertRaises(QuadkeyParseError):
                quadkey_to_coord(quadkey)

    def test_round_trip(self):
        for coord in for_zoom_range(1, 4):
            self.assertEqual(coord, quadkey_to_coord(coord_to_quadkey(coord)))


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
