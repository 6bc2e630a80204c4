"""
Unit Tests for Geo Projection

Conversions between tiles, WGS84 degrees and Web Mercator meters, using a
tile in lower Manhattan as the running example.
"""

import sys
import unittest
from pathlib import Path

from shapely.geometry import LineString

sys.path.append(str(Path(__file__).parent.parent.parent / "src"))

from tile_pyramid.coordinates.coord import Coordinate
from tile_pyramid.geo.projection import (
    HALF_CIRCUMFERENCE_METERS,
    Bounds,
    Point,
    bounds_to_coords,
    coord_to_bounds,
    coord_to_lnglat,
    coord_to_mercator,
    coord_to_mercator_bounds,
    lnglat_to_coord,
    lnglat_to_mercator,
    mercator_bounds_to_coords,
    mercator_to_coord,
    mercator_to_lnglat,
    mercator_to_wgs84,
    wgs84_to_mercator,
)


class TestDegreeConversions(unittest.TestCase):

    def setUp(self):
        self.coord = Coordinate(x=19295, y=24641, z=16)

    def test_coord_to_lnglat(self):
        lnglat = coord_to_lnglat(self.coord)
        self.assertAlmostEqual(-74.0093994140625, lnglat.x, delta=1e-5)
        self.assertAlmostEqual(40.709792012434946, lnglat.y, delta=1e-5)

    def test_lnglat_to_coord(self):
        self.assertEqual(
            self.coord,
            lnglat_to_coord(Point(-74.0093994140625, 40.709792012434946), 16)
        )

    def test_lnglat_to_coord_inside_tile(self):
        self.assertEqual(self.coord, lnglat_to_coord(Point(-74.0066, 40.7077), 16))

    def test_origin(self):
        lnglat = coord_to_lnglat(Coordinate(x=0, y=0, z=0))
        self.assertAlmostEqual(-180.0, lnglat.x)
        self.assertAlmostEqual(85.0511287798, lnglat.y, places=6)

    def test_coord_to_bounds(self):
        bounds = coord_to_bounds(self.coord)
        self.assertAlmostEqual(-74.009399414062, bounds.minx, delta=1e-5)
        self.assertAlmostEqual(40.705627938206, bounds.miny, delta=1e-5)
        self.assertAlmostEqual(-74.003906250000, bounds.maxx, delta=1e-5)
        self.assertAlmostEqual(40.709792012435, bounds.maxy, delta=1e-5)

    def test_coord_to_bounds_clamps_grid_edge(self):
        bounds = coord_to_bounds(Coordinate(x=1, y=0, z=1))
        self.assertLessEqual(bounds.maxx, 180.0)
        self.assertLessEqual(bounds.maxy, 90.0)

    def test_bounds_to_multiple_coords(self):
        bounds = Bounds(-74.009399414062, 40.705627938206, -74.003906250000, 40.709792012435)
        self.assertEqual(
            (Coordinate(x=19295, y=24640, z=16), Coordinate(x=19296, y=24641, z=16)),
            bounds_to_coords(bounds, 16)
        )

    def test_bounds_to_multiple_coords_inside_tiles(self):
        bounds = Bounds(-74.0090, 40.7060, -74.0030, 40.7120)
        self.assertEqual(
            (Coordinate(x=19295, y=24640, z=16), Coordinate(x=19296, y=24641, z=16)),
            bounds_to_coords(bounds, 16)
        )

    def test_bounds_to_single_coord(self):
        bounds = Bounds(-74.009399414062, 40.705627938206, -74.0090, 40.70563)
        self.assertEqual((self.coord,), bounds_to_coords(bounds, 16))

    def test_bounds_to_single_coord_inside_tile(self):
        bounds = Bounds(-74.0090, 40.7060, -74.0050, 40.7090)
        self.assertEqual((self.coord,), bounds_to_coords(bounds, 16))

    def test_bounds_to_coords_clamps_to_grid(self):
        bounds = Bounds(-180.0, -85.0, 180.0, 85.0)
        self.assertEqual(
            (Coordinate(x=0, y=0, z=2), Coordinate(x=3, y=3, z=2)),
            bounds_to_coords(bounds, 2)
        )

    def test_out_of_range_latitude_does_not_raise(self):
        bounds_to_coords(Bounds(-180.0, -90.0, 180.0, 90.0), 3)


class TestBoundsGeometry(unittest.TestCase):

    def test_to_polygon(self):
        polygon = Bounds(1.0, 2.0, 3.0, 4.0).to_polygon()
        self.assertEqual((1.0, 2.0, 3.0, 4.0), polygon.bounds)
        self.assertAlmostEqual(4.0, polygon.area)

    def test_from_geometry(self):
        line = LineString([(-74.0090, 40.7120), (-74.0030, 40.7060)])
        self.assertEqual(Bounds(-74.0090, 40.7060, -74.0030, 40.7120), Bounds.from_geometry(line))

    def test_unpacking(self):
        minx, miny, maxx, maxy = Bounds(1, 2, 3, 4)
        self.assertEqual((1, 2, 3, 4), (minx, miny, maxx, maxy))


class TestMercatorConversions(unittest.TestCase):

    def test_mercator_to_wgs84(self):
        lnglat = mercator_to_wgs84(Point(-8233978.22, 4980225.91))
        self.assertAlmostEqual(-73.96708488464355, lnglat.x, delta=1e-5)
        self.assertAlmostEqual(40.781906259287, lnglat.y, delta=1e-5)

    def test_wgs84_to_mercator(self):
        merc = wgs84_to_mercator(Point(-73.96708488464355, 40.781906259287))
        self.assertAlmostEqual(-8233978.22, merc.x, delta=1e-2)
        self.assertAlmostEqual(4980225.91, merc.y, delta=1e-2)

    def test_lnglat_aliases(self):
        self.assertIs(mercator_to_wgs84, mercator_to_lnglat)
        self.assertIs(wgs84_to_mercator, lnglat_to_mercator)

    def test_coord_to_mercator(self):
        merc = coord_to_mercator(Coordinate(x=19302, y=24623, z=16))
        self.assertAlmostEqual(-8234408.183105, merc.x, delta=1e-3)
        self.assertAlmostEqual(4980636.763062, merc.y, delta=1e-3)

    def test_coord_to_mercator_origin(self):
        merc = coord_to_mercator(Coordinate(x=0, y=0, z=0))
        self.assertAlmostEqual(-HALF_CIRCUMFERENCE_METERS, merc.x)
        self.assertAlmostEqual(HALF_CIRCUMFERENCE_METERS, merc.y)

    def test_mercator_to_coord(self):
        self.assertEqual(
            Coordinate(x=19302, y=24623, z=16),
            mercator_to_coord(Point(-8233978.22, 4980225.91), 16)
        )

    def test_round_trip(self):
        coords = [
            Coordinate(x=19302, y=24623, z=16),
            Coordinate(x=0, y=0, z=0),
            Coordinate(x=1, y=1, z=1),
            Coordinate(x=1002463, y=312816, z=20),
            Coordinate(x=12345678, y=4567890, z=24),
        ]
        for coord in coords:
            self.assertEqual(coord, mercator_to_coord(coord_to_mercator(coord), coord.z))

    def test_mercator_bounds(self):
        coord = Coordinate(x=19302, y=24623, z=16)
        bounds = coord_to_mercator_bounds(coord)
        self.assertLess(bounds.minx, bounds.maxx)
        self.assertLess(bounds.miny, bounds.maxy)
        self.assertAlmostEqual(bounds.maxx - bounds.minx, bounds.maxy - bounds.miny, places=6)

    def test_mercator_bounds_to_single_coord(self):
        coord = Coordinate(x=19302, y=24623, z=16)
        minx, miny, maxx, maxy = coord_to_mercator_bounds(coord)
        inner = Bounds(minx + 1, miny + 1, maxx - 1, maxy - 1)
        self.assertEqual((coord,), mercator_bounds_to_coords(inner, 16))

    def test_mercator_bounds_to_multiple_coords(self):
        coord = Coordinate(x=19302, y=24623, z=16)
        minx, miny, maxx, maxy = coord_to_mercator_bounds(coord)
        outer = Bounds(minx + 1, miny - 1, maxx + 1, maxy - 1)
        self.assertEqual(
            (Coordinate(x=19302, y=24623, z=16), Coordinate(x=19303, y=24624, z=16)),
            mercator_bounds_to_coords(outer, 16)
        )

    def test_mercator_bounds_ending_short_of_tile_edge(self):
        bounds = Bounds(-8235631.175558, 4965349.357405, -8235325.427445, 4965655.105518)
        self.assertEqual(
            (Coordinate(x=38600, y=49295, z=17), Coordinate(x=38600, y=49296, z=17)),
            mercator_bounds_to_coords(bounds, 17)
        )

    def test_mercator_world_bounds_clamp_to_grid(self):
        world = Bounds(
            -HALF_CIRCUMFERENCE_METERS, -HALF_CIRCUMFERENCE_METERS,
            HALF_CIRCUMFERENCE_METERS, HALF_CIRCUMFERENCE_METERS
        )
        self.assertEqual(
            (Coordinate(x=0, y=0, z=3), Coordinate(x=7, y=7, z=3)),
            mercator_bounds_to_coords(world, 3)
        )


if __name__ == '__main__':
    unittest.main(verbosity=2, buffer=True)
