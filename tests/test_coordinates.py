import unittest
from routing.coordinates import CoordinateTransform
from routing.errors import CoordinateUnavailable
from routing.models import Footprint, Point, Token
from routing.pathfinding.coordinate_helper import GridCoordinateHelper
from routing.settings import RoutingSettings


class TestGridCoordinateHelper(unittest.TestCase):
    def setUp(self):
        self.helper = GridCoordinateHelper(grid_size=50, cols=10, rows=8)

    def test_cell_centre_single_cell(self):
        self.assertEqual(self.helper.pixel_to_grid_bounded((75, 75)), Point(1, 1))
        self.assertEqual(self.helper.grid_to_pixel((1, 1)), Point(75.0, 75.0))

    def test_nearest_cell_for_off_centre_point(self):
        # Anywhere inside cell (2, 3) maps to it
        self.assertEqual(self.helper.pixel_to_grid_bounded((101, 199)), Point(2, 3))
        self.assertEqual(self.helper.pixel_to_grid_bounded((149, 151)), Point(2, 3))

    def test_large_footprint_is_centred(self):
        ogre = Footprint(2, 2)
        # A 2x2 token anchored at (1, 1) covers cells 1..2, centre at the shared corner
        self.assertEqual(self.helper.grid_to_pixel((1, 1), ogre), Point(100.0, 100.0))
        self.assertEqual(self.helper.pixel_to_grid_bounded((100, 100), ogre), Point(1, 1))

    def test_negative_positions_clamp_to_zero(self):
        self.assertEqual(self.helper.pixel_to_grid_bounded((-30, 10)), Point(0, 0))

    def test_out_of_bounds_clamps_to_last_cell(self):
        self.assertEqual(self.helper.pixel_to_grid_bounded((2000, 2000)), Point(9, 7))
        self.assertEqual(self.helper.pixel_to_grid_bounded((2000, 2000), Footprint(2, 2)), Point(8, 6))

    def test_gridless_is_identity(self):
        helper = GridCoordinateHelper(gridless=True)
        self.assertEqual(helper.pixel_to_grid_bounded((12.5, 7.25)), Point(12.5, 7.25))
        self.assertEqual(helper.grid_to_pixel((12.5, 7.25)), Point(12.5, 7.25))

    def test_token_without_footprint_is_one_cell(self):
        class Bare:
            pass
        self.assertEqual(self.helper.get_token_data(Bare()), Footprint(1, 1))


class TestCoordinateTransform(unittest.TestCase):
    def setUp(self):
        self.settings = RoutingSettings()
        self.helper = GridCoordinateHelper(grid_size=50, cols=20, rows=20)
        self.transform = CoordinateTransform(self.settings, lambda: self.helper)

    def test_round_trip_is_idempotent_on_grid(self):
        for footprint in (Footprint(1, 1), Footprint(2, 2), Footprint(3, 1)):
            for x in range(0, 1000, 37):
                for y in range(0, 1000, 41):
                    cell = self.transform.to_route_space((x + 0.3, y + 0.7), footprint)
                    again = self.transform.to_route_space(self.transform.to_world_space(cell, footprint), footprint)
                    self.assertEqual(again, cell)

    def test_round_trip_is_idempotent_gridless(self):
        helper = GridCoordinateHelper(gridless=True)
        transform = CoordinateTransform(self.settings, lambda: helper)
        for p in [(0.0, 0.0), (10.25, 99.5), (333.3, 1.0)]:
            cell = transform.to_route_space(p)
            self.assertEqual(transform.to_route_space(transform.to_world_space(cell)), cell)

    def test_missing_helper_raises(self):
        transform = CoordinateTransform(self.settings, lambda: None)
        self.assertFalse(transform.is_available())
        with self.assertRaises(CoordinateUnavailable):
            transform.to_route_space((10, 10))
        with self.assertRaises(CoordinateUnavailable):
            transform.to_world_space((1, 1))

    def test_debug_toggle_is_pushed_to_helper(self):
        self.settings.debug_mode = True
        self.transform.get_coordinate_helper()
        self.assertTrue(self.helper.debug_enabled)
        self.settings.debug_mode = False
        self.transform.get_coordinate_helper()
        self.assertFalse(self.helper.debug_enabled)

    def test_token_data_comes_from_helper(self):
        token = Token("t1", footprint=Footprint(2, 3))
        self.assertEqual(self.transform.get_token_data(token), Footprint(2, 3))

    def test_distances(self):
        self.assertEqual(CoordinateTransform.manhattan_distance((0, 0), (3, -4)), 7)
        self.assertAlmostEqual(CoordinateTransform.euclidean_distance((0, 0), (3, 4)), 5.0)

    def test_validate_coordinates(self):
        self.assertTrue(CoordinateTransform.validate_coordinates((0, 0)))
        self.assertFalse(CoordinateTransform.validate_coordinates((-1, 0)))
        self.assertFalse(CoordinateTransform.validate_coordinates((float('nan'), 3)))
        self.assertFalse(CoordinateTransform.validate_coordinates((float('inf'), 3)))


if __name__ == '__main__':
    unittest.main()
