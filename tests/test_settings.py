import unittest
from unittest import mock
from routing.settings import RoutingSettings


class TestRoutingSettings(unittest.TestCase):
    def test_defaults(self):
        settings = RoutingSettings()
        self.assertTrue(settings.is_pathfinding_enabled())
        self.assertTrue(settings.is_auto_follow_path_enabled())
        self.assertEqual(settings.get_max_path_distance(), 1000)
        self.assertFalse(settings.is_debug_mode())

    def test_get_and_set_by_name(self):
        settings = RoutingSettings()
        settings.set("auto_follow_path", False)
        self.assertFalse(settings.get("auto_follow_path"))
        with self.assertRaises(KeyError):
            settings.get("speed")
        with self.assertRaises(KeyError):
            settings.set("speed", 3)

    def test_max_path_distance_range_and_step(self):
        settings = RoutingSettings()
        settings.set("max_path_distance", 1240)
        self.assertEqual(settings.get_max_path_distance(), 1200)
        with self.assertRaises(ValueError):
            settings.set("max_path_distance", 50)
        with self.assertRaises(ValueError):
            RoutingSettings(max_path_distance=6000)

    def test_listeners_fire_only_on_change(self):
        settings = RoutingSettings()
        seen = []
        settings.add_listener("debug_mode", seen.append)
        settings.set("debug_mode", True)
        settings.set("debug_mode", True)
        settings.remove_listener("debug_mode", seen.append)
        settings.set("debug_mode", False)
        self.assertEqual(seen, [True])

    def test_failing_listener_is_reported(self):
        settings = RoutingSettings()

        def broken(value):
            raise RuntimeError("panel closed")

        settings.add_listener("auto_follow_path", broken)
        with mock.patch("builtins.print") as mock_print:
            settings.set("auto_follow_path", False)
        self.assertFalse(settings.is_auto_follow_path_enabled())
        self.assertIn("panel closed", mock_print.call_args[0][0])

    def test_toggling_pathfinding_is_announced(self):
        settings = RoutingSettings()
        with mock.patch("builtins.print") as mock_print:
            settings.set("enable_pathfinding", False)
        mock_print.assert_called_once_with("[routing-token] Pathfinding disabled")

    def test_debug_output_only_in_debug_mode(self):
        settings = RoutingSettings()
        with mock.patch("builtins.print") as mock_print:
            settings.debug("hidden")
            settings.set("debug_mode", True)
            settings.debug("shown")
            settings.warn("always")
        mock_print.assert_has_calls([mock.call("[routing-token] shown"), mock.call("[routing-token] WARNING: always")])
        self.assertEqual(mock_print.call_count, 2)


if __name__ == '__main__':
    unittest.main()
