"""
Purpose: World-space <-> route-space conversion through the oracle's coordinate helper.
Dependencies: routing/errors.py, routing/models.py, math.
Ext Hooks: Elevation layers as a third route-space axis.

Both the engine and the oracle must agree on cell math, so this wrapper never
does its own conversion: it delegates to the helper the oracle publishes.
"""

import math
from routing.errors import CoordinateUnavailable
from routing.models import Point, as_point


class CoordinateTransform:
    def __init__(self, settings, helper_provider):
        """
        Args:
            settings: RoutingSettings (debug toggle is pushed into the helper)
            helper_provider: zero-argument callable returning the coordinate helper or None
        """
        self.settings = settings
        self.helper_provider = helper_provider

    def get_coordinate_helper(self):
        helper = self.helper_provider()
        if helper is None:
            raise CoordinateUnavailable("Coordinate helper not available. Make sure the route oracle is loaded.")
        helper.set_debug_enabled(self.settings.is_debug_mode())
        return helper

    def is_available(self) -> bool:
        return self.helper_provider() is not None

    def to_route_space(self, world_point, token_data=None) -> Point:
        return as_point(self.get_coordinate_helper().pixel_to_grid_bounded(as_point(world_point), token_data))

    def to_world_space(self, route_point, token_data=None) -> Point:
        return as_point(self.get_coordinate_helper().grid_to_pixel(as_point(route_point), token_data))

    def get_token_data(self, token):
        return self.get_coordinate_helper().get_token_data(token)

    @staticmethod
    def manhattan_distance(a, b):
        return abs(b[0] - a[0]) + abs(b[1] - a[1])

    @staticmethod
    def euclidean_distance(a, b):
        return math.hypot(b[0] - a[0], b[1] - a[1])

    @staticmethod
    def validate_coordinates(pos) -> bool:
        """Finite and non-negative."""
        x, y = pos[0], pos[1]
        return math.isfinite(x) and math.isfinite(y) and x >= 0 and y >= 0
