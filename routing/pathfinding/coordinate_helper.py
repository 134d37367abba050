"""
Purpose: Square-grid (or gridless) pixel <-> cell conversion, footprint aware.
Dependencies: routing/models.py, routing/config.py, math.
Ext Hooks: Hex layouts (flat/pointy top) as further helpers with the same interface.
Oracle: Exposed as GridRouteOracle.coordinate_helper; the engine reaches it through CoordinateTransform.
"""

import math
from routing.config import GRID_SIZE, MODULE_NAME
from routing.models import Footprint, Point


class GridCoordinateHelper:
    def __init__(self, grid_size=GRID_SIZE, cols=None, rows=None, gridless=False):
        self.grid_size = grid_size
        self.cols = cols  # Bounds in cells; None means unbounded on that axis
        self.rows = rows
        self.gridless = gridless
        self.debug_enabled = False

    def set_debug_enabled(self, enabled):
        self.debug_enabled = bool(enabled)

    def get_token_data(self, token):
        """Footprint used for sizing; tokens without one count as 1x1."""
        footprint = getattr(token, "footprint", None)
        return footprint if footprint is not None else Footprint()

    def pixel_to_grid_bounded(self, pixel, footprint=None):
        """Cell whose footprint-adjusted centre is nearest to `pixel`, clamped into the grid."""
        if self.gridless:
            return Point(float(pixel[0]), float(pixel[1]))
        footprint = footprint or Footprint()
        # Half-up rounding keeps the mapping stable on cell boundaries
        col = math.floor(pixel[0] / self.grid_size - footprint.width / 2 + 0.5)
        row = math.floor(pixel[1] / self.grid_size - footprint.height / 2 + 0.5)
        cell = Point(self._clamp(col, self.cols, footprint.width), self._clamp(row, self.rows, footprint.height))
        if self.debug_enabled:
            print(f"[{MODULE_NAME}] pixel ({pixel[0]:.1f}, {pixel[1]:.1f}) -> cell ({cell.x}, {cell.y})")
        return cell

    def grid_to_pixel(self, cell, footprint=None):
        """Geometric centre of a footprint anchored (top-left) at `cell`."""
        if self.gridless:
            return Point(float(cell[0]), float(cell[1]))
        footprint = footprint or Footprint()
        x = (cell[0] + footprint.width / 2) * self.grid_size
        y = (cell[1] + footprint.height / 2) * self.grid_size
        return Point(x, y)

    @staticmethod
    def _clamp(value, limit, span):
        value = max(0, value)
        if limit is not None:
            value = min(value, max(0, limit - span))
        return value
