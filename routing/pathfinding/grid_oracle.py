"""
Purpose: In-process reference route oracle over a tile grid.
Dependencies: routing/pathfinding/a_star.py, grid_utils.py, tile.py, coordinate_helper.py, random.
Ext Hooks: Walls between cells (edges) instead of blocked cells.
Oracle: Implements query_route / collides_direct / coordinate_helper for RouteOracleClient.
"""

import random
from routing.config import GRID_SIZE
from routing.models import Footprint
from routing.pathfinding.a_star import a_star, step_cost
from routing.pathfinding.coordinate_helper import GridCoordinateHelper
from routing.pathfinding.grid_utils import cells_covered, line_cells
from routing.pathfinding.tile import Tile


def generate_tiles(cols, rows, seed=None, wall_ratio=0.1, rough_ratio=0.1):
    """Random map: ~10% walls, ~10% rough by default."""
    rng = random.Random(seed)
    tiles = {}
    for x in range(cols):
        for y in range(rows):
            roll = rng.random()
            if roll < wall_ratio:
                tiles[(x, y)] = Tile('wall')
            elif roll < wall_ratio + rough_ratio:
                tiles[(x, y)] = Tile('rough')
            else:
                tiles[(x, y)] = Tile('plain')
    return tiles


class GridRouteOracle:
    """
    Tile-grid oracle. On a gridless table the routes are still searched over
    the tiles: continuous points are mapped to the tile under them, and the
    path comes back as tile centres that start and end at the given points.
    """

    def __init__(self, tiles=None, cols=20, rows=15, grid_size=GRID_SIZE, gridless=False):
        self.cols = cols
        self.rows = rows
        self.gridless = gridless
        self.tiles = tiles if tiles is not None else {(x, y): Tile('plain') for x in range(cols) for y in range(rows)}
        self.coordinate_helper = GridCoordinateHelper(grid_size, cols, rows, gridless=gridless)
        self.tile_helper = GridCoordinateHelper(grid_size, cols, rows)  # Always snaps to tiles

    @staticmethod
    def _footprint_of(entity):
        footprint = getattr(entity, "footprint", None)
        return footprint if footprint is not None else Footprint()

    def _tile_of(self, point, footprint):
        if self.gridless:
            return tuple(self.tile_helper.pixel_to_grid_bounded(point, footprint))
        return int(point[0]), int(point[1])

    def query_route(self, origin, destination, entity=None, max_search_budget=None):
        """Shortest path between cells; {'path': [...]} with the start included, empty when unreachable."""
        footprint = self._footprint_of(entity)
        start = self._tile_of(origin, footprint)
        goal = self._tile_of(destination, footprint)
        path = a_star(start, goal, self.tiles, max_distance=max_search_budget,
                      width=footprint.width, height=footprint.height)
        if not self.gridless or not path:
            return {"path": path}
        points = [tuple(self.tile_helper.grid_to_pixel(cell, footprint)) for cell in path]
        points[0] = (float(origin[0]), float(origin[1]))
        if len(points) > 1:
            points[-1] = (float(destination[0]), float(destination[1]))
        return {"path": points}

    def collides_direct(self, origin, destination, footprint=None):
        """True if the straight segment crosses a blocked or off-grid cell for this footprint."""
        footprint = footprint or Footprint()
        start = self._tile_of(origin, footprint)
        end = self._tile_of(destination, footprint)
        for cell in line_cells(start[0], start[1], end[0], end[1]):
            if step_cost(cell, self.tiles, footprint.width, footprint.height) is None:
                return True
        return False

    def set_blocked(self, x, y, blocked=True):
        self.tiles[(x, y)] = Tile('wall' if blocked else 'plain')

    def is_blocked(self, x, y, footprint=None):
        footprint = footprint or Footprint()
        return any(self.tiles.get(pos) is None or self.tiles[pos].blocked
                   for pos in cells_covered(x, y, footprint.width, footprint.height))

    def get_grid_state(self):
        return {
            "cols": self.cols,
            "rows": self.rows,
            "grid_size": self.coordinate_helper.grid_size,
            "gridless": self.coordinate_helper.gridless,
            "tiles": {f"{x},{y}": tile.to_dict() for (x, y), tile in self.tiles.items()},
        }
