"""
Purpose: Turn a drop (origin pixel, target pixel) into a world-space route.
Dependencies: routing/coordinates.py, routing/oracle.py, routing/reconciler.py, routing/errors.py, routing/models.py.
Ext Hooks: Live preview during drag (coalesce to one in-flight query per token).

Steps: pixel -> cell, reconcile, one oracle query, cell -> pixel. An oracle
route gives an 'oracle' plan (with the final segment appended when the target
was reconciled); no route gives a normalized 'direct' plan; anything that makes
routing impossible gives None.
"""

from typing import Optional
from routing.errors import CoordinateUnavailable, OracleUnavailable
from routing.models import PlannedRoute, Point, as_point


class RoutePlanner:
    def __init__(self, settings, transform, oracle_client, reconciler, feedback=None):
        self.settings = settings
        self.transform = transform
        self.oracle_client = oracle_client
        self.reconciler = reconciler
        self.feedback = feedback

    async def plan(self, token, origin_world, target_world) -> Optional[PlannedRoute]:
        if not self.oracle_client.is_ready():
            self.settings.debug("Route oracle not ready - skipping pathfinding")
            return None

        origin_world = as_point(origin_world)
        target_world = as_point(target_world)
        if not (self.transform.validate_coordinates(origin_world) and self.transform.validate_coordinates(target_world)):
            self.settings.debug("Invalid coordinates detected - skipping pathfinding")
            return None

        try:
            token_data = self.transform.get_token_data(token)
            grid_from = self.transform.to_route_space(origin_world, token_data)
            grid_to = self.transform.to_route_space(target_world, token_data)
        except CoordinateUnavailable as e:
            self.settings.debug(f"Coordinate conversion failed: {e}")
            return None

        self.settings.debug("Calculating drag pathfinding:")
        self.settings.debug(f"  Pixels: ({origin_world.x:.0f}, {origin_world.y:.0f}) -> ({target_world.x:.0f}, {target_world.y:.0f})")
        self.settings.debug(f"  Grid:   ({grid_from.x}, {grid_from.y}) -> ({grid_to.x}, {grid_to.y})")

        budget = self.oracle_client.search_budget(grid_from, grid_to)
        self.settings.debug(f"Max search budget: {budget}")

        destination = await self.reconciler.reconcile(grid_from, grid_to, token_data)
        try:
            route = await self.oracle_client.query(grid_from, destination.query_target, token, budget)
        except OracleUnavailable as e:
            self.settings.debug(f"Oracle unavailable at query time: {e}")
            return None

        try:
            if route:
                self.settings.debug(f"Raw grid path: {' -> '.join(f'({p.x},{p.y})' for p in route)}")
                points = [self.transform.to_world_space(p, token_data) for p in route]
                if destination.is_reconciled:
                    # Unconditional: the last segment is not re-checked against walls
                    points.append(self.transform.to_world_space(destination.final_target, token_data))
                    self.settings.debug(f"Added final segment to original destination ({destination.final_target.x}, {destination.final_target.y})")
                planned = PlannedRoute(points, source="oracle", reconciled=destination.is_reconciled)
            else:
                planned = PlannedRoute(self.direct_path(origin_world, target_world, token_data), source="direct")
        except CoordinateUnavailable as e:
            self.settings.debug(f"Coordinate conversion failed: {e}")
            return None

        self.settings.debug(f"Converted pixel path: {' -> '.join(f'({round(p.x)},{round(p.y)})' for p in planned.points)}")
        self._show(token, planned.points)
        return planned

    def direct_path(self, origin_world: Point, target_world: Point, token_data):
        """Origin and target snapped to their cell centres; raw pixels if snapping fails."""
        try:
            start = self.transform.to_world_space(self.transform.to_route_space(origin_world, token_data), token_data)
            end = self.transform.to_world_space(self.transform.to_route_space(target_world, token_data), token_data)
        except CoordinateUnavailable as e:
            self.settings.debug(f"Failed to normalize direct path coordinates: {e}")
            return [origin_world, target_world]
        self.settings.debug(f"No complex path found, using normalized direct path ({round(start.x)},{round(start.y)}) -> ({round(end.x)},{round(end.y)})")
        return [start, end]

    def _show(self, token, points):
        if self.feedback is None or len(points) < 2:
            return
        try:
            self.feedback.show_route(token, points)
        except Exception as e:
            self.settings.warn(f"Failed to update route preview: {e}")
