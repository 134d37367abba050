"""
Purpose: Find a reachable stand-in when the dropped-on cell cannot be reached by a direct step.
Dependencies: routing/config.py, routing/models.py.
Ext Hooks: Hex rings for hex grids.
"""

from routing.config import RECONCILE_MAX_RADIUS
from routing.models import Point, ReconciledDestination, as_point


class DestinationReconciler:
    def __init__(self, oracle_client, settings, max_radius=RECONCILE_MAX_RADIUS):
        self.oracle_client = oracle_client
        self.settings = settings
        self.max_radius = max_radius

    async def reconcile(self, origin, raw_destination, token_data=None) -> ReconciledDestination:
        """
        Split a drop target into (final_target, query_target).

        The common case is a destination reachable by a direct step, which is
        returned for both fields. Otherwise square rings of growing radius
        around the destination are scanned and the first radius with any
        unobstructed candidate wins; within it the candidate closest to the
        destination (Manhattan) is used, earlier candidates winning ties.
        Never raises: a missing or failing collision primitive leaves the
        destination unchanged.
        """
        origin = as_point(origin)
        raw = as_point(raw_destination)
        unchanged = ReconciledDestination(final_target=raw, query_target=raw)

        blocked = await self._collides(origin, raw, token_data)
        if blocked is None:
            self.settings.debug("Direct-step collision test not available, using original destination")
            return unchanged
        if not blocked:
            self.settings.debug(f"Original destination ({raw.x}, {raw.y}) is accessible")
            return unchanged

        self.settings.debug(f"Original destination ({raw.x}, {raw.y}) is blocked, finding alternative")
        for radius in range(1, self.max_radius + 1):
            best, best_distance = None, None
            for candidate in self._ring(raw, radius):
                if await self._collides(origin, candidate, token_data) is not False:
                    continue
                distance = abs(candidate.x - raw.x) + abs(candidate.y - raw.y)
                if best is None or distance < best_distance:
                    best, best_distance = candidate, distance
            if best is not None:
                self.settings.debug(f"Found accessible alternative at ({best.x}, {best.y}), distance: {best_distance}")
                return ReconciledDestination(final_target=raw, query_target=best)

        self.settings.debug(f"No accessible alternative found within {self.max_radius} cells")
        return unchanged

    @staticmethod
    def _ring(center, radius):
        """Perimeter cells of the square at `radius`, dx-major; negative cells are skipped."""
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                candidate = Point(center.x + dx, center.y + dy)
                if candidate.x < 0 or candidate.y < 0:
                    continue
                yield candidate

    async def _collides(self, origin, destination, token_data):
        try:
            return await self.oracle_client.collides_direct(origin, destination, token_data)
        except Exception as e:
            self.settings.warn(f"Direct-step collision test failed, using original destination: {e}")
            return None
