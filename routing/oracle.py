"""
Purpose: Failure-aware adapter over the external route oracle.
Dependencies: routing/config.py, routing/errors.py, routing/models.py, inspect.
Ext Hooks: Other oracles (HTTP, navmesh) only need query_route/collides_direct/coordinate_helper.
Host/Oracle: The oracle announces itself through the routeOracleReady hook.
"""

import inspect
from typing import List, Optional
from routing.config import DETOUR_FACTOR, DETOUR_BUFFER, HARD_SEARCH_CEILING
from routing.errors import OracleUnavailable
from routing.models import Point, as_point


class RouteOracleClient:
    """
    Issues bounded route queries and classifies their outcome.

    query() returns a list of route points, or None when the oracle ran but
    produced nothing usable (no path, or a single point). A missing or unready
    oracle raises OracleUnavailable. There is no retry: the oracle is
    deterministic, so the caller falls back immediately.
    """

    def __init__(self, settings, oracle=None):
        self.settings = settings
        self.oracle = oracle
        self.ready = False

    def attach(self, oracle):
        self.oracle = oracle

    def set_ready(self, ready: bool):
        self.ready = bool(ready)
        if self.ready:
            self.settings.debug("Route oracle is now ready - enhanced pathfinding enabled")

    def is_ready(self) -> bool:
        return self.ready and self.oracle is not None

    def coordinate_helper(self):
        return getattr(self.oracle, "coordinate_helper", None)

    def search_budget(self, origin, destination) -> int:
        """Direct distance plus a detour allowance, capped by the user setting and a hard ceiling."""
        direct = abs(destination[0] - origin[0]) + abs(destination[1] - origin[1])
        return int(min(direct * DETOUR_FACTOR + DETOUR_BUFFER,
                       self.settings.get_max_path_distance(),
                       HARD_SEARCH_CEILING))

    async def query(self, origin: Point, destination: Point, entity, max_search_budget: int) -> Optional[List[Point]]:
        if not self.is_ready():
            raise OracleUnavailable("Route oracle not ready")
        result = self.oracle.query_route(origin, destination, entity=entity, max_search_budget=max_search_budget)
        if inspect.isawaitable(result):
            result = await result
        path = self._extract_path(result)
        if not path or len(path) <= 1:
            self.settings.debug(f"No usable route from ({origin.x}, {origin.y}) to ({destination.x}, {destination.y})")
            return None
        return [as_point(p) for p in path]

    async def collides_direct(self, origin, destination, token_data) -> Optional[bool]:
        """Oracle's direct-step collision test, or None when the primitive is unavailable."""
        if not self.is_ready():
            return None
        primitive = getattr(self.oracle, "collides_direct", None)
        if primitive is None:
            return None
        result = primitive(origin, destination, token_data)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    @staticmethod
    def _extract_path(result):
        if result is None:
            return None
        if isinstance(result, dict):
            return result.get("path")
        return getattr(result, "path", result)
