"""
Purpose: Route oracle backed by the Flask oracle server (server/app.py).
Dependencies: requests, asyncio, routing/pathfinding/coordinate_helper.py, routing/errors.py, routing/config.py.
Ext Hooks: Authentication headers for a shared oracle.
Host/Oracle: One request per call, no retry; network failures surface as OracleUnavailable.

Route and collision requests run in a worker thread so the host loop keeps drawing.
"""

import asyncio
import requests
from routing.config import ORACLE_URL, ORACLE_TIMEOUT
from routing.errors import OracleUnavailable
from routing.models import Footprint
from routing.pathfinding.coordinate_helper import GridCoordinateHelper


class HttpRouteOracle:
    def __init__(self, base_url=ORACLE_URL, timeout=ORACLE_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.coordinate_helper = None  # Set by load()

    def load(self):
        """Fetch the grid description so pixel/cell math matches the server."""
        grid = self._request("get", "/api/grid")
        self.coordinate_helper = GridCoordinateHelper(grid["grid_size"], grid.get("cols"), grid.get("rows"),
                                                      gridless=grid.get("gridless", False))
        return self

    async def query_route(self, origin, destination, entity=None, max_search_budget=None):
        footprint = getattr(entity, "footprint", None) or Footprint()
        data = {
            "origin": list(origin),
            "destination": list(destination),
            "max_search_budget": max_search_budget,
            "footprint": [footprint.width, footprint.height],
        }
        result = await asyncio.to_thread(self._request, "post", "/api/route", json=data)
        return {"path": [tuple(p) for p in result.get("path", [])]}

    async def collides_direct(self, origin, destination, footprint=None):
        footprint = footprint or Footprint()
        data = {"origin": list(origin), "destination": list(destination),
                "footprint": [footprint.width, footprint.height]}
        result = await asyncio.to_thread(self._request, "post", "/api/collides", json=data)
        return bool(result.get("collides", True))

    def _request(self, method, endpoint, **kwargs):
        url = f"{self.base_url}{endpoint}"
        try:
            response = getattr(requests, method)(url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise OracleUnavailable(f"Oracle server unreachable: {e}") from e
        if response.status_code != 200:
            raise OracleUnavailable(f"Oracle server error {response.status_code} on {endpoint}")
        return response.json()
