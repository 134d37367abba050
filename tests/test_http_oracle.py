import asyncio
import time
import unittest
from unittest import mock
import requests
from routing.errors import OracleUnavailable
from routing.models import Footprint, Token
from routing.module import SmartRouting
from routing.pathfinding.coordinate_helper import GridCoordinateHelper
from routing.pathfinding.http_oracle import HttpRouteOracle
from routing.settings import RoutingSettings


def fake_response(payload, status_code=200):
    response = mock.Mock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class NoMovement:
    async def move_entity_through(self, token, waypoints, options=None):
        pass


class TestHttpRouteOracle(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.oracle = HttpRouteOracle("http://oracle.test/", timeout=2)

    @mock.patch("routing.pathfinding.http_oracle.requests.get")
    def test_load_builds_helper(self, mock_get):
        mock_get.return_value = fake_response({"cols": 6, "rows": 4, "grid_size": 40, "gridless": False, "tiles": {}})
        self.oracle.load()
        mock_get.assert_called_once_with("http://oracle.test/api/grid", timeout=2)
        helper = self.oracle.coordinate_helper
        self.assertEqual((helper.grid_size, helper.cols, helper.rows, helper.gridless), (40, 6, 4, False))

    @mock.patch("routing.pathfinding.http_oracle.requests.post")
    async def test_query_route_posts_once(self, mock_post):
        mock_post.return_value = fake_response({"path": [[0, 0], [1, 1]]})
        ogre = Token("ogre", "Ogre", footprint=Footprint(2, 2))
        result = await self.oracle.query_route((0, 0), (1, 1), entity=ogre, max_search_budget=30)
        self.assertEqual(result, {"path": [(0, 0), (1, 1)]})
        mock_post.assert_called_once_with("http://oracle.test/api/route", timeout=2, json={
            "origin": [0, 0], "destination": [1, 1], "max_search_budget": 30, "footprint": [2, 2]})

    @mock.patch("routing.pathfinding.http_oracle.requests.post")
    async def test_collides_direct(self, mock_post):
        mock_post.return_value = fake_response({"collides": False})
        self.assertFalse(await self.oracle.collides_direct((0, 0), (3, 0)))
        self.assertEqual(mock_post.call_args.kwargs["json"]["footprint"], [1, 1])

    @mock.patch("routing.pathfinding.http_oracle.requests.post")
    async def test_network_error_is_unavailable(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(OracleUnavailable):
            await self.oracle.query_route((0, 0), (1, 1))
        self.assertEqual(mock_post.call_count, 1)

    @mock.patch("routing.pathfinding.http_oracle.requests.post")
    async def test_server_error_is_unavailable(self, mock_post):
        mock_post.return_value = fake_response({"error": "Invalid data"}, status_code=400)
        with self.assertRaises(OracleUnavailable):
            await self.oracle.collides_direct((0, 0), (1, 1))


class TestHttpOracleDrop(unittest.IsolatedAsyncioTestCase):
    async def test_loop_keeps_running_during_drop(self):
        calls = []

        def slow_post(url, timeout=None, json=None):
            calls.append(url)
            time.sleep(0.01)
            if url.endswith("/api/collides"):
                return fake_response({"collides": True})
            return fake_response({"path": []})

        oracle = HttpRouteOracle("http://oracle.test")
        oracle.coordinate_helper = GridCoordinateHelper(50, 20, 20)
        routing = SmartRouting(NoMovement(), oracle=oracle, settings=RoutingSettings(), start_delay=0)
        with mock.patch("builtins.print"):
            routing.initialize()

        gaps = []
        done = asyncio.Event()

        async def ticker():
            last = time.monotonic()
            while not done.is_set():
                await asyncio.sleep(0.005)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        token = Token("hero", "Hero", 25, 25)
        routing.coordinator.on_drag_start(token)
        with mock.patch("routing.pathfinding.http_oracle.requests.post", side_effect=slow_post):
            tick = asyncio.create_task(ticker())
            used = await routing.coordinator.on_drag_drop(token, (475, 475))
            done.set()
            await tick

        # Blocked destination: one direct check, five rings of candidates, one route query
        self.assertEqual(len(calls), 1 + 8 + 16 + 24 + 32 + 40 + 1)
        self.assertFalse(used)
        self.assertGreater(len(gaps), 20)
        self.assertLess(max(gaps), 0.2)


if __name__ == '__main__':
    unittest.main()
