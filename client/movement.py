"""
Purpose: Movement authority for the demo table: animate tokens through waypoints.
Dependencies: asyncio, math, routing/hooks.py (updateToken event).
Ext Hooks: Per-token speed from actor stats.
Client Only: Owns token positions; reports every step through the updateToken hook.
"""

import asyncio
import math
from routing.hooks import UPDATE_TOKEN


class TableMovement:
    def __init__(self, hooks, speed=300.0, frame_time=1 / 60):
        self.hooks = hooks
        self.speed = speed  # Pixels per second
        self.frame_time = frame_time

    async def move_entity_through(self, token, waypoints, options=None):
        """Lerp through each waypoint in order; options are passed along with every update."""
        options = dict(options or {})
        for waypoint in waypoints:
            await self._lerp_to(token, waypoint["x"], waypoint["y"], options)

    async def _lerp_to(self, token, x, y, options):
        start_x, start_y = token.x, token.y
        distance = math.hypot(x - start_x, y - start_y)
        steps = max(1, int(distance / (self.speed * self.frame_time)))
        for i in range(1, steps + 1):
            t = i / steps
            self.set_position(token, start_x + (x - start_x) * t, start_y + (y - start_y) * t, options)
            await asyncio.sleep(self.frame_time)

    def set_position(self, token, x, y, options=None):
        changes = {}
        if x != token.x:
            changes["x"] = x
        if y != token.y:
            changes["y"] = y
        token.x, token.y = x, y
        if changes:
            self.hooks.call(UPDATE_TOKEN, token, changes, options or {})
