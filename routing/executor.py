"""
Purpose: Drive a token through world-space waypoints via the host's movement authority.
Dependencies: routing/config.py, routing/errors.py, routing/models.py, routing/state.py.
Ext Hooks: Per-waypoint speed, pauses at doors.
Host: movement.move_entity_through(token, waypoints, options) is awaited once per route.
"""

from typing import List, Set
from routing.config import MOVEMENT_FLAG
from routing.errors import MoveExecutionError
from routing.models import Point, as_point


class WaypointExecutor:
    def __init__(self, settings, movement, store):
        self.settings = settings
        self.movement = movement
        self.store = store  # SessionStore; its animating set is shared with the hooks manager

    async def execute(self, token, route: List[Point]):
        """
        Move `token` through route[1:]; route[0] is its current position and is not issued.

        The token is marked as animating until the move finishes or fails so
        position updates caused by the move can be told apart from user moves.
        A failing move raises MoveExecutionError and leaves the token wherever
        the authority stopped it.
        """
        if not route or len(route) < 2:
            return

        waypoints = [{"x": p.x, "y": p.y, "snapped": True} for p in (as_point(r) for r in route[1:])]
        self.store.animating.add(token.id)
        try:
            self.settings.debug(f"Starting waypoint movement for {token.name}: "
                                + " -> ".join(f"({round(w['x'])},{round(w['y'])})" for w in waypoints))
            await self.movement.move_entity_through(token, waypoints, {"show_ruler": True, MOVEMENT_FLAG: True})
            self.settings.debug(f"Waypoint movement completed for {token.name}")
        except Exception as e:
            raise MoveExecutionError(token.id, f"waypoint movement failed: {e}") from e
        finally:
            self.store.animating.discard(token.id)

    def is_token_animating(self, token_id: str) -> bool:
        return token_id in self.store.animating

    def get_animating_tokens(self) -> Set[str]:
        return set(self.store.animating)

    def clear_all_animations(self):
        self.store.animating.clear()

    def stop_token_animation(self, token_id: str):
        self.store.animating.discard(token_id)
