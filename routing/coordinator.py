"""
Purpose: Per-token drag state machine (start -> observe -> drop -> resolved/fallback, plus teardown).
Dependencies: routing/config.py, routing/errors.py, routing/models.py, routing/state.py, asyncio.
Ext Hooks: Live route preview on pointer move.
Host: on_drag_drop returns True when the host must skip its own drop movement.
"""

import asyncio
from routing.config import EXECUTOR_START_DELAY
from routing.errors import MoveExecutionError
from routing.models import DragPhase, DragSession, as_point
from routing.state import SessionStore


class DragCoordinator:
    """
    Coordinates one drag gesture per token.

    Routing is deferred to the drop, so a gesture costs at most one oracle
    query however fast the pointer moves. Sessions are keyed by token id; a
    new drag start replaces the previous session, and a planner result is only
    acted on if the session it was computed for is still the stored one.
    Teardown clears every session, which turns late results into no-ops.
    """

    def __init__(self, settings, oracle_client, planner, executor, store=None, start_delay=EXECUTOR_START_DELAY):
        self.settings = settings
        self.oracle_client = oracle_client
        self.planner = planner
        self.executor = executor
        self.store = store if store is not None else SessionStore()
        self.start_delay = start_delay
        self.pending_moves = set()  # Deferred executor tasks not yet moving
        self.running_moves = set()  # Strong refs for tasks already moving

    def on_drag_start(self, token, origin_world=None):
        """Open a session at the token's position. Ignored while routing is off or the oracle is not ready."""
        if not self.settings.is_pathfinding_enabled() or not self.oracle_client.is_ready():
            return None
        origin = as_point(origin_world) if origin_world is not None else as_point((token.x, token.y))
        session = self.store.open(token.id, DragSession(origin_world=origin))
        self.settings.debug(f"Drag started for {token.name} at ({origin.x}, {origin.y})")
        return session

    def on_pointer_move(self, token, pointer_world):
        """Pointer moves are observed only; routing happens on drop."""
        return None

    async def on_drag_drop(self, token, pointer_world) -> bool:
        """Route the drop. True means waypoints will be used and the host must not move the token itself."""
        if not self.settings.is_pathfinding_enabled():
            return False
        session = self.store.get(token.id)
        if session is None or not session.active:
            return False

        self.settings.debug(f"Drag completed for {token.name}")
        # Consumed before the first await; a repeated drop for this session is a no-op
        session.active = False
        session.phase = DragPhase.COMPUTING

        if not (self.oracle_client.is_ready() and self.settings.is_auto_follow_path_enabled()):
            return self._fallback(token, session)

        try:
            planned = await self.planner.plan(token, session.origin_world, pointer_world)
        except Exception as e:
            self.settings.debug(f"Drop pathfinding failed, using default movement: {e}")
            return self._fallback(token, session)

        if not self.store.is_current(token.id, session):
            self.settings.debug(f"Discarding route for {token.name}: drag session superseded or torn down")
            return False

        if planned is None or planned.source != "oracle":
            return self._fallback(token, session)
        route = planned.distinct_points()
        if len(route) < 2:
            return self._fallback(token, session)

        session.route = route
        session.phase = DragPhase.RESOLVED
        self.settings.debug(f"Executing calculated waypoint path with {len(route)} waypoints")
        self._schedule_move(token, route)
        self.store.discard(token.id, session)
        return True

    def _fallback(self, token, session):
        session.phase = DragPhase.FALLBACK
        self.store.discard(token.id, session)
        return False

    def _schedule_move(self, token, route):
        task = asyncio.get_running_loop().create_task(self._deferred_move(token, route, self.store.generation))
        self.pending_moves.add(task)
        task.add_done_callback(self.pending_moves.discard)

    async def _deferred_move(self, token, route, generation):
        # Let the host's drop handler return before the token starts moving
        await asyncio.sleep(self.start_delay)
        if generation != self.store.generation:
            return
        task = asyncio.current_task()
        self.pending_moves.discard(task)
        self.running_moves.add(task)
        try:
            await self.executor.execute(token, route)
        except MoveExecutionError as e:
            self.settings.warn(str(e))
        finally:
            self.running_moves.discard(task)

    def get_drag_state(self, token_id):
        return self.store.get(token_id)

    def update_drag_state(self, token_id, **updates):
        session = self.store.get(token_id)
        if session is None:
            return None
        for key, value in updates.items():
            if not hasattr(session, key):
                raise AttributeError(f"DragSession has no field {key!r}")
            setattr(session, key, value)
        return session

    def is_token_being_dragged(self, token_id) -> bool:
        session = self.store.get(token_id)
        return bool(session and session.active)

    def clear_all_drag_states(self):
        """Teardown: drop every session and any move that has not started yet."""
        self.store.clear()
        for task in list(self.pending_moves):
            task.cancel()
        self.pending_moves.clear()
