"""
Purpose: Keyed store for drag sessions and the animating set.
Dependencies: routing/models.py.
Ext Hooks: Per-user session tables for shared tables.

Owned by one DragCoordinator and passed by reference to the executor and the
hooks manager. Mutations happen between awaits only, so no locking.
"""

from typing import Dict, Optional, Set
from routing.models import DragSession


class SessionStore:
    def __init__(self):
        self.sessions: Dict[str, DragSession] = {}  # token id -> DragSession
        self.animating: Set[str] = set()  # token ids moving through waypoints
        self.generation = 0  # Bumped on teardown; stale work compares against it

    def open(self, token_id: str, session: DragSession) -> DragSession:
        """Store a session, replacing any previous one for the token (last writer wins)."""
        self.sessions[token_id] = session
        return session

    def get(self, token_id: str) -> Optional[DragSession]:
        return self.sessions.get(token_id)

    def is_current(self, token_id: str, session: DragSession) -> bool:
        return self.sessions.get(token_id) is session

    def discard(self, token_id: str, session: Optional[DragSession] = None):
        """Delete the token's session; with `session` given, only if it is still the current one."""
        if session is None or self.is_current(token_id, session):
            self.sessions.pop(token_id, None)

    def clear(self):
        self.sessions.clear()
        self.generation += 1
