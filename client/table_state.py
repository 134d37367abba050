"""
Purpose: Centralize mutable table state (tokens, current drag, status message) for the demo host.
Dependencies: routing/models.py for Token.
Ext Hooks: Selection of several tokens, per-user ownership.
Game Loop: Read by client/table.py for drawing; mutated by client/input_handler.py.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from routing.models import Token


@dataclass
class TableState:
    """
    Everything the table loop needs between frames.

    The drag fields describe the gesture as the host sees it (which token is
    under the pointer and where the pointer is); the routing engine keeps its
    own session table.
    """

    tokens: List[Token] = field(default_factory=list)
    dragging_id: Optional[str] = None  # Token under the pointer while the button is held
    pointer_world: Tuple[float, float] = (0.0, 0.0)
    status_message: str = ""
    status_message_time: float = 0.0
    MESSAGE_DURATION: float = 3.0
    running: bool = True

    def token_at(self, world_pos, cell_size) -> Optional[Token]:
        """Topmost token whose footprint covers `world_pos`."""
        for token in reversed(self.tokens):
            half_w = token.footprint.width * cell_size / 2
            half_h = token.footprint.height * cell_size / 2
            if abs(world_pos[0] - token.x) <= half_w and abs(world_pos[1] - token.y) <= half_h:
                return token
        return None

    def get_token(self, token_id) -> Optional[Token]:
        for token in self.tokens:
            if token.id == token_id:
                return token
        return None

    def set_status(self, message, now):
        self.status_message = message
        self.status_message_time = now
        print(message)
