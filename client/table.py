"""
Purpose: Demo tabletop: drag tokens on a grid and watch them route around walls.
Dependencies: pygame, asyncio, time, client/*, routing/module.py, routing/pathfinding/grid_oracle.py.
Ext Hooks: Load scenes; connect to the HTTP oracle instead of the in-process one.
Client Only: Input and visuals; run with `python -m client.table`.
"""

import asyncio
import time
import pygame
from client.input_handler import InputHandler
from client.map.square_grid import SquareGrid
from client.movement import TableMovement
from client.render.token_renderer import TokenRenderer
from client.table_state import TableState
from routing.hooks import CANVAS_INIT, CANVAS_READY, Hooks
from routing.models import Footprint, Token
from routing.module import SmartRouting
from routing.pathfinding.grid_oracle import GridRouteOracle, generate_tiles
from routing.pathfinding.grid_utils import cells_covered


class TableApp:
    """
    Main table controller: builds the scene, wires the routing engine and runs the loop.

    The loop is a coroutine so drops (which await the oracle) and waypoint
    moves run as tasks between frames.
    """

    def __init__(self, cols=20, rows=14, seed=7, oracle=None):
        pygame.init()
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 16)

        self.oracle = oracle or GridRouteOracle(generate_tiles(cols, rows, seed=seed), cols=cols, rows=rows)
        cell = self.oracle.coordinate_helper.grid_size
        self.SCREEN_WIDTH = cols * cell
        self.SCREEN_HEIGHT = rows * cell + 30  # Status bar
        self.screen = pygame.display.set_mode((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
        pygame.display.set_caption("Smart Token Routing")
        self.clock = pygame.time.Clock()

        self.grid = SquareGrid(self.oracle)
        self.hooks = Hooks()
        self.movement = TableMovement(self.hooks)
        self.routing = SmartRouting(self.movement, oracle=self.oracle, hooks=self.hooks, host=self)
        self.state = TableState(tokens=self._place_tokens())
        self.input_handler = InputHandler(self.state, self.grid, self.routing, self.movement)
        self.token_renderer = TokenRenderer(self.font, cell)

    def _place_tokens(self):
        """Put a small and a large token on the first open cells."""
        tokens = []
        occupied = set()
        specs = [("hero", "Hero", Footprint(1, 1)), ("ogre", "Ogre", Footprint(2, 2))]
        helper = self.oracle.coordinate_helper
        for token_id, name, footprint in specs:
            for (x, y) in sorted(self.oracle.tiles):
                cells = set(cells_covered(x, y, footprint.width, footprint.height))
                if cells & occupied or self.oracle.is_blocked(x, y, footprint):
                    continue
                center = helper.grid_to_pixel((x, y), footprint)
                tokens.append(Token(token_id, name, center.x, center.y, footprint))
                occupied |= cells
                break
        print(f"Placed tokens: {[(t.name, round(t.x), round(t.y)) for t in tokens]}")
        return tokens

    def handle_events(self):
        for event in pygame.event.get():
            self.input_handler.handle_event(event)

    def draw(self, current_time):
        self.screen.fill((0, 0, 0))
        self.grid.draw(self.screen)
        for token in self.state.tokens:
            self.token_renderer.draw_token(self.screen, token, self.grid.world_to_screen((token.x, token.y)))
        if self.state.dragging_id is not None:
            token = self.state.get_token(self.state.dragging_id)
            if token is not None:
                self.token_renderer.draw_ghost(self.screen, token, self.grid.world_to_screen(self.state.pointer_world))
        self._draw_status(current_time)
        pygame.display.flip()

    def _draw_status(self, current_time):
        settings = self.routing.settings
        text = f"Routing: {'on' if settings.is_pathfinding_enabled() else 'off'} (R)  Debug: {'on' if settings.is_debug_mode() else 'off'} (D)"
        if self.state.status_message and current_time - self.state.status_message_time < self.state.MESSAGE_DURATION:
            text += f"  |  {self.state.status_message}"
        surface = self.font.render(text, True, (255, 255, 255))
        self.screen.blit(surface, (8, self.SCREEN_HEIGHT - 24))

    async def run_async(self):
        self.routing.initialize()
        self.hooks.call(CANVAS_READY)
        try:
            while self.state.running:
                self.clock.tick(60)
                self.handle_events()
                self.draw(time.time())
                await asyncio.sleep(0)  # Let drop and movement tasks progress
        finally:
            self.hooks.call(CANVAS_INIT)
            self.routing.shutdown()
            pygame.quit()

    def run(self):
        asyncio.run(self.run_async())


if __name__ == "__main__":
    TableApp().run()
