"""
Purpose: Translate pygame mouse events into drag gestures for the routing engine.
Dependencies: pygame, asyncio, time, client/table_state.py, routing/module.py.
Ext Hooks: Keybinds (e.g., hold Shift to bypass routing).
Client Only: Input handling only; the default drop move is the host's, routed moves are the engine's.
"""

import asyncio
import time
import pygame


class InputHandler:
    """
    Handles mouse and keyboard input and forwards drags to the DragCoordinator.

    Pointer down on a token starts a drag, pointer up drops it. The drop is
    awaited in a task; when the engine reports that it will not use waypoints
    the token is moved directly to the drop cell, as the table would do
    without routing.
    """

    def __init__(self, state, grid, routing, movement):
        """
        Args:
            state: TableState instance
            grid: SquareGrid instance for screen/world conversion
            routing: SmartRouting instance
            movement: TableMovement instance for the default drop move
        """
        self.state = state
        self.grid = grid
        self.routing = routing
        self.movement = movement
        self.drop_tasks = set()

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.state.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.handle_mouse_down(event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.handle_mouse_motion(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.handle_mouse_up(event.pos)
        elif event.type == pygame.KEYDOWN:
            self.handle_keydown(event.key)

    def handle_mouse_down(self, pos):
        world = self.grid.screen_to_world(pos)
        token = self.state.token_at(world, self.grid.cell_size)
        if token is None:
            return
        self.state.dragging_id = token.id
        self.state.pointer_world = world
        self.routing.coordinator.on_drag_start(token)

    def handle_mouse_motion(self, pos):
        if self.state.dragging_id is None:
            return
        self.state.pointer_world = self.grid.screen_to_world(pos)
        token = self.state.get_token(self.state.dragging_id)
        if token is not None:
            self.routing.coordinator.on_pointer_move(token, self.state.pointer_world)

    def handle_mouse_up(self, pos):
        if self.state.dragging_id is None:
            return
        token = self.state.get_token(self.state.dragging_id)
        self.state.dragging_id = None
        if token is None:
            return
        drop = self.grid.screen_to_world(pos)
        task = asyncio.get_running_loop().create_task(self._drop(token, drop))
        self.drop_tasks.add(task)
        task.add_done_callback(self.drop_tasks.discard)

    async def _drop(self, token, drop):
        used_waypoints = await self.routing.coordinator.on_drag_drop(token, drop)
        if used_waypoints:
            self.state.set_status(f"{token.name}: following route", time.time())
            return
        self.default_drop(token, drop)

    def default_drop(self, token, drop):
        """Plain drag-and-drop: snap to the nearest cell (or stay raw without a coordinate helper)."""
        transform = self.routing.transform
        if transform.is_available():
            token_data = transform.get_token_data(token)
            drop = transform.to_world_space(transform.to_route_space(drop, token_data), token_data)
        self.movement.set_position(token, drop[0], drop[1])
        self.routing.feedback.clear(token)

    def handle_keydown(self, key):
        """R toggles routing, D toggles debug output, Escape quits."""
        settings = self.routing.settings
        if key == pygame.K_r:
            settings.set("enable_pathfinding", not settings.is_pathfinding_enabled())
            self.state.set_status(f"Routing {'on' if settings.is_pathfinding_enabled() else 'off'}", time.time())
        elif key == pygame.K_d:
            settings.set("debug_mode", not settings.is_debug_mode())
        elif key == pygame.K_ESCAPE:
            self.state.running = False
