"""
Purpose: Square grid drawing and route highlight for the demo table.
Dependencies: pygame, routing/pathfinding/grid_oracle.py (tiles, coordinate helper).
Ext Hooks: Fog of war, light sources.
Client Only: Visuals; the oracle owns the tiles.
"""

import pygame


class SquareGrid:
    def __init__(self, oracle, origin=(0, 0)):
        self.oracle = oracle
        self.tiles = oracle.tiles  # (x, y): Tile, shared with the oracle
        self.cell_size = oracle.coordinate_helper.grid_size
        self.origin = origin  # Screen position of world (0, 0)
        self.path_highlight = []  # Planned route cells (translucent yellow)

    def screen_to_world(self, pos):
        return pos[0] - self.origin[0], pos[1] - self.origin[1]

    def world_to_screen(self, pos):
        return pos[0] + self.origin[0], pos[1] + self.origin[1]

    def cell_rect(self, x, y):
        sx, sy = self.world_to_screen((x * self.cell_size, y * self.cell_size))
        return pygame.Rect(int(sx), int(sy), self.cell_size, self.cell_size)

    def set_path_highlight(self, path):
        self.path_highlight = list(path)

    def draw_cell(self, screen, x, y, color=None):
        rect = self.cell_rect(x, y)
        if not color:
            color = self.tiles[(x, y)].color if (x, y) in self.tiles else (0, 100, 0)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, (0, 0, 0), rect, 1)

    def draw_highlight_path(self, screen, path, color, alpha=128):
        """Draw a path with specified color and alpha."""
        if not path:
            return
        overlay = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        overlay.fill(color + (alpha,))
        for pos in path:
            pos_tuple = tuple(pos)
            if pos_tuple in self.tiles:
                screen.blit(overlay, self.cell_rect(*pos_tuple).topleft)

    def draw(self, screen):
        for x, y in self.tiles:
            self.draw_cell(screen, x, y)
        self.draw_highlight_path(screen, self.path_highlight, (255, 255, 0), 128)
