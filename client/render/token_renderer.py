"""
Purpose: Draw tokens (footprint-sized discs with name labels) and the drag ghost.
Dependencies: pygame.
Ext Hooks: Token artwork instead of discs.
Client Only: All visuals.
"""

import pygame


class TokenRenderer:
    def __init__(self, font, cell_size):
        self.font = font
        self.cell_size = cell_size

    def draw_token(self, screen, token, center, color=(200, 60, 60), alpha=255):
        radius = int(self.cell_size * max(token.footprint.width, token.footprint.height) / 2) - 4
        size = radius * 2 + 2
        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(surf, color + (alpha,), (size // 2, size // 2), radius)
        pygame.draw.circle(surf, (255, 255, 255, alpha), (size // 2, size // 2), radius, 2)
        screen.blit(surf, (int(center[0]) - size // 2, int(center[1]) - size // 2))
        label = self.font.render(token.name, True, (255, 255, 255))
        screen.blit(label, (int(center[0]) - label.get_width() // 2, int(center[1]) + radius + 2))

    def draw_ghost(self, screen, token, center):
        """Semi-transparent copy following the pointer during a drag."""
        self.draw_token(screen, token, center, alpha=110)
