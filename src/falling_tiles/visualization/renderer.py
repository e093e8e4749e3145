from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_tiles.game import Snapshot, count_contiguous_bottom_rows, overlay_float


Color = Tuple[int, int, int]

EMPTY: Color = (255, 255, 255)
FILLED: Color = (32, 32, 32)
HIGHLIGHT: Color = (0, 64, 196)
CLEARING: Color = (196, 0, 0)
GRID_LINE: Color = (204, 204, 204)
BACKGROUND: Color = (240, 240, 240)


def cell_colors(snapshot: Snapshot) -> np.ndarray:
    """RGB colour per cell, shape (width, height, 3).

    Cells inside the complete bottom rows are red, highlighted cells blue and
    other filled cells dark; the float is drawn like any filled cell.
    """
    grid = overlay_float(snapshot.board, snapshot.float)
    width, height = grid.shape
    bottom_index = height - count_contiguous_bottom_rows(grid)
    colors = np.empty((width, height, 3), dtype=np.uint8)
    colors[...] = EMPTY
    filled = grid != 0
    colors[filled] = FILLED
    colors[filled & (snapshot.highlight != 0)] = HIGHLIGHT
    colors[:, bottom_index:][filled[:, bottom_index:]] = CLEARING
    return colors


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 12) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (width * self.cell_size + self.margin * 2, height * self.cell_size + self.margin * 2)

    def _grid_surface(self, snapshot: Snapshot) -> pygame.Surface:
        colors = cell_colors(snapshot)
        w, h = colors.shape[:2]
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(GRID_LINE)
        for x in range(w):
            for y in range(h):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, tuple(int(c) for c in colors[x, y]), rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        grid_surf = self._grid_surface(snapshot)
        screen.fill(BACKGROUND)
        screen.blit(grid_surf, (self.margin, self.margin))
        if snapshot.game_over:
            font = pygame.font.SysFont(None, 28)
            text = font.render("Game Over - R to restart", True, CLEARING)
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
