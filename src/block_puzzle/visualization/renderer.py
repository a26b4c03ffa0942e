from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pygame

from block_puzzle.game import PlacementPreview, Shape
from block_puzzle.game.shapes import COLOR_RGB, EMPTY_RGB, Coordinate


BACKGROUND = (30, 64, 175)
PREVIEW_VALID = (120, 220, 140)
PREVIEW_INVALID = (220, 120, 120)
FLASH = (255, 255, 255)
SELECTED_OUTLINE = (255, 255, 255)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return COLOR_RGB.get(int(v), EMPTY_RGB)


class Renderer:
    """Draws the board, hover preview, flashing cells and the piece tray.

    Preview and flash state are passed in per frame and never written back
    to the game.
    """

    def __init__(self, cell_size: int = 48, margin: int = 20, header: int = 80) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.header = header

    def board_origin(self) -> Tuple[int, int]:
        return self.margin, self.margin + self.header

    def cell_at(self, px: int, py: int) -> Tuple[int, int]:
        """Map a pixel position to (row, col); may fall outside the board."""
        ox, oy = self.board_origin()
        return (py - oy) // self.cell_size, (px - ox) // self.cell_size

    def _cell_rect(self, row: int, col: int) -> pygame.Rect:
        ox, oy = self.board_origin()
        return pygame.Rect(ox + col * self.cell_size, oy + row * self.cell_size,
                           self.cell_size - 2, self.cell_size - 2)

    def draw_board(self, screen: pygame.Surface, grid: np.ndarray,
                   flashing: Iterable[Coordinate] = ()) -> None:
        h, w = grid.shape
        flash = set(flashing)
        for row in range(h):
            for col in range(w):
                color = FLASH if (row, col) in flash else _color_for_value(grid[row, col])
                pygame.draw.rect(screen, color, self._cell_rect(row, col), border_radius=3)

    def draw_preview(self, screen: pygame.Surface, preview: Optional[PlacementPreview]) -> None:
        if preview is None:
            return
        color = PREVIEW_VALID if preview.valid else PREVIEW_INVALID
        for row, col in preview.cells:
            pygame.draw.rect(screen, color, self._cell_rect(row, col), 3, border_radius=3)

    def tray_rects(self, grid_size: int, pieces: Sequence[Shape]) -> list:
        """Clickable rectangles of the piece tray to the right of the board."""
        ox, oy = self.board_origin()
        x0 = ox + grid_size * self.cell_size + self.margin
        small = self.cell_size // 2
        rects = []
        for idx in range(len(pieces)):
            rects.append(pygame.Rect(x0, oy + idx * small * 6, small * 5, small * 5))
        return rects

    def window_size(self, grid_size: int, slots: int) -> Tuple[int, int]:
        """Window (width, height) fitting the board and a full tray of `slots` pieces."""
        ox, oy = self.board_origin()
        rects = self.tray_rects(grid_size, [None] * slots)
        right = max([ox + grid_size * self.cell_size] + [r.right for r in rects])
        bottom = max([oy + grid_size * self.cell_size] + [r.bottom for r in rects])
        return right + self.margin, bottom + self.margin

    def draw_tray(self, screen: pygame.Surface, grid_size: int, pieces: Sequence[Shape],
                  selected: Optional[int]) -> None:
        small = self.cell_size // 2
        for idx, (piece, rect) in enumerate(zip(pieces, self.tray_rects(grid_size, pieces))):
            color = _color_for_value(int(piece.color))
            for row, col in piece.blocks:
                cell = pygame.Rect(rect.x + col * small, rect.y + row * small, small - 1, small - 1)
                pygame.draw.rect(screen, color, cell)
            if idx == selected:
                pygame.draw.rect(screen, SELECTED_OUTLINE, rect, 2)

    def draw_text(self, screen: pygame.Surface, font: pygame.font.Font, text: str,
                  pos: Tuple[int, int], color: Tuple[int, int, int] = (230, 230, 230)) -> None:
        screen.blit(font.render(text, True, color), pos)
