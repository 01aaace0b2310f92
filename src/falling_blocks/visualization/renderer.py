from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameState, Status
from falling_blocks.game.pieces import CATALOG, PieceKind, rotate


BACKGROUND = (10, 10, 14)
WELL = (30, 30, 36)
EMPTY_CELL = (20, 20, 26)
GHOST = (200, 200, 210)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_CELL
    return CATALOG[abs(v)].rgb


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, state: GameState) -> Tuple[int, int]:
        h, w = state.board.shape
        width = self.margin * 3 + (w + self.panel_cells) * self.cell_size
        height = self.margin * 2 + h * self.cell_size
        return width, height

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def board_surface(self, state: GameState) -> pygame.Surface:
        """Locked cells, ghost outline and the active piece on a well-sized surface."""
        h, w = state.board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(WELL)
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(state.board[y, x])), self._cell_rect(x, y))

        piece = state.active
        if piece is None or state.status is Status.GAME_OVER:
            return surf
        ghost_row = state.ghost_row
        if ghost_row is not None and ghost_row != piece.y:
            for x, y in piece.moved(0, ghost_row - piece.y).cells():
                if 0 <= y < h:
                    pygame.draw.rect(surf, GHOST, self._cell_rect(x, y), 1)
        for x, y in piece.cells():
            if 0 <= y < h:
                pygame.draw.rect(surf, CATALOG[piece.kind].rgb, self._cell_rect(x, y))
        return surf

    def _draw_preview(self, screen: pygame.Surface, kind: Optional[PieceKind], label: str, x0: int, y0: int) -> int:
        font = self._get_font()
        screen.blit(font.render(label, True, TEXT), (x0, y0))
        y0 += 22
        if kind is not None:
            mask = rotate(kind, 0)
            preview = max(8, self.cell_size // 2)
            for py in range(mask.shape[0]):
                for px in range(mask.shape[1]):
                    if mask[py, px]:
                        rect = pygame.Rect(x0 + px * preview, y0 + py * preview, preview - 1, preview - 1)
                        pygame.draw.rect(screen, CATALOG[kind].rgb, rect)
        return y0 + 4 * max(8, self.cell_size // 2) + 10

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        screen.fill(BACKGROUND)
        board = self.board_surface(state)
        screen.blit(board, (self.margin, self.margin))

        x0 = self.margin * 2 + board.get_width()
        y = self.margin
        y = self._draw_preview(screen, state.next_kind, "Next", x0, y)
        y = self._draw_preview(screen, state.hold_kind, "Hold", x0, y)

        font = self._get_font()
        for txt in (f"Score: {state.score}", f"Level: {state.level}", f"Lines: {state.lines}"):
            screen.blit(font.render(txt, True, TEXT), (x0, y))
            y += 22

        if state.status is Status.PAUSED:
            banner = "Paused - press P to resume"
        elif state.status is Status.GAME_OVER:
            banner = f"Game Over - score {state.score} - press R to restart"
        else:
            banner = None
        if banner is not None:
            text = font.render(banner, True, (255, 255, 255))
            rect = text.get_rect(center=(self.margin + board.get_width() // 2, self.margin + board.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
