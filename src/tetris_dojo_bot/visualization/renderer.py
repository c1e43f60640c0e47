from __future__ import annotations

from typing import Optional, Tuple

import pygame

from tetris_dojo_bot.game import TetrisGame, TetrominoType

_PIECE_COLORS = {
    TetrominoType.I: (0, 240, 240),
    TetrominoType.O: (240, 240, 0),
    TetrominoType.T: (160, 0, 240),
    TetrominoType.S: (0, 240, 0),
    TetrominoType.Z: (240, 0, 0),
    TetrominoType.J: (0, 0, 240),
    TetrominoType.L: (240, 160, 0),
}
_EMPTY = (20, 20, 26)
_FIXED = (130, 130, 140)


def _color_for_cell(fixed: bool, falling: Optional[TetrominoType]) -> Tuple[int, int, int]:
    if falling is not None:
        return _PIECE_COLORS[falling]
    return _FIXED if fixed else _EMPTY


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.font: Optional[pygame.font.Font] = None

    def window_size(self, size: int) -> Tuple[int, int]:
        side = size * self.cell_size + self.margin * 2
        return side, side + self.margin

    def _glass_surface(self, game: TetrisGame) -> pygame.Surface:
        size = game.glass.size
        falling = set()
        if game.current_piece is not None:
            falling = set(game.current_piece.cells_at(game.current_x, game.current_y))
        surf = pygame.Surface((size * self.cell_size, size * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(size):
            for x in range(size):
                kind = game.current_piece.kind if (x, y) in falling else None
                color = _color_for_cell(bool(game.glass.grid[y, x]), kind)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont(None, 22)
        screen.fill((10, 10, 14))
        screen.blit(self._glass_surface(game), (self.margin, self.margin * 2))
        txt = self.font.render(
            f"score {game.score}  lines {game.lines_cleared_total}  level {game.level}",
            True,
            (230, 230, 230),
        )
        screen.blit(txt, (self.margin, 4))
        pygame.display.flip()
