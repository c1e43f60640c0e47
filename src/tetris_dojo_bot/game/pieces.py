from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray
Cell = Tuple[int, int]


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # clockwise when k>0


# Rotation 0 is the spawn orientation the server reports pieces in.
BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


@dataclass
class Piece:
    """Handle on the falling piece.

    ``rotate`` turns the handle in place; ``rotated`` returns a turned copy and
    is what the placement search uses. The anchor passed to ``cells_at`` is
    the top-left corner of the rotated shape's bounding box.
    """

    kind: TetrominoType
    rotation: int = 0  # 0..3

    def shape(self) -> Shape:
        return _rot90(BASE_SHAPES[self.kind], self.rotation)

    @property
    def size(self) -> Tuple[int, int]:
        """(height, width) of the rotated shape."""
        h, w = self.shape().shape
        return int(h), int(w)

    def rotate(self, quarter_turns: int = 1) -> None:
        self.rotation = (self.rotation + quarter_turns) % 4

    def rotated(self, quarter_turns: int) -> "Piece":
        return Piece(self.kind, (self.rotation + quarter_turns) % 4)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Cell]:
        ys, xs = np.nonzero(self.shape())
        return [(origin_x + int(dx), origin_y + int(dy)) for dy, dx in zip(ys, xs)]
