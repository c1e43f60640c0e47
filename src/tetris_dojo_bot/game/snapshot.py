from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .pieces import TetrominoType

EMPTY = "."


@dataclass(frozen=True, eq=False)
class Snapshot:
    """What the agent sees at the start of a turn.

    ``occupancy`` still contains the falling piece; ``(x, y)`` is that piece's
    anchor. ``piece`` is None while nothing is falling.
    """

    occupancy: np.ndarray
    piece: Optional[TetrominoType] = None
    x: int = 0
    y: int = 0
    level: int = 1

    @property
    def size(self) -> int:
        return int(self.occupancy.shape[0])

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        piece: Optional[TetrominoType] = None,
        x: int = 0,
        y: int = 0,
        level: int = 1,
    ) -> "Snapshot":
        """Build a snapshot from text rows, top row first; '.' is empty."""
        occupancy = np.array([[ch != EMPTY for ch in row] for row in rows], dtype=np.bool_)
        return cls(occupancy=occupancy, piece=piece, x=x, y=y, level=level)

    def render(self) -> str:
        return "\n".join("".join("#" if cell else EMPTY for cell in row) for row in self.occupancy)
