from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set, Tuple

import numpy as np

from .pieces import Cell, Piece


@dataclass(frozen=True)
class DropResult:
    landing_height: int = 0
    eroded_cells: int = 0
    lines_removed: int = 0


class Glass:
    """Square well the pieces fall into.

    ``grid[y, x]`` is True for an occupied cell; row 0 is the top of the
    glass and ``y`` grows downward. ``drop`` lets a piece fall from its
    anchor until it rests, fixes it, removes full rows and remembers the
    metrics of that drop for ``landing_height``, ``eroded_cells`` and
    ``lines_removed``.
    """

    def __init__(self, size: int = 18) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.bool_)
        self._overlay: Optional[Tuple[Piece, int, int]] = None
        self._last_drop = DropResult()

    @classmethod
    def from_occupancy(cls, occupancy: np.ndarray) -> "Glass":
        occupancy = np.asarray(occupancy, dtype=np.bool_)
        h, w = occupancy.shape
        if h != w:
            raise ValueError(f"Expected a square glass, got {h}x{w}")
        glass = cls(h)
        glass.grid = occupancy.copy()
        return glass

    def reset(self) -> None:
        self.grid.fill(False)
        self._overlay = None
        self._last_drop = DropResult()

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def can_place(self, cells: Iterable[Cell]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x]:
                return False
        return True

    def accept(self, piece: Piece, x: int, y: int, last_column_allowed: bool = True) -> bool:
        cells = piece.cells_at(x, y)
        if not last_column_allowed and any(cx == self.size - 1 for cx, _ in cells):
            return False
        return self.can_place(cells)

    def _resting_y(self, piece: Piece, x: int, y: int) -> int:
        while self.can_place(piece.cells_at(x, y + 1)):
            y += 1
        return y

    def drop(self, piece: Piece, x: int, y: int) -> None:
        if not self.can_place(piece.cells_at(x, y)):
            raise ValueError(f"Cannot drop {piece.kind.name} at ({x}, {y})")
        cells = piece.cells_at(x, self._resting_y(piece, x, y))
        for cx, cy in cells:
            self.grid[cy, cx] = True

        bottom = max(cy for _, cy in cells)
        full_rows = set(int(r) for r in np.flatnonzero(self.grid.all(axis=1)))
        eroded = sum(1 for _, cy in cells if cy in full_rows)
        self._clear_rows(full_rows)
        self._last_drop = DropResult(
            landing_height=self.size - 1 - bottom,
            eroded_cells=eroded,
            lines_removed=len(full_rows),
        )

    def _clear_rows(self, rows: Set[int]) -> None:
        if not rows:
            return
        kept = np.delete(self.grid, sorted(rows), axis=0)
        fresh = np.zeros((len(rows), self.size), dtype=np.bool_)
        self.grid = np.vstack((fresh, kept))

    def clear_cells(self, cells: Iterable[Cell]) -> None:
        for x, y in cells:
            if self.is_inside(x, y):
                self.grid[y, x] = False

    def clone(self) -> "Glass":
        twin = Glass(self.size)
        twin.grid = self.grid.copy()
        if self._overlay is not None:
            piece, x, y = self._overlay
            twin._overlay = (piece.rotated(0), x, y)
        twin._last_drop = self._last_drop
        return twin

    def set_active_overlay(self, piece: Optional[Piece], x: int = 0, y: int = 0) -> None:
        self._overlay = None if piece is None else (piece, x, y)

    def active_overlay_cells(self) -> Set[Cell]:
        if self._overlay is None:
            return set()
        piece, x, y = self._overlay
        return {(cx, cy) for cx, cy in piece.cells_at(x, y) if self.is_inside(cx, cy)}

    def dropped_cells(self) -> Set[Cell]:
        ys, xs = np.nonzero(self.grid)
        return {(int(x), int(y)) for y, x in zip(ys, xs)}

    def occupancy(self) -> np.ndarray:
        return self.grid.copy()

    def landing_height(self) -> int:
        return self._last_drop.landing_height

    def eroded_cells(self) -> int:
        return self._last_drop.eroded_cells

    def lines_removed(self) -> int:
        return self._last_drop.lines_removed

    def four_lines_clearable(self) -> bool:
        """True when one vertical I in the last column would clear four rows.

        The four bottom rows must be full except for the last column, and the
        last column must be open all the way down.
        """
        if self.size < 4:
            return False
        last = self.size - 1
        if self.grid[:, last].any():
            return False
        return bool(self.grid[-4:, :last].all())
