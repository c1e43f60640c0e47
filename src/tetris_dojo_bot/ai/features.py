"""Board-quality features of a glass after a simulated placement.

Everything geometric is derived from a boolean occupancy matrix indexed
``[y, x]`` with row 0 at the top. Landing height, eroded cells and removed
lines are properties of the drop itself and are passed in as reported by
the glass.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple, Tuple

import numpy as np

from ..game.pieces import Cell


class FeatureVector(NamedTuple):
    landing_height: int = 0
    eroded_cells: int = 0
    lines_removed: int = 0
    row_transitions: int = 0
    column_transitions: int = 0
    holes: int = 0
    hole_depth: int = 0
    rows_with_holes: int = 0
    wells: int = 0
    column_heights: Tuple[int, ...] = ()
    bumpiness: int = 0
    sum_height: int = 0
    max_height: int = 0
    relative_height: int = 0


# Features a weight profile may put a coefficient on.
SCALAR_FEATURES = tuple(f for f in FeatureVector._fields if f != "column_heights")


def occupancy_from_cells(cells: Iterable[Cell], size: int) -> np.ndarray:
    occ = np.zeros((size, size), dtype=np.bool_)
    for x, y in cells:
        occ[y, x] = True
    return occ


def column_tops(occ: np.ndarray) -> np.ndarray:
    """Row index of the topmost occupied cell per column, ``rows`` if empty."""
    rows = occ.shape[0]
    return np.where(occ.any(axis=0), np.argmax(occ, axis=0), rows)


def well_sum(occ: np.ndarray) -> int:
    """Sum of d(d+1)/2 over every well run of depth d.

    A well cell is empty while both horizontal neighbours are occupied, so
    the first and last columns never hold one.
    """
    rows, cols = occ.shape
    if cols < 3:
        return 0
    inner = ~occ[:, 1:-1] & occ[:, :-2] & occ[:, 2:]
    total = 0
    for col in range(inner.shape[1]):
        depth = 0
        for y in range(rows):
            if inner[y, col]:
                depth += 1
            elif depth:
                total += depth * (depth + 1) // 2
                depth = 0
        # A run still open at the floor is dropped.
    return total


def extract_features(
    occupancy: np.ndarray,
    landing_height: int = 0,
    eroded_cells: int = 0,
    lines_removed: int = 0,
) -> FeatureVector:
    occ = np.asarray(occupancy, dtype=np.bool_)
    rows, _ = occ.shape

    row_transitions = int(np.count_nonzero(occ[:, 1:] != occ[:, :-1]))
    column_transitions = int(np.count_nonzero(occ[1:, :] != occ[:-1, :]))

    tops = column_tops(occ)
    heights = rows - tops

    # Holes: empty cells below the column top
    r_idx = np.arange(rows)[:, None]
    holes_mask = (r_idx > tops[None, :]) & ~occ
    holes = int(np.count_nonzero(holes_mask))
    hole_depth = int(np.sum((r_idx - tops[None, :]) * holes_mask))
    # Counted per column; the coefficient was tuned against this definition.
    rows_with_holes = int(np.count_nonzero(holes_mask.any(axis=0)))

    max_height = int(heights.max()) if heights.size else 0
    min_height = int(heights.min()) if heights.size else 0

    return FeatureVector(
        landing_height=int(landing_height),
        eroded_cells=int(eroded_cells),
        lines_removed=int(lines_removed),
        row_transitions=row_transitions,
        column_transitions=column_transitions,
        holes=holes,
        hole_depth=hole_depth,
        rows_with_holes=rows_with_holes,
        wells=well_sum(occ),
        column_heights=tuple(int(h) for h in heights),
        bumpiness=int(np.sum(np.abs(np.diff(heights)))),
        sum_height=int(heights.sum()),
        max_height=max_height,
        relative_height=max_height - min_height,
    )
