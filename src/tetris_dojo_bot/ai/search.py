from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..game.grid import Glass
from ..game.pieces import Piece
from .errors import NoLegalMoveError
from .features import FeatureVector, extract_features, occupancy_from_cells
from .profiles import WeightProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One scored placement: turn ``rotation`` times, anchor at ``(x, y)``, drop."""

    rotation: int
    x: int
    y: int
    features: FeatureVector
    score: float


def evaluate(glass: Glass, piece: Piece, x: int, y: int, rotation: int, profile: WeightProfile) -> Candidate:
    """Drop ``piece`` on a clone of ``glass`` and score the result."""
    clone = glass.clone()
    clone.drop(piece, x, y)
    features = extract_features(
        occupancy_from_cells(clone.dropped_cells(), clone.size),
        landing_height=clone.landing_height(),
        eroded_cells=clone.eroded_cells(),
        lines_removed=clone.lines_removed(),
    )
    return Candidate(rotation=rotation, x=x, y=y, features=features, score=profile.score(features))


def find_candidates(glass: Glass, piece: Piece, profile: WeightProfile) -> List[Candidate]:
    """Every legal placement of ``piece``, in rotation -> row -> column order.

    The rotation for pass ``r`` is ``piece.rotated(r)``; the caller's piece is
    left untouched.
    """
    size = glass.size
    result: List[Candidate] = []
    for r in profile.rotations:
        turned = piece.rotated(r)
        for y in range(size):
            for x in range(size):
                if glass.accept(turned, x, y, profile.last_column_allowed):
                    result.append(evaluate(glass, turned, x, y, r, profile))
    logger.debug("%d candidates for %s under %s", len(result), piece.kind.name, profile.name)
    return result


def select_best(candidates: Sequence[Candidate]) -> Candidate:
    """Highest score; on ties the earliest candidate wins."""
    best = None
    for candidate in candidates:
        if best is None or candidate.score > best.score:
            best = candidate
    if best is None:
        raise ValueError("No candidates to choose from")
    return best


def best_placement(glass: Glass, piece: Piece, profile: WeightProfile) -> Candidate:
    candidates = find_candidates(glass, piece, profile)
    if not candidates:
        raise NoLegalMoveError(piece.kind.name, profile.name)
    return select_best(candidates)
