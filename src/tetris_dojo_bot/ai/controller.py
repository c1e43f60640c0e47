from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import AgentConfig
from ..game.grid import Glass
from ..game.pieces import Piece
from ..game.snapshot import Snapshot
from .encoder import encode_move
from .profiles import WeightProfile
from .search import Candidate, best_placement

logger = logging.getLogger(__name__)

IDLE = "idle"
OVERRIDE = "override"
SEARCH = "search"


@dataclass(frozen=True)
class Decision:
    command: str
    kind: str
    candidate: Optional[Candidate] = None
    profile: Optional[str] = None


def strip_active_piece(snapshot: Snapshot, piece: Piece) -> Glass:
    """Glass built from the snapshot with the falling piece's cells removed."""
    glass = Glass.from_occupancy(snapshot.occupancy)
    glass.set_active_overlay(piece, snapshot.x, snapshot.y)
    cells = glass.active_overlay_cells()
    glass.set_active_overlay(None)
    glass.clear_cells(cells)
    return glass


def override_applies(glass: Glass, piece: Piece, profile: WeightProfile) -> bool:
    return piece.kind == profile.override.kind and glass.four_lines_clearable()


class TurnController:
    """Decides one turn: snapshot in, command string out.

    Raises ``NoLegalMoveError`` when the piece fits nowhere; what to do then
    is up to the caller.
    """

    def __init__(self, config: Optional[AgentConfig] = None) -> None:
        self.config = config or AgentConfig()

    def decide(self, snapshot: Snapshot) -> Decision:
        if snapshot.piece is None:
            return Decision(command="", kind=IDLE)

        profile = self.config.profile_for_level(snapshot.level)
        piece = Piece(snapshot.piece)
        glass = strip_active_piece(snapshot, piece)

        if override_applies(glass, piece, profile):
            rule = profile.override
            logger.debug("Four lines clearable, playing the %s override", profile.name)
            return Decision(
                command=encode_move(rule.rotation, rule.column(glass.size), snapshot.x),
                kind=OVERRIDE,
                profile=profile.name,
            )

        best = best_placement(glass, piece, profile)
        logger.debug(
            "%s: rotation=%d x=%d y=%d score=%.3f (%s)",
            piece.kind.name, best.rotation, best.x, best.y, best.score, profile.name,
        )
        return Decision(
            command=encode_move(best.rotation, best.x, snapshot.x),
            kind=SEARCH,
            candidate=best,
            profile=profile.name,
        )

    def answer(self, snapshot: Snapshot) -> str:
        return self.decide(snapshot).command
