from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .grid import Glass
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


class Action(IntEnum):
    """Everything a command string can ask of the falling piece."""

    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    HARD_DROP = 3


class CommandError(ValueError):
    """A command string contains a token the game does not understand."""


_SIMPLE_TOKENS = {
    "LEFT": Action.LEFT,
    "RIGHT": Action.RIGHT,
    "DOWN": Action.HARD_DROP,
}
_ACT_RE = re.compile(r"^ACT\((\d+)\)$")


def parse_command(command: str) -> List[Action]:
    """Translate a server command string into game actions.

    ``ACT(n)`` becomes ``n`` clockwise rotations; ``DOWN`` is a hard drop.
    """
    actions: List[Action] = []
    for token in filter(None, (t.strip() for t in command.split(","))):
        if token in _SIMPLE_TOKENS:
            actions.append(_SIMPLE_TOKENS[token])
            continue
        match = _ACT_RE.match(token)
        if match is None:
            raise CommandError(f"Unknown command token: {token!r}")
        actions.extend([Action.ROTATE_CW] * (int(match.group(1)) % 4))
    return actions


@dataclass
class GameConfig:
    size: int = 18
    random_seed: Optional[int] = None
    spawn_y: int = 0
    lines_per_level: int = 10


class TetrisGame:
    """Local stand-in for the remote game server.

    Spawns random pieces at the top of a ``Glass``, executes command strings
    and hands out the same kind of ``Snapshot`` the server would send.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.glass = Glass(self.config.size)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_dropped = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self.reset()

    @property
    def level(self) -> int:
        return 1 + self.lines_cleared_total // max(1, self.config.lines_per_level)

    def reset(self) -> None:
        self.glass.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_dropped = 0
        self.game_over = False
        self._spawn_piece()

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return Piece(kind=kind, rotation=0)

    def spawn(self, kind: TetrominoType) -> None:
        """Replace the falling piece with ``kind`` at the spawn position."""
        self._spawn_piece(Piece(kind=kind, rotation=0))

    def _spawn_piece(self, piece: Optional[Piece] = None) -> None:
        self.current_piece = piece or self._random_piece()
        _, w = self.current_piece.size
        self.current_x = (self.glass.size - w) // 2
        self.current_y = self.config.spawn_y
        if not self.glass.can_place(self.current_piece.cells_at(self.current_x, self.current_y)):
            logger.info("Glass overflow after %d pieces", self.pieces_dropped)
            self.score -= self.rules.overflow_penalty
            self.game_over = True
            self.current_piece = None

    def _shift(self, dx: int) -> None:
        # Blocked moves are ignored, as on the server.
        piece = self.current_piece
        if piece is not None and self.glass.can_place(piece.cells_at(self.current_x + dx, self.current_y)):
            self.current_x += dx

    def _turn(self) -> None:
        if self.current_piece is None:
            return
        turned = self.current_piece.rotated(1)
        if self.glass.can_place(turned.cells_at(self.current_x, self.current_y)):
            self.current_piece = turned

    def _lock_piece(self) -> int:
        assert self.current_piece is not None
        self.glass.drop(self.current_piece, self.current_x, self.current_y)
        lines = self.glass.lines_removed()
        self.lines_cleared_total += lines
        self.pieces_dropped += 1
        gained = self.rules.score_for_drop(lines)
        self.score += gained
        if lines:
            logger.debug("Cleared %d line(s), level %d", lines, self.level)
        return gained

    def hard_drop(self) -> int:
        if self.current_piece is None:
            return 0
        gained = self._lock_piece()
        self._spawn_piece()
        return gained

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, {}

        reward = 0
        if action == Action.LEFT:
            self._shift(-1)
        elif action == Action.RIGHT:
            self._shift(1)
        elif action == Action.ROTATE_CW:
            self._turn()
        elif action == Action.HARD_DROP:
            reward = self.hard_drop()

        info = {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "level": self.level,
        }
        return self.get_state(), reward, self.game_over, info

    def execute(self, command: str) -> int:
        """Apply a whole command string; returns the points it earned."""
        gained = 0
        for action in parse_command(command):
            _, reward, done, _ = self.step(action)
            gained += reward
            if done:
                break
        return gained

    def get_state(self) -> np.ndarray:
        state = self.glass.occupancy()
        if self.current_piece is not None:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if self.glass.is_inside(x, y):
                    state[y, x] = True
        return state

    def snapshot(self) -> Snapshot:
        kind = None if self.current_piece is None else self.current_piece.kind
        return Snapshot(
            occupancy=self.get_state(),
            piece=kind,
            x=self.current_x,
            y=self.current_y,
            level=self.level,
        )
