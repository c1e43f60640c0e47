"""Game module for the Tetris dojo bot.

Reference collaborators for the decision engine:
- Glass: the square well, with legality checks, drops and line clearing
- Piece: tetromino handle with rotation mechanics
- TetrominoType: Enum of available piece types
- Snapshot: what the agent sees at the start of a turn
- TetrisGame: local stand-in for the remote server
"""

from .grid import DropResult, Glass
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .snapshot import Snapshot
from .core import Action, CommandError, GameConfig, TetrisGame, parse_command

__all__ = [
    "Glass",
    "DropResult",
    "Piece",
    "TetrominoType",
    "ScoringRules",
    "Snapshot",
    "TetrisGame",
    "GameConfig",
    "Action",
    "CommandError",
    "parse_command",
]
