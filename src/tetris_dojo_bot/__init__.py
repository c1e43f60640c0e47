"""Heuristic decision engine for a Tetris dojo bot."""

from .ai.controller import Decision, TurnController
from .config import AgentConfig

__version__ = "0.1.0"

__all__ = ["AgentConfig", "Decision", "TurnController", "__version__"]
