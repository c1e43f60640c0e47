"""Placement search and scoring.

- extract_features: board-quality metrics of a glass after a drop
- WeightProfile: coefficients plus search settings; see PROFILES
- find_candidates / select_best: enumerate and rank legal placements
- encode_move: candidate -> server command string

The turn controller lives in ``tetris_dojo_bot.ai.controller``.
"""

from .errors import NoLegalMoveError, SolverError, UnknownFeatureError, UnknownProfileError
from .features import FeatureVector, extract_features, occupancy_from_cells
from .profiles import DELLACHERIE, PROFILES, SIMPLIFIED, OverrideRule, WeightProfile, get_profile, score
from .search import Candidate, best_placement, find_candidates, select_best
from .encoder import encode_move

__all__ = [
    "SolverError",
    "NoLegalMoveError",
    "UnknownProfileError",
    "UnknownFeatureError",
    "FeatureVector",
    "extract_features",
    "occupancy_from_cells",
    "WeightProfile",
    "OverrideRule",
    "DELLACHERIE",
    "SIMPLIFIED",
    "PROFILES",
    "get_profile",
    "score",
    "Candidate",
    "find_candidates",
    "select_best",
    "best_placement",
    "encode_move",
]
