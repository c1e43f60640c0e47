"""Weight profiles: which features count, how much, and how to search.

A profile bundles everything that differs between the two scoring
strategies: the coefficients, the rotation range searched, whether the last
column may be used, and the override placement for a four-line clear.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..game.pieces import TetrominoType
from .errors import UnknownFeatureError, UnknownProfileError
from .features import SCALAR_FEATURES, FeatureVector


@dataclass(frozen=True)
class OverrideRule:
    """Fixed placement played instead of searching.

    Applies when the falling piece is ``kind`` and the glass reports that
    four lines are clearable. ``x=None`` targets the last column of whatever
    glass is being played.
    """

    kind: TetrominoType = TetrominoType.I
    rotation: int = 1
    x: Optional[int] = None
    y: int = 2

    def column(self, size: int) -> int:
        return size - 1 if self.x is None else self.x


@dataclass(frozen=True)
class WeightProfile:
    name: str
    weights: Mapping[str, float]
    rotations: Tuple[int, ...] = (0, 1, 2, 3)
    last_column_allowed: bool = True
    override: OverrideRule = field(default_factory=OverrideRule)

    def __post_init__(self) -> None:
        unknown = [k for k in self.weights if k not in SCALAR_FEATURES]
        if unknown:
            raise UnknownFeatureError(f"Profile {self.name!r} weights unknown features: {unknown}")
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def score(self, features: FeatureVector) -> float:
        return score(features, self.weights)


def score(features: FeatureVector, weights: Mapping[str, float]) -> float:
    return float(sum(getattr(features, name) * w for name, w in weights.items()))


# Dellacherie-style coefficients.
DELLACHERIE = WeightProfile(
    name="dellacherie",
    weights={
        "landing_height": -12.63,
        "eroded_cells": 6.60,
        "row_transitions": -9.22,
        "column_transitions": -19.77,
        "holes": -13.08,
        "wells": -10.49,
        "hole_depth": -1.61,
        "rows_with_holes": -24.04,
    },
    rotations=(0, 1, 2, 3),
    last_column_allowed=True,
)

# Yiyuan Lee's four weights plus two height terms.
SIMPLIFIED = WeightProfile(
    name="simplified",
    weights={
        "lines_removed": 0.760666,
        "max_height": -0.3,
        "sum_height": -0.510066,
        "relative_height": -0.1,
        "holes": -0.35663,
        "bumpiness": -0.184483,
    },
    rotations=(0, 1, 2),
    last_column_allowed=False,
)

PROFILES: Dict[str, WeightProfile] = {p.name: p for p in (DELLACHERIE, SIMPLIFIED)}


def get_profile(name: str) -> WeightProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name) from None
