from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from .ai.profiles import WeightProfile, get_profile


@dataclass
class AgentConfig:
    """Which weight profile plays which level.

    ``level_profiles`` overrides ``profile`` for the listed levels, e.g.
    ``{1: "dellacherie"}`` plays the first level with the full model and
    everything after it with ``profile``.
    """

    profile: str = "dellacherie"
    level_profiles: Dict[int, str] = field(default_factory=dict)
    board_size: int = 18

    def __post_init__(self) -> None:
        # Fail on a typo at startup rather than mid-game.
        for name in [self.profile, *self.level_profiles.values()]:
            get_profile(name)

    def profile_for_level(self, level: int) -> WeightProfile:
        return get_profile(self.level_profiles.get(level, self.profile))


def parse_level_profiles(items: Iterable[str]) -> Dict[int, str]:
    """Parse ``LEVEL=PROFILE`` command-line items."""
    result: Dict[int, str] = {}
    for item in items:
        level, sep, name = item.partition("=")
        if not sep or not level.strip().isdigit() or not name.strip():
            raise ValueError(f"Expected LEVEL=PROFILE, got {item!r}")
        result[int(level)] = name.strip()
    return result
