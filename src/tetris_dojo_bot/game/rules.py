from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    """Points awarded by the local game for each fixed piece."""

    line_clear_scores: tuple[int, int, int, int] = (100, 300, 700, 1500)
    figure_score: int = 1
    overflow_penalty: int = 500

    def score_for_drop(self, lines: int) -> int:
        if lines <= 0:
            return self.figure_score
        bonus = self.line_clear_scores[min(lines, 4) - 1]
        return self.figure_score + bonus
