from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    lines_per_level: int = 10
    initial_drop_ms: int = 800
    speedup_per_level_ms: int = 60
    min_drop_ms: int = 120

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1] * level
        return 0

    def level_after(self, level: int, total_lines: int) -> int:
        # At most one level per lock, even if the threshold is passed by more
        if total_lines >= level * self.lines_per_level:
            return level + 1
        return level

    def drop_interval(self, level: int) -> int:
        return max(self.min_drop_ms, self.initial_drop_ms - (level - 1) * self.speedup_per_level_ms)
