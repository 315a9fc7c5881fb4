"""Score, level and combo bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


# Base award per number of simultaneously cleared lines.
SCORE_TABLE: Dict[int, int] = {
    0: 0,
    1: 100,
    2: 300,
    3: 500,
    4: 800,
}

COMBO_BONUS = 50
SPECIAL_MULTIPLIER = 2
LINES_PER_LEVEL = 10


@dataclass(frozen=True)
class GameStats:
    score: int = 0
    lines_cleared: int = 0
    level: int = 1
    combo: int = 0
    max_combo: int = 0


@dataclass(frozen=True)
class LineClearAward:
    awarded: int
    total_score: int


class Scoring:
    """Accumulate points from line clears, drops and item bonuses."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._score = 0
        self._lines_cleared = 0
        self._level = 1
        self._combo = 0
        self._max_combo = 0

    def register_line_clear(
        self,
        count: int,
        *,
        special_multiplier: bool = False,
        score_multiplier: int = 1,
    ) -> Optional[LineClearAward]:
        """Score a lock that cleared ``count`` lines.

        A lock without clears breaks the combo and awards nothing.  Otherwise
        the base award (doubled for a special clear) plus the combo bonus is
        multiplied by ``score_multiplier``.
        """

        if count <= 0:
            self._combo = 0
            return None

        base = SCORE_TABLE.get(count, 0)
        self._combo += 1
        self._max_combo = max(self._max_combo, self._combo)
        combo_bonus = COMBO_BONUS * (self._combo - 1) if self._combo > 1 else 0
        multiplier = SPECIAL_MULTIPLIER if special_multiplier else 1
        awarded = (base * multiplier + combo_bonus) * score_multiplier

        self._score += awarded
        self._lines_cleared += count
        self._level = 1 + self._lines_cleared // LINES_PER_LEVEL
        return LineClearAward(awarded=awarded, total_score=self._score)

    def add_soft_drop_points(self, points: int) -> None:
        self.add_bonus(points)

    def add_hard_drop_points(self, points: int) -> None:
        self.add_bonus(points)

    def add_bonus(self, points: int) -> None:
        if points <= 0:
            return
        self._score += points

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    def snapshot(self) -> GameStats:
        return GameStats(
            score=self._score,
            lines_cleared=self._lines_cleared,
            level=self._level,
            combo=self._combo,
            max_combo=self._max_combo,
        )


__all__ = ["GameStats", "LineClearAward", "SCORE_TABLE", "Scoring"]
