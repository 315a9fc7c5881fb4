"""Tunable game rules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RulesConfig:
    """Static tunables for one game.

    ``das_ms`` and ``arr_ms`` are auto-repeat hints for the input layer; the
    engine itself only exposes them.
    """

    gravity_per_second: float = 1.2
    lock_delay_ms: float = 500.0
    das_ms: float = 150.0
    arr_ms: float = 40.0
    soft_drop_multiplier: float = 16.0
    special_piece_chance: float = 0.05

    def __post_init__(self) -> None:
        if self.gravity_per_second < 0:
            raise ValueError(f"gravity_per_second must be >= 0, got {self.gravity_per_second}")
        if self.lock_delay_ms <= 0:
            raise ValueError(f"lock_delay_ms must be positive, got {self.lock_delay_ms}")
        if self.das_ms < 0 or self.arr_ms < 0:
            raise ValueError("das_ms and arr_ms must be >= 0")
        if self.soft_drop_multiplier < 1:
            raise ValueError(
                f"soft_drop_multiplier must be >= 1, got {self.soft_drop_multiplier}"
            )
        if not 0.0 <= self.special_piece_chance <= 1.0:
            raise ValueError(
                f"special_piece_chance must be within [0, 1], got {self.special_piece_chance}"
            )


DEFAULT_RULES = RulesConfig()


__all__ = ["DEFAULT_RULES", "RulesConfig"]
