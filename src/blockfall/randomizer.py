"""Seven-bag piece randomizer."""

from __future__ import annotations

import random
from typing import List, Optional

from .tetromino import PieceType


PIECE_TYPES: tuple[PieceType, ...] = tuple(PieceType)


class SevenBagRandomizer:
    """Yield every piece type once per bag before any repeats.

    The bag is refilled with all seven types and shuffled whenever it runs
    dry.  ``rng`` defaults to a fresh unseeded :class:`random.Random`; pass a
    seeded instance for reproducible sequences.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._bag: List[PieceType] = []

    def reset(self) -> None:
        self._bag = []

    def next(self) -> PieceType:
        if not self._bag:
            self._refill()
        if not self._bag:
            raise RuntimeError("Failed to draw piece from bag")
        return self._bag.pop()

    def _refill(self) -> None:
        self._bag = list(PIECE_TYPES)
        self._rng.shuffle(self._bag)

    @property
    def remaining(self) -> int:
        """Number of pieces left before the next refill."""

        return len(self._bag)


__all__ = ["SevenBagRandomizer", "PIECE_TYPES"]
