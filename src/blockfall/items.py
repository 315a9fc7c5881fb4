"""Static catalog of consumable items and timed effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class ItemType(str, Enum):
    BOMB = "bomb"
    SHUFFLE = "shuffle"
    FREEZE = "freeze"
    BOOST = "boost"


class EffectType(str, Enum):
    FREEZE = "freeze"
    BOOST = "boost"


@dataclass(frozen=True)
class ItemInfo:
    name: str
    description: str


ITEM_TYPES: Tuple[ItemType, ...] = tuple(ItemType)

ITEM_LABELS: Dict[ItemType, ItemInfo] = {
    ItemType.BOMB: ItemInfo("Bomb", "Clears the bottom two rows"),
    ItemType.SHUFFLE: ItemInfo("Shuffle", "Reorders the NEXT queue"),
    ItemType.FREEZE: ItemInfo("Freeze", "Slows the fall speed for a while"),
    ItemType.BOOST: ItemInfo("Boost", "Doubles the score for a while"),
}

# Seconds each effect lasts once triggered.
EFFECT_DURATIONS: Dict[EffectType, float] = {
    EffectType.FREEZE: 10.0,
    EffectType.BOOST: 12.0,
}

EFFECT_LABELS: Dict[EffectType, str] = {
    EffectType.FREEZE: "Freeze",
    EffectType.BOOST: "Score boost",
}

MAX_INVENTORY_SLOTS = 3
ITEM_BONUS_POINTS = 200
BOMB_ROWS = 2
FREEZE_GRAVITY_MULTIPLIER = 0.35
BOOST_SCORE_MULTIPLIER = 2


@dataclass(frozen=True)
class ActiveEffects:
    """Remaining seconds for each timed effect; ``0`` means inactive."""

    freeze: float = 0.0
    boost: float = 0.0

    def remaining(self, effect: EffectType) -> float:
        return getattr(self, effect.value)

    def is_active(self, effect: EffectType) -> bool:
        return self.remaining(effect) > 0

    def decayed(self, delta_seconds: float) -> "ActiveEffects":
        """Return the effects advanced by ``delta_seconds``, floored at zero."""

        return ActiveEffects(
            freeze=max(0.0, self.freeze - delta_seconds) if self.freeze > 0 else 0.0,
            boost=max(0.0, self.boost - delta_seconds) if self.boost > 0 else 0.0,
        )

    def triggered(self, effect: EffectType) -> "ActiveEffects":
        """Return the effects with ``effect`` set to its full duration."""

        duration = EFFECT_DURATIONS[effect]
        if effect is EffectType.FREEZE:
            return ActiveEffects(freeze=duration, boost=self.boost)
        return ActiveEffects(freeze=self.freeze, boost=duration)


__all__ = [
    "ActiveEffects",
    "EFFECT_DURATIONS",
    "EFFECT_LABELS",
    "EffectType",
    "ITEM_LABELS",
    "ITEM_TYPES",
    "ItemInfo",
    "ItemType",
    "MAX_INVENTORY_SLOTS",
]
