"""Simulation core for a falling-block puzzle game."""

from .board import Board, CellState, LockResult
from .tetromino import (
    ActivePiece,
    PieceType,
    Point,
    RotationDirection,
    create_active_piece,
    shape_blocks,
)
from .randomizer import SevenBagRandomizer
from .scoring import GameStats, Scoring
from .items import ActiveEffects, EffectType, ItemType, ITEM_LABELS, EFFECT_LABELS
from .rules import DEFAULT_RULES, RulesConfig
from .game import (
    Game,
    GameOverEvent,
    GameStatus,
    GameViewState,
    HeldPiece,
    LockEvent,
    SpawnEvent,
    TickResult,
)
from .loop import FrameLoop
from .utils import render_grid

__all__ = [
    "ActiveEffects",
    "ActivePiece",
    "Board",
    "CellState",
    "DEFAULT_RULES",
    "EFFECT_LABELS",
    "EffectType",
    "FrameLoop",
    "Game",
    "GameOverEvent",
    "GameStats",
    "GameStatus",
    "GameViewState",
    "HeldPiece",
    "ITEM_LABELS",
    "ItemType",
    "LockEvent",
    "LockResult",
    "PieceType",
    "Point",
    "RotationDirection",
    "RulesConfig",
    "Scoring",
    "SevenBagRandomizer",
    "SpawnEvent",
    "TickResult",
    "create_active_piece",
    "render_grid",
    "shape_blocks",
]
