"""Game orchestration: the per-frame simulation and player actions.

:class:`Game` owns the board, randomizer and scoring.  A driver calls
:meth:`Game.tick` once per frame with the elapsed wall-clock time; each tick
runs, in order, effect decay, soft-drop scoring, gravity and lock delay.
Player actions are synchronous and take effect immediately.

Nothing outside the instance may mutate its state.  Observers read frozen
:class:`GameViewState` snapshots and the events drained by each tick.

Precondition failures (no active piece, empty item slot, no fitting kick)
are reported through boolean return values rather than exceptions.  Game over
is a state, left only through :meth:`Game.reset`.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union

from .board import Board, BoardSnapshot
from .items import (
    ActiveEffects,
    BOMB_ROWS,
    BOOST_SCORE_MULTIPLIER,
    EffectType,
    FREEZE_GRAVITY_MULTIPLIER,
    ITEM_BONUS_POINTS,
    ITEM_TYPES,
    ItemType,
    MAX_INVENTORY_SLOTS,
)
from .randomizer import SevenBagRandomizer
from .rules import DEFAULT_RULES, RulesConfig
from .scoring import GameStats, Scoring
from .tetromino import (
    ActivePiece,
    PieceType,
    Point,
    RotationDirection,
    create_active_piece,
)


LOGGER = logging.getLogger(__name__)

SOFT_DROP_REWARD_INTERVAL = 0.5
SOFT_DROP_REWARD_POINTS = 50
# Absorbs float drift from summing frame deltas such as 1/60.
TIME_EPSILON = 1e-9
HARD_DROP_REWARD_POINTS = 100
SCORE_SPEED_INTERVAL = 1000
SCORE_SPEED_STEP = 0.03
LEVEL_SPEED_STEP = 0.08
DEFAULT_PREVIEW_COUNT = 2

_BELOW = Point(0, 1)


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class HeldPiece:
    type: PieceType
    is_special: bool = False


@dataclass(frozen=True)
class SpawnEvent:
    piece: ActivePiece
    kind: ClassVar[str] = "spawn"


@dataclass(frozen=True)
class LockEvent:
    lines_cleared: int
    special_multiplier: bool
    points: int = 0
    kind: ClassVar[str] = "lock"


@dataclass(frozen=True)
class GameOverEvent:
    kind: ClassVar[str] = "game-over"


GameEvent = Union[SpawnEvent, LockEvent, GameOverEvent]


@dataclass(frozen=True)
class GameViewState:
    """Immutable view of everything a renderer needs for one frame."""

    board: BoardSnapshot
    active_piece: Optional[ActivePiece]
    next_queue: Tuple[PieceType, ...]
    hold_piece: Optional[HeldPiece]
    inventory: Tuple[ItemType, ...]
    effects: ActiveEffects
    stats: GameStats
    is_paused: bool
    is_game_over: bool
    status: GameStatus


@dataclass(frozen=True)
class TickResult:
    state: GameViewState
    events: Tuple[GameEvent, ...]


class Game:
    """Falling-block game session driven by :meth:`tick`."""

    def __init__(
        self,
        *,
        rules: Optional[RulesConfig] = None,
        rng: Optional[random.Random] = None,
        preview_count: int = DEFAULT_PREVIEW_COUNT,
    ) -> None:
        if preview_count <= 0:
            raise ValueError(f"preview_count must be positive, got {preview_count}")
        self._rules = rules or DEFAULT_RULES
        self._rng = rng or random.Random()
        self._preview_count = int(preview_count)
        self._board = Board()
        self._randomizer = SevenBagRandomizer(self._rng)
        self._scoring = Scoring()
        self._clear_session()
        self._status = GameStatus.NOT_STARTED

    def _clear_session(self) -> None:
        self._next_queue: List[PieceType] = []
        self._active_piece: Optional[ActivePiece] = None
        self._hold_piece: Optional[HeldPiece] = None
        self._hold_used = False
        self._soft_drop_active = False
        self._fall_accumulator = 0.0
        self._soft_drop_score_accumulator = 0.0
        self._lock_timer_ms: Optional[float] = None
        self._pending_events: List[GameEvent] = []
        self._inventory: List[ItemType] = []
        self._effects = ActiveEffects()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    def start(self) -> None:
        self.reset()

    def reset(self, *, seed: Optional[int] = None) -> None:
        """Start a fresh session and spawn the first piece.

        ``seed`` reseeds the injected random source before anything is drawn.
        """

        if seed is not None:
            self._rng.seed(seed)
        self._board.reset()
        self._randomizer.reset()
        self._scoring.reset()
        self._clear_session()
        self._status = GameStatus.RUNNING
        self._ensure_queue(self._preview_count + 1)
        self._spawn_next_piece()

    def toggle_pause(self) -> bool:
        """Flip between running and paused; return ``True`` when paused."""

        if self._status is GameStatus.RUNNING:
            self._status = GameStatus.PAUSED
        elif self._status is GameStatus.PAUSED:
            self._status = GameStatus.RUNNING
        return self._status is GameStatus.PAUSED

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------
    def tick(self, delta_seconds: float) -> TickResult:
        if self._status is GameStatus.RUNNING:
            self._update_active_effects(delta_seconds)
            self._update_soft_drop_bonus(delta_seconds)
            self._advance_gravity(delta_seconds)
            self._process_lock_delay(delta_seconds)

        state = self.get_state()
        events = self._flush_events()
        return TickResult(state=state, events=events)

    def get_state(self) -> GameViewState:
        return GameViewState(
            board=self._board.snapshot(),
            active_piece=self._active_piece,
            next_queue=tuple(self._next_queue[: self._preview_count]),
            hold_piece=self._hold_piece,
            inventory=tuple(self._inventory),
            effects=self._effects,
            stats=self._scoring.snapshot(),
            is_paused=self._status is GameStatus.PAUSED,
            is_game_over=self._status is GameStatus.GAME_OVER,
            status=self._status,
        )

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def set_soft_drop(self, active: bool) -> None:
        self._soft_drop_active = bool(active)
        if not active:
            self._soft_drop_score_accumulator = 0.0

    def move_horizontal(self, direction: int) -> bool:
        if direction not in (-1, 1) or not self._can_act():
            return False
        return self._try_move(direction, 0)

    def soft_drop_step(self) -> bool:
        if not self._can_act():
            return False
        moved = self._try_move(0, 1, reset_accumulator=True)
        if not moved:
            self._begin_lock_delay()
        return moved

    def rotate(self, direction: RotationDirection | str) -> bool:
        """Rotate the active piece, trying each wall kick in table order."""

        if not self._can_act():
            return False
        assert self._active_piece is not None

        rotated, kicks = self._active_piece.rotated(direction)
        for dx, dy in kicks:
            candidate = rotated.moved(dx, dy)
            if not self._board.has_collision(candidate):
                self._active_piece = candidate
                self._refresh_lock_delay()
                return True
        return False

    def hard_drop(self) -> int:
        """Drop the piece until blocked and return the number of rows fallen.

        The piece is not locked here: the lock timer restarts at zero and the
        normal lock delay still has to elapse.
        """

        if not self._can_act():
            return 0
        dropped = 0
        while self._try_move(0, 1, reset_accumulator=True):
            dropped += 1
        if dropped > 0:
            self._scoring.add_hard_drop_points(HARD_DROP_REWARD_POINTS)
        self._begin_lock_delay(force=True)
        return dropped

    def hold(self) -> bool:
        if not self._can_act() or self._hold_used:
            return False
        assert self._active_piece is not None

        current = self._active_piece
        held = self._hold_piece
        self._hold_used = True
        self._active_piece = None
        self._lock_timer_ms = None
        self._fall_accumulator = 0.0

        if held is not None:
            swapped = create_active_piece(held.type, is_special=held.is_special, rng=self._rng)
            if self._board.has_collision(swapped):
                self._end_game()
                return False
            self._active_piece = swapped
            self._hold_piece = HeldPiece(current.type, current.is_special)
            LOGGER.debug("Swapped %s with held %s", current.type.value, held.type.value)
            return True

        self._hold_piece = HeldPiece(current.type, current.is_special)
        LOGGER.debug("Held %s", current.type.value)
        return self._spawn_next_piece()

    def use_item(self, slot_index: int) -> bool:
        if self._status is not GameStatus.RUNNING:
            return False
        if slot_index < 0 or slot_index >= len(self._inventory):
            return False

        item = self._inventory.pop(slot_index)
        if item is ItemType.BOMB:
            bottom = self._board.height - 1
            cleared = self._board.clear_rows(range(bottom, bottom - BOMB_ROWS, -1))
            self._scoring.add_bonus(cleared * ITEM_BONUS_POINTS)
        elif item is ItemType.SHUFFLE:
            self._rng.shuffle(self._next_queue)
            self._scoring.add_bonus(ITEM_BONUS_POINTS)
        elif item is ItemType.FREEZE:
            self._effects = self._effects.triggered(EffectType.FREEZE)
        elif item is ItemType.BOOST:
            self._effects = self._effects.triggered(EffectType.BOOST)
        else:  # pragma: no cover - ItemType is exhaustive
            raise ValueError(f"Unknown item: {item!r}")

        LOGGER.debug("Used item %s from slot %d", item.value, slot_index)
        return True

    # ------------------------------------------------------------------
    # Simulation steps
    # ------------------------------------------------------------------
    def _update_active_effects(self, delta_seconds: float) -> None:
        self._effects = self._effects.decayed(delta_seconds)

    def _update_soft_drop_bonus(self, delta_seconds: float) -> None:
        if not self._soft_drop_active or self._active_piece is None:
            self._soft_drop_score_accumulator = 0.0
            return

        self._soft_drop_score_accumulator += delta_seconds
        while self._soft_drop_score_accumulator >= SOFT_DROP_REWARD_INTERVAL - TIME_EPSILON:
            self._scoring.add_soft_drop_points(SOFT_DROP_REWARD_POINTS)
            self._soft_drop_score_accumulator -= SOFT_DROP_REWARD_INTERVAL

    def gravity_rate(self) -> float:
        """Rows per second the active piece currently falls."""

        level_multiplier = 1 + (self._scoring.level - 1) * LEVEL_SPEED_STEP
        score_steps = self._scoring.score // SCORE_SPEED_INTERVAL
        score_multiplier = 1 + score_steps * SCORE_SPEED_STEP
        freeze_multiplier = (
            FREEZE_GRAVITY_MULTIPLIER if self._effects.is_active(EffectType.FREEZE) else 1.0
        )
        soft_drop_multiplier = self._rules.soft_drop_multiplier if self._soft_drop_active else 1.0
        return (
            self._rules.gravity_per_second
            * soft_drop_multiplier
            * level_multiplier
            * score_multiplier
            * freeze_multiplier
        )

    def _advance_gravity(self, delta_seconds: float) -> None:
        if self._active_piece is None:
            self._spawn_next_piece()
            if self._active_piece is None:
                return

        self._fall_accumulator += self.gravity_rate() * delta_seconds
        while self._fall_accumulator >= 1:
            # A successful step resets the accumulator, so at most one row
            # falls per frame.
            if not self._try_move(0, 1, reset_accumulator=True):
                self._begin_lock_delay()
                break

    def _process_lock_delay(self, delta_seconds: float) -> None:
        if self._active_piece is None:
            return

        if not self._is_resting():
            self._lock_timer_ms = None
            return

        if self._lock_timer_ms is None:
            self._lock_timer_ms = 0.0
            return

        self._lock_timer_ms += delta_seconds * 1000
        if self._lock_timer_ms >= self._rules.lock_delay_ms:
            self._lock_active_piece()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _can_act(self) -> bool:
        return self._status is GameStatus.RUNNING and self._active_piece is not None

    def _is_resting(self) -> bool:
        return self._active_piece is not None and self._board.has_collision(
            self._active_piece, _BELOW
        )

    def _try_move(self, dx: int, dy: int, *, reset_accumulator: bool = False) -> bool:
        if self._active_piece is None:
            return False

        candidate = self._active_piece.moved(dx, dy)
        if self._board.has_collision(candidate):
            return False

        self._active_piece = candidate
        if reset_accumulator:
            self._fall_accumulator = 0.0
        if dx != 0 or dy < 0:
            self._refresh_lock_delay()
        return True

    def _refresh_lock_delay(self) -> None:
        # Unbounded: every successful slide or rotation while resting restarts
        # the countdown.
        if self._lock_timer_ms is not None and self._is_resting():
            self._lock_timer_ms = 0.0

    def _begin_lock_delay(self, force: bool = False) -> None:
        if self._lock_timer_ms is None or force:
            self._lock_timer_ms = 0.0

    def _lock_active_piece(self) -> None:
        if self._active_piece is None:
            return
        piece = self._active_piece

        result = self._board.lock_piece(piece)
        self._active_piece = None
        self._lock_timer_ms = None
        self._fall_accumulator = 0.0
        self._hold_used = False

        score_multiplier = (
            BOOST_SCORE_MULTIPLIER if self._effects.is_active(EffectType.BOOST) else 1
        )
        award = self._scoring.register_line_clear(
            result.lines_cleared,
            special_multiplier=result.special_multiplier_applied,
            score_multiplier=score_multiplier,
        )

        if result.lines_cleared > 0 and result.special_multiplier_applied:
            self._award_random_item()

        points = award.awarded if award is not None else 0
        LOGGER.debug(
            "Locked %s clearing %d line(s) for %d point(s) (special=%s)",
            piece.type.value,
            result.lines_cleared,
            points,
            result.special_multiplier_applied,
        )
        self._pending_events.append(
            LockEvent(
                lines_cleared=result.lines_cleared,
                special_multiplier=result.special_multiplier_applied,
                points=points,
            )
        )
        self._spawn_next_piece()

    def _spawn_next_piece(self) -> bool:
        self._ensure_queue(self._preview_count + 1)
        next_type = self._next_queue.pop(0)

        is_special = self._rng.random() < self._rules.special_piece_chance
        piece = create_active_piece(next_type, is_special=is_special, rng=self._rng)

        if self._board.has_collision(piece):
            self._end_game()
            return False

        self._active_piece = piece
        self._pending_events.append(SpawnEvent(piece=piece))
        self._ensure_queue(self._preview_count + 1)
        LOGGER.debug("Spawned %s (special=%s)", piece.type.value, piece.is_special)
        return True

    def _end_game(self) -> None:
        self._active_piece = None
        self._lock_timer_ms = None
        if self._status is GameStatus.GAME_OVER:
            return
        self._status = GameStatus.GAME_OVER
        self._pending_events.append(GameOverEvent())
        LOGGER.info("Game over with score %d", self._scoring.score)

    def _ensure_queue(self, target_length: int) -> None:
        while len(self._next_queue) < target_length:
            self._next_queue.append(self._randomizer.next())

    def _award_random_item(self) -> None:
        if len(self._inventory) >= MAX_INVENTORY_SLOTS:
            return
        self._inventory.append(self._rng.choice(ITEM_TYPES))

    def _flush_events(self) -> Tuple[GameEvent, ...]:
        events = tuple(self._pending_events)
        self._pending_events = []
        return events


__all__ = [
    "Game",
    "GameEvent",
    "GameOverEvent",
    "GameStatus",
    "GameViewState",
    "HeldPiece",
    "LockEvent",
    "SpawnEvent",
    "TickResult",
]
