import random
from dataclasses import replace

import pytest

from blockfall.board import CellState
from blockfall.game import Game
from blockfall.items import (
    EFFECT_DURATIONS,
    ITEM_LABELS,
    ActiveEffects,
    EffectType,
    ItemType,
)
from blockfall.rules import DEFAULT_RULES
from blockfall.tetromino import PieceType, Point, create_active_piece


def _game():
    rules = replace(DEFAULT_RULES, gravity_per_second=0.0, special_piece_chance=0.0)
    game = Game(rules=rules, rng=random.Random(11))
    game.reset()
    return game


def test_catalog_covers_every_item():
    assert set(ITEM_LABELS) == set(ItemType)
    assert EFFECT_DURATIONS[EffectType.FREEZE] == 10
    assert EFFECT_DURATIONS[EffectType.BOOST] == 12


def test_effects_decay_and_floor_at_zero():
    effects = ActiveEffects().triggered(EffectType.FREEZE)
    assert effects == ActiveEffects(freeze=10.0, boost=0.0)
    effects = effects.decayed(4.0)
    assert effects.freeze == pytest.approx(6.0)
    assert effects.is_active(EffectType.FREEZE)
    effects = effects.decayed(100.0)
    assert effects.freeze == 0.0
    assert not effects.is_active(EffectType.FREEZE)


def test_bomb_clears_bottom_rows_and_scores_per_row():
    game = _game()
    game._board.set_cell(0, 11, CellState(PieceType.T))
    game._board.set_cell(4, 10, CellState(PieceType.S))
    game._board.set_cell(6, 9, CellState(PieceType.Z))
    game._inventory = [ItemType.BOMB]

    assert game.use_item(0)

    state = game.get_state()
    assert state.stats.score == 400
    assert state.inventory == ()
    assert state.board[11][6] == CellState(PieceType.Z)
    assert all(cell is None for cell in state.board[10])


def test_bomb_counts_only_non_empty_rows():
    game = _game()
    game._board.set_cell(0, 11, CellState(PieceType.T))
    game._inventory = [ItemType.BOMB]
    assert game.use_item(0)
    assert game.get_state().stats.score == 200


def test_shuffle_keeps_queue_contents():
    game = _game()
    before = sorted(game._next_queue)
    game._inventory = [ItemType.FREEZE, ItemType.SHUFFLE]

    assert game.use_item(1)

    assert sorted(game._next_queue) == before
    assert game.get_state().stats.score == 200
    assert game.get_state().inventory == (ItemType.FREEZE,)


def test_freeze_slows_gravity_until_it_expires():
    game = _game()
    game._rules = replace(game.rules, gravity_per_second=1.2)
    assert game.gravity_rate() == pytest.approx(1.2)

    game._inventory = [ItemType.FREEZE]
    assert game.use_item(0)
    assert game.get_state().effects.freeze == 10.0
    assert game.gravity_rate() == pytest.approx(1.2 * 0.35)

    game.tick(4.0)
    assert game.get_state().effects.freeze == pytest.approx(6.0)
    game.tick(7.0)
    assert game.get_state().effects.freeze == 0.0
    assert game.gravity_rate() == pytest.approx(1.2)


def test_boost_doubles_line_clear_award():
    game = _game()
    game._inventory = [ItemType.BOOST]
    assert game.use_item(0)
    assert game.get_state().effects.boost == 12.0

    for x in range(9):
        game._board.set_cell(x, 11, CellState(PieceType.T))
    game._active_piece = create_active_piece(PieceType.I, rotation=1, position=Point(7, 8))
    game.tick(0.0)
    game.tick(0.5)
    assert game.get_state().stats.score == 200


def test_invalid_slots_are_rejected():
    game = _game()
    assert not game.use_item(0)
    game._inventory = [ItemType.FREEZE]
    assert not game.use_item(1)
    assert not game.use_item(-1)
    assert game.get_state().inventory == (ItemType.FREEZE,)
    assert game.get_state().effects == ActiveEffects()
