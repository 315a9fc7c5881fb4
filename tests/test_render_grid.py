import random

from blockfall import Game, render_grid
from blockfall.board import PIECE_VALUES, CellState
from blockfall.tetromino import PieceType, Point, create_active_piece


def test_render_grid_overlays_active_piece_without_mutating():
    game = Game(rng=random.Random(4))
    game.reset()
    game._board.set_cell(0, 11, CellState(PieceType.S))
    game._active_piece = create_active_piece(PieceType.O, position=Point(4, 5))

    state = game.get_state()
    grid = render_grid(state)

    assert len(grid) == 12
    assert grid[11][0] == PIECE_VALUES[PieceType.S]
    for x, y in state.active_piece.translated_blocks():
        assert grid[y][x] == PIECE_VALUES[PieceType.O]
    assert state.board[5][5] is None
    assert game.get_state().board[5][5] is None


def test_render_grid_can_drop_hidden_rows():
    game = Game(rng=random.Random(4))
    game.reset()
    game._active_piece = create_active_piece(PieceType.I)

    grid = render_grid(game.get_state(), visible_only=True)

    assert len(grid) == 10
    # The I piece spawns in the first hidden row.
    assert not any(any(row) for row in grid)
