"""Utility helpers for consumers of game snapshots."""

from __future__ import annotations

from typing import List

from .board import HIDDEN_ROWS, PIECE_VALUES
from .game import GameViewState


def render_grid(state: GameViewState, visible_only: bool = False) -> List[List[int]]:
    """Return the snapshot board as piece values with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw.
    Empty cells are ``0``; occupied cells hold the mapped integer value of
    their piece type.  With ``visible_only`` the hidden buffer rows on top
    are left out.
    """

    grid = [
        [PIECE_VALUES[cell.type] if cell is not None else 0 for cell in row]
        for row in state.board
    ]
    active = state.active_piece
    if active is not None:
        for x, y in active.translated_blocks():
            if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
                grid[y][x] = PIECE_VALUES[active.type]
    if visible_only:
        return grid[HIDDEN_ROWS:]
    return grid
