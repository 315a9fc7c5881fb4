"""Board representation for the playfield.

The grid holds ``VISIBLE_HEIGHT`` playable rows plus ``HIDDEN_ROWS`` buffer
rows on top.  Row ``0`` is the highest hidden row, so the visible area is the
bottom ``VISIBLE_HEIGHT`` rows.  Pieces may poke above row ``0`` while
spawning or rotating; those blocks never collide with grid contents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import ActivePiece, PieceType, Point


# Dimensions of the playfield.
WIDTH = 10
VISIBLE_HEIGHT = 10
HIDDEN_ROWS = 2
HEIGHT = VISIBLE_HEIGHT + HIDDEN_ROWS

Grid = NDArray[np.uint8]
SpecialMask = NDArray[np.bool_]

# Mapping from ``PieceType`` to the integer stored in the grid.  ``0`` marks an
# empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(PieceType)}
VALUE_PIECES = {value: t for t, value in PIECE_VALUES.items()}


@dataclass(frozen=True)
class CellState:
    """Contents of one occupied cell."""

    type: PieceType
    is_special: bool = False


@dataclass(frozen=True)
class LockResult:
    lines_cleared: int
    cleared_rows: Tuple[int, ...]
    special_multiplier_applied: bool


BoardSnapshot = Tuple[Tuple[Optional[CellState], ...], ...]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def create_empty_mask() -> SpecialMask:
    return np.zeros((HEIGHT, WIDTH), dtype=np.bool_)


class Board:
    """Locked cells of the playfield."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()
        self.special: SpecialMask = create_empty_mask()

    def reset(self) -> None:
        self.grid = create_empty_grid()
        self.special = create_empty_mask()

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def is_inside(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def is_out_of_bounds(self, point: Point) -> bool:
        """Return ``True`` for points a piece may never occupy.

        The area above the grid (``y < 0``) is open so pieces can spawn and
        rotate there.
        """

        x, y = point
        return x < 0 or x >= self.width or y >= self.height

    def cell_at(self, point: Point) -> Optional[CellState]:
        if not self.is_inside(point):
            return None
        x, y = point
        return self._cell(y, x)

    def get_cell(self, x: int, y: int) -> Optional[CellState]:
        """Safely return the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.is_inside(Point(x, y)):
            return self._cell(y, x)
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, cell: Optional[CellState]) -> None:
        """Safely set the cell at ``(x, y)``; ``None`` empties it.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self.is_inside(Point(x, y)):
            raise IndexError("Cell out of bounds")
        if cell is None:
            self.grid[y, x] = 0
            self.special[y, x] = False
        else:
            self.grid[y, x] = np.uint8(PIECE_VALUES[cell.type])
            self.special[y, x] = cell.is_special

    def _cell(self, row: int, col: int) -> Optional[CellState]:
        value = int(self.grid[row, col])
        if value == 0:
            return None
        return CellState(VALUE_PIECES[value], bool(self.special[row, col]))

    # ------------------------------------------------------------------
    # Pieces
    # ------------------------------------------------------------------
    def has_collision(self, piece: ActivePiece, offset: Optional[Point] = None) -> bool:
        """Return ``True`` if ``piece`` shifted by ``offset`` does not fit."""

        for point in piece.translated_blocks(offset):
            if self.is_out_of_bounds(point):
                return True
            x, y = point
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def lock_piece(self, piece: ActivePiece) -> LockResult:
        """Write ``piece`` into the grid and clear any completed rows.

        Blocks above the grid are dropped.  The special multiplier applies
        only when the row holding the piece's special block is cleared.
        """

        value = np.uint8(PIECE_VALUES[piece.type])
        special_row: Optional[int] = None
        for index, (x, y) in enumerate(piece.translated_blocks()):
            if y < 0:
                continue
            is_special = piece.is_special and index == piece.special_block_index
            self.grid[y, x] = value
            self.special[y, x] = is_special
            if is_special:
                special_row = y

        cleared_rows = self._clear_full_rows()
        return LockResult(
            lines_cleared=len(cleared_rows),
            cleared_rows=cleared_rows,
            special_multiplier_applied=special_row is not None and special_row in cleared_rows,
        )

    # ------------------------------------------------------------------
    # Row clearing
    # ------------------------------------------------------------------
    def clear_rows(self, row_indexes: Iterable[int]) -> int:
        """Force-clear ``row_indexes`` whether or not they are full.

        Rows outside the grid and rows that are already empty are skipped and
        not counted.  Returns the number of rows removed.
        """

        targets = np.zeros(self.height, dtype=np.bool_)
        for row in set(row_indexes):
            if 0 <= row < self.height and np.any(self.grid[row] != 0):
                targets[row] = True
        return len(self._remove_rows(targets))

    def _clear_full_rows(self) -> Tuple[int, ...]:
        full_rows = np.all(self.grid != 0, axis=1)
        return self._remove_rows(full_rows)

    def _remove_rows(self, rows: NDArray[np.bool_]) -> Tuple[int, ...]:
        """Drop the flagged rows and pad the top with empty ones.

        Surviving rows keep their relative order.  The removed indexes are
        returned bottom to top.
        """

        removed = tuple(int(row) for row in np.flatnonzero(rows)[::-1])
        if removed:
            padding = len(removed)
            self.grid = np.vstack(
                (np.zeros((padding, self.width), dtype=self.grid.dtype), self.grid[~rows])
            )
            self.special = np.vstack(
                (np.zeros((padding, self.width), dtype=np.bool_), self.special[~rows])
            )
        return removed

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def peek_lines(self, row_indexes: Iterable[int]) -> List[Tuple[Optional[CellState], ...]]:
        """Return copies of the requested rows; unknown rows come back empty."""

        lines: List[Tuple[Optional[CellState], ...]] = []
        for row in row_indexes:
            if 0 <= row < self.height:
                lines.append(tuple(self._cell(row, col) for col in range(self.width)))
            else:
                lines.append(())
        return lines

    def snapshot(self) -> BoardSnapshot:
        """Return an immutable copy of every cell, top row first."""

        return tuple(
            tuple(self._cell(row, col) for col in range(self.width))
            for row in range(self.height)
        )


__all__ = [
    "Board",
    "BoardSnapshot",
    "CellState",
    "LockResult",
    "HEIGHT",
    "HIDDEN_ROWS",
    "PIECE_VALUES",
    "VISIBLE_HEIGHT",
    "WIDTH",
    "create_empty_grid",
]
