"""Tetromino definitions, rotation states and wall-kick tables.

Every piece type has four hand-written rotation states laid out inside a
bounding box (3x3 for most pieces, 4x4 for ``I``).  Rotations are resolved
against the SRS-style kick tables below: after a bare rotation each candidate
offset is tried in order and the first collision-free one wins.

:class:`ActivePiece` is immutable.  Moving or rotating a piece returns a new
value, so the game can keep the previous piece around while it probes
candidate positions.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple


class PieceType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


class RotationDirection(str, Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


class Point(NamedTuple):
    """Integer ``(x, y)`` pair.  ``y`` grows downwards."""

    x: int
    y: int


RotationState = Tuple[Point, ...]
KickKey = Tuple[int, int]


def _points(coords: Sequence[Tuple[int, int]]) -> RotationState:
    return tuple(Point(x, y) for x, y in coords)


# Rotation states in spawn / right / 180 / left order.
TETROMINO_SHAPES: Dict[PieceType, Tuple[RotationState, ...]] = {
    PieceType.I: (
        _points([(0, 1), (1, 1), (2, 1), (3, 1)]),
        _points([(2, 0), (2, 1), (2, 2), (2, 3)]),
        _points([(0, 2), (1, 2), (2, 2), (3, 2)]),
        _points([(1, 0), (1, 1), (1, 2), (1, 3)]),
    ),
    PieceType.O: tuple(
        _points([(1, 0), (2, 0), (1, 1), (2, 1)]) for _ in range(4)
    ),
    PieceType.T: (
        _points([(1, 0), (0, 1), (1, 1), (2, 1)]),
        _points([(1, 0), (1, 1), (2, 1), (1, 2)]),
        _points([(0, 1), (1, 1), (2, 1), (1, 2)]),
        _points([(1, 0), (0, 1), (1, 1), (1, 2)]),
    ),
    PieceType.J: (
        _points([(0, 0), (0, 1), (1, 1), (2, 1)]),
        _points([(1, 0), (2, 0), (1, 1), (1, 2)]),
        _points([(0, 1), (1, 1), (2, 1), (2, 2)]),
        _points([(1, 0), (1, 1), (0, 2), (1, 2)]),
    ),
    PieceType.L: (
        _points([(2, 0), (0, 1), (1, 1), (2, 1)]),
        _points([(1, 0), (1, 1), (1, 2), (2, 2)]),
        _points([(0, 1), (1, 1), (2, 1), (0, 2)]),
        _points([(0, 0), (1, 0), (1, 1), (1, 2)]),
    ),
    PieceType.S: (
        _points([(1, 0), (2, 0), (0, 1), (1, 1)]),
        _points([(1, 0), (1, 1), (2, 1), (2, 2)]),
        _points([(1, 1), (2, 1), (0, 2), (1, 2)]),
        _points([(0, 0), (0, 1), (1, 1), (1, 2)]),
    ),
    PieceType.Z: (
        _points([(0, 0), (1, 0), (1, 1), (2, 1)]),
        _points([(2, 0), (1, 1), (2, 1), (1, 2)]),
        _points([(0, 1), (1, 1), (1, 2), (2, 2)]),
        _points([(1, 0), (0, 1), (1, 1), (0, 2)]),
    ),
}


# Kick candidates for J, L, S, T and Z.
_STANDARD_KICKS: Dict[KickKey, RotationState] = {
    (0, 1): _points([(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)]),
    (1, 0): _points([(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)]),
    (1, 2): _points([(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)]),
    (2, 1): _points([(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)]),
    (2, 3): _points([(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)]),
    (3, 2): _points([(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)]),
    (3, 0): _points([(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)]),
    (0, 3): _points([(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)]),
}

_I_KICKS: Dict[KickKey, RotationState] = {
    (0, 1): _points([(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)]),
    (1, 0): _points([(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)]),
    (1, 2): _points([(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)]),
    (2, 1): _points([(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)]),
    (2, 3): _points([(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)]),
    (3, 2): _points([(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)]),
    (3, 0): _points([(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)]),
    (0, 3): _points([(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)]),
}

# The O piece never kicks.
_O_KICKS: Dict[KickKey, RotationState] = {key: _points([(0, 0)]) for key in _STANDARD_KICKS}

KICK_TABLE: Dict[PieceType, Dict[KickKey, RotationState]] = {
    PieceType.I: _I_KICKS,
    PieceType.O: _O_KICKS,
    PieceType.T: _STANDARD_KICKS,
    PieceType.J: _STANDARD_KICKS,
    PieceType.L: _STANDARD_KICKS,
    PieceType.S: _STANDARD_KICKS,
    PieceType.Z: _STANDARD_KICKS,
}

_NO_KICK: RotationState = _points([(0, 0)])

# Anchors that centre each piece over the visible columns.  ``I`` starts one
# row higher so its flat spawn state sits in the first hidden row.
SPAWN_POSITION: Dict[PieceType, Point] = {
    PieceType.I: Point(3, -1),
    PieceType.O: Point(4, 0),
    PieceType.T: Point(3, 0),
    PieceType.J: Point(3, 0),
    PieceType.L: Point(3, 0),
    PieceType.S: Point(3, 0),
    PieceType.Z: Point(3, 0),
}


def rotate_rotation(rotation: int, direction: RotationDirection | str) -> int:
    """Return the rotation index reached by turning ``rotation`` once."""

    if RotationDirection(direction) is RotationDirection.CLOCKWISE:
        return (rotation + 1) % 4
    return (rotation + 3) % 4


def shape_blocks(shape: PieceType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Values are wrapped so any integer is accepted.
    """

    states = TETROMINO_SHAPES[shape]
    return states[rotation % len(states)]


def get_kick_tests(shape: PieceType, current: int, target: int) -> RotationState:
    """Return the ordered kick candidates for a ``current -> target`` turn."""

    return KICK_TABLE[shape].get((current, target), _NO_KICK)


@dataclass(frozen=True)
class ActivePiece:
    """Falling piece resolved for its current rotation."""

    type: PieceType
    rotation: int
    position: Point
    blocks: RotationState
    is_special: bool = False
    special_block_index: Optional[int] = None

    def translated_blocks(self, offset: Optional[Point] = None) -> List[Point]:
        """Return absolute board coordinates, optionally shifted by ``offset``."""

        dx, dy = offset if offset is not None else (0, 0)
        px, py = self.position
        return [Point(px + x + dx, py + y + dy) for x, y in self.blocks]

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        px, py = self.position
        return replace(self, position=Point(px + dx, py + dy))

    def rotated(
        self, direction: RotationDirection | str
    ) -> Tuple["ActivePiece", RotationState]:
        """Return the bare rotated piece together with its kick candidates.

        The rotated piece keeps the current anchor; callers apply each kick
        with :meth:`moved` until one fits.
        """

        target = rotate_rotation(self.rotation, direction)
        rotated = replace(
            self, rotation=target, blocks=shape_blocks(self.type, target)
        )
        return rotated, get_kick_tests(self.type, self.rotation, target)

    @property
    def special_block(self) -> Optional[Point]:
        """Absolute position of the special block, if the piece has one."""

        if not self.is_special or self.special_block_index is None:
            return None
        return self.translated_blocks()[self.special_block_index]


def create_active_piece(
    shape: PieceType,
    *,
    rotation: int = 0,
    position: Optional[Point] = None,
    is_special: bool = False,
    special_block_index: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> ActivePiece:
    """Build a piece at its spawn anchor unless ``position`` is given.

    Special pieces without an explicit ``special_block_index`` get a random
    one drawn from ``rng``.
    """

    rotation = rotation % 4
    blocks = shape_blocks(shape, rotation)
    if position is None:
        position = SPAWN_POSITION[shape]
    if not is_special:
        special_block_index = None
    elif special_block_index is None:
        special_block_index = (rng or random).randrange(len(blocks))
    return ActivePiece(
        type=shape,
        rotation=rotation,
        position=Point(*position),
        blocks=blocks,
        is_special=is_special,
        special_block_index=special_block_index,
    )


__all__ = [
    "ActivePiece",
    "KICK_TABLE",
    "PieceType",
    "Point",
    "RotationDirection",
    "SPAWN_POSITION",
    "TETROMINO_SHAPES",
    "create_active_piece",
    "get_kick_tests",
    "rotate_rotation",
    "shape_blocks",
]
