"""Tetromino definitions and rigid transforms.

Every piece is described by a fixed table of rotation states.  Each state
lists the four block offsets relative to the piece's anchor position, with
``y`` growing downwards.  The O piece has a single state that is reused for
every rotation index.

Pieces are immutable: :meth:`Tetromino.moved` and :meth:`Tetromino.rotated`
return new instances and never check collisions.  Legality is decided by the
engine against the board.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Tuple

from .position import Position

RotationState = Tuple[Position, ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"

    @property
    def color(self) -> str:
        """Semantic colour name of the piece."""

        return _COLORS[self]


_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "cyan",
    TetrominoType.O: "yellow",
    TetrominoType.T: "purple",
    TetrominoType.S: "green",
    TetrominoType.Z: "red",
    TetrominoType.J: "blue",
    TetrominoType.L: "orange",
}


def _state(*offsets: Tuple[int, int]) -> RotationState:
    return tuple(Position(x, y) for x, y in offsets)


# Rotation tables, one entry per state in clockwise order.  Offsets are
# ``(x, y)`` pairs relative to the anchor.
SHAPES: Dict[TetrominoType, List[RotationState]] = {
    TetrominoType.I: [
        _state((-1, 0), (0, 0), (1, 0), (2, 0)),
        _state((1, -1), (1, 0), (1, 1), (1, 2)),
        _state((-1, 1), (0, 1), (1, 1), (2, 1)),
        _state((0, -1), (0, 0), (0, 1), (0, 2)),
    ],
    TetrominoType.O: [
        _state((0, 0), (1, 0), (0, 1), (1, 1)),
    ],
    TetrominoType.T: [
        _state((0, 0), (-1, 0), (1, 0), (0, -1)),
        _state((0, 0), (0, -1), (0, 1), (1, 0)),
        _state((0, 0), (-1, 0), (1, 0), (0, 1)),
        _state((0, 0), (0, -1), (0, 1), (-1, 0)),
    ],
    TetrominoType.S: [
        _state((0, 0), (1, 0), (0, 1), (-1, 1)),
        _state((0, 0), (0, -1), (1, 0), (1, 1)),
        _state((0, 0), (1, 0), (0, 1), (-1, 1)),
        _state((0, 0), (0, -1), (1, 0), (1, 1)),
    ],
    TetrominoType.Z: [
        _state((0, 0), (-1, 0), (0, 1), (1, 1)),
        _state((0, 0), (1, -1), (1, 0), (0, 1)),
        _state((0, 0), (-1, 0), (0, 1), (1, 1)),
        _state((0, 0), (1, -1), (1, 0), (0, 1)),
    ],
    TetrominoType.J: [
        _state((0, 0), (-1, 0), (1, 0), (-1, -1)),
        _state((0, 0), (0, -1), (0, 1), (1, -1)),
        _state((0, 0), (-1, 0), (1, 0), (1, 1)),
        _state((0, 0), (0, -1), (0, 1), (-1, 1)),
    ],
    TetrominoType.L: [
        _state((0, 0), (-1, 0), (1, 0), (1, -1)),
        _state((0, 0), (0, -1), (0, 1), (1, 1)),
        _state((0, 0), (-1, 0), (1, 0), (-1, 1)),
        _state((0, 0), (0, -1), (0, 1), (-1, -1)),
    ],
}

ROTATION_COUNT = 4


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.  The O piece ignores it entirely.
    """

    states = SHAPES[shape]
    if shape is TetrominoType.O:
        return states[0]
    return states[rotation % len(states)]


@dataclass(frozen=True)
class Tetromino:
    """A piece of a given type at an anchor position and rotation."""

    type: TetrominoType
    position: Position = field(default_factory=lambda: Position(0, 0))
    rotation: int = 0

    def blocks(self) -> RotationState:
        """Return the block offsets relative to the anchor."""

        return shape_blocks(self.type, self.rotation)

    def absolute_blocks(self) -> List[Position]:
        """Return the board coordinates covered by this piece."""

        px, py = self.position.x, self.position.y
        return [Position(px + b.x, py + b.y) for b in self.blocks()]

    def rotated(self, clockwise: bool = True) -> "Tetromino":
        """Return the piece turned a quarter in place.

        The O piece is returned unchanged.  Whether the new orientation fits
        on the board is left to the caller.
        """

        if self.type is TetrominoType.O:
            return self
        step = 1 if clockwise else ROTATION_COUNT - 1
        return replace(self, rotation=(self.rotation + step) % ROTATION_COUNT)

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        return replace(self, position=self.position.translated(dx, dy))
