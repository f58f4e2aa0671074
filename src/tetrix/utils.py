"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


BASE_GRAVITY = 1.0
MIN_GRAVITY = 0.1
GRAVITY_STEP = 0.09
MAX_SPEED_LEVEL = 10


def gravity_interval(level: int) -> float:
    """Return the fall interval in seconds for ``level``.

    The interval shrinks linearly with the level.  Levels above ten keep the
    level ten speed, which is also the lower bound of ``0.1`` seconds.
    """

    return max(MIN_GRAVITY, BASE_GRAVITY - min(level, MAX_SPEED_LEVEL) * GRAVITY_STEP)


def render_grid(
    board: Board,
    active: Optional[Tetromino] = None,
    ghost: Optional[Tetromino] = None,
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape.  Ghost cells, when given, receive the negated
    value and never cover locked blocks or the active piece.
    """

    grid = board.grid.tolist()
    if ghost is not None:
        for block in ghost.absolute_blocks():
            if board.is_position_valid(block) and grid[block.y][block.x] == 0:
                grid[block.y][block.x] = -PIECE_VALUES[ghost.type]
    if active is not None:
        for block in active.absolute_blocks():
            if board.is_position_valid(block):
                grid[block.y][block.x] = PIECE_VALUES[active.type]
    return grid
