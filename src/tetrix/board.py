"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .position import Position
from .tetromino import Tetromino, TetrominoType


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]
Cells = Tuple[Tuple[Optional[TetrominoType], ...], ...]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells.

    The grid is indexed ``[row, col]`` with row ``0`` at the top, so a
    :class:`Position` ``(x, y)`` maps to ``grid[y, x]``.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def is_position_valid(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_cell_empty(self, pos: Position) -> bool:
        """Return ``True`` if ``pos`` is on the board and unoccupied.

        Positions outside the board are reported as not empty.
        """

        if not self.is_position_valid(pos):
            return False
        return bool(self.grid[pos.y, pos.x] == 0)

    def can_place(self, piece: Tetromino) -> bool:
        """Return ``True`` if ``piece`` fits on the board.

        Blocks above the top edge (``y < 0``) are always accepted so pieces
        can spawn and rotate partially above the visible field.  Every other
        block must be on the board and over an empty cell.
        """

        for block in piece.absolute_blocks():
            if block.y < 0:
                continue
            if not self.is_cell_empty(block):
                return False
        return True

    def place(self, piece: Tetromino) -> None:
        """Write the piece's blocks into the grid.

        Blocks that are off the board, including those above it, are skipped.
        """

        value = np.uint8(PIECE_VALUES[piece.type])
        for block in piece.absolute_blocks():
            if self.is_position_valid(block):
                self.grid[block.y, block.x] = value

    def _full_mask(self) -> NDArray[np.bool_]:
        return np.all(self.grid != 0, axis=1)

    def full_lines(self) -> List[int]:
        """Return the indices of all completed rows in ascending order."""

        return [int(r) for r in np.flatnonzero(self._full_mask())]

    def clear_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their top-to-bottom order and empty rows are
        inserted at the top so the height never changes.
        """

        full_rows = self._full_mask()
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def get_cell(self, pos: Position) -> Optional[TetrominoType]:
        """Return the piece type stored at ``pos``.

        ``None`` is returned for empty cells and for positions off the board.
        """

        if not self.is_position_valid(pos):
            return None
        return VALUE_PIECES.get(int(self.grid[pos.y, pos.x]))

    def all_cells(self) -> Cells:
        """Return an immutable snapshot of the grid as piece types."""

        return tuple(
            tuple(VALUE_PIECES.get(int(v)) for v in row) for row in self.grid
        )
