"""Read-only views of the engine for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, Cells
from .game_state import GameState
from .tetromino import Tetromino


def project_ghost(board: Board, piece: Tetromino) -> Tetromino:
    """Return ``piece`` moved straight down as far as it fits on ``board``."""

    dropped = piece
    while board.can_place(dropped.moved(0, 1)):
        dropped = dropped.moved(0, 1)
    return dropped


@dataclass(frozen=True)
class RenderSnapshot:
    """Immutable copy of everything a frame needs to draw."""

    board: Cells
    current_piece: Optional[Tetromino]
    ghost_piece: Optional[Tetromino]
    next_piece: Tetromino
    next_next_piece: Tetromino
    score: int
    lines_cleared: int
    level: int
    state: GameState
    lines_to_clear: Tuple[int, ...] = ()
    line_clear_started_at: Optional[float] = None
    clock: float = 0.0

    @property
    def clearing(self) -> bool:
        return bool(self.lines_to_clear)


def line_clear_progress(
    snapshot: RenderSnapshot, flash: float, fade: float
) -> Tuple[float, float]:
    """Return the ``(flash, fade)`` progress of a running line clear.

    Both values lie in ``[0, 1]``.  The fade phase only starts once the flash
    phase is complete.  ``(0.0, 0.0)`` is returned when no rows are clearing.
    """

    if not snapshot.clearing or snapshot.line_clear_started_at is None:
        return 0.0, 0.0
    elapsed = max(0.0, snapshot.clock - snapshot.line_clear_started_at)
    if elapsed <= flash:
        return (min(elapsed / flash, 1.0) if flash > 0 else 1.0), 0.0
    if fade <= 0:
        return 1.0, 1.0
    return 1.0, min((elapsed - flash) / fade, 1.0)
