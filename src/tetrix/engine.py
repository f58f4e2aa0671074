"""Single-threaded Tetris rules engine.

:class:`TetrisEngine` owns the board, the falling piece and the two preview
pieces.  It is driven from outside: a loop feeds elapsed time through
:meth:`TetrisEngine.update` and forwards player actions to the movement
methods.  Illegal actions never raise; they simply leave the state unchanged.

Completed rows are not removed on the spot.  Locking a piece that fills rows
puts the engine into a line-clear hold (see :class:`~tetrix.game_state.LineClear`)
during which there is no active piece.  The rows are removed, scored and the
next piece spawned once ``update`` has advanced the engine clock past
``EngineConfig.line_clear_duration``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, WIDTH
from .game_state import (
    HARD_DROP_POINTS_PER_CELL,
    GameState,
    LineClear,
    level_for_lines,
    line_clear_score,
)
from .position import Position
from .snapshot import RenderSnapshot, project_ghost
from .tetromino import Tetromino, TetrominoType
from .utils import gravity_interval


LOGGER = logging.getLogger(__name__)

SPAWN_POSITION = Position(WIDTH // 2 - 1, 0)

# Horizontal offsets tried, in order, when an in-place rotation is blocked.
WALL_KICKS: Tuple[int, ...] = (-1, 1, -2, 2)


@dataclass(frozen=True)
class EngineConfig:
    """Tunable timings of the engine, in seconds."""

    line_clear_flash: float = 0.35
    line_clear_fade: float = 0.25

    @property
    def line_clear_duration(self) -> float:
        return self.line_clear_flash + self.line_clear_fade


class TetrisEngine:
    """Piece and board state machine for one game session.

    Parameters
    ----------
    rng:
        Random generator used to draw piece types.  Pass a seeded
        :class:`random.Random` to reproduce a piece sequence.
    seed:
        Convenience alternative to ``rng``; ignored when ``rng`` is given.
    config:
        Timing configuration.  A zero ``line_clear_duration`` removes
        completed rows as part of the lock.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self._new_game()

    def _new_game(self) -> None:
        self.board = Board()
        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.state = GameState.PLAYING
        self.line_clear: Optional[LineClear] = None
        self.clock = 0.0
        self._drop_accum = 0.0
        self.current_piece: Optional[Tetromino] = None
        self.next_piece = self._new_piece()
        self.next_next_piece = self._new_piece()
        self.spawn_next_piece()

    # Queries ----------------------------------------------------------
    @property
    def drop_interval(self) -> float:
        return gravity_interval(self.level)

    @property
    def clearing(self) -> bool:
        return self.line_clear is not None

    @property
    def lines_to_clear(self) -> Tuple[int, ...]:
        return self.line_clear.rows if self.line_clear else ()

    @property
    def line_clear_started_at(self) -> Optional[float]:
        return self.line_clear.started_at if self.line_clear else None

    def _active(self) -> Optional[Tetromino]:
        """Return the piece that may be moved, or ``None`` if input is ignored."""

        if self.state is not GameState.PLAYING or self.line_clear is not None:
            return None
        return self.current_piece

    def ghost_piece(self) -> Optional[Tetromino]:
        """Return where the current piece would land if hard dropped."""

        piece = self._active()
        if piece is None:
            return None
        return project_ghost(self.board, piece)

    def snapshot(self) -> RenderSnapshot:
        """Return an immutable copy of the state for rendering."""

        return RenderSnapshot(
            board=self.board.all_cells(),
            current_piece=self.current_piece,
            ghost_piece=self.ghost_piece(),
            next_piece=self.next_piece,
            next_next_piece=self.next_next_piece,
            score=self.score,
            lines_cleared=self.lines_cleared,
            level=self.level,
            state=self.state,
            lines_to_clear=self.lines_to_clear,
            line_clear_started_at=self.line_clear_started_at,
            clock=self.clock,
        )

    # Spawning ---------------------------------------------------------
    def _new_piece(self) -> Tetromino:
        shape = self.rng.choice(list(TetrominoType))
        return Tetromino(shape, SPAWN_POSITION)

    def spawn_next_piece(self) -> None:
        """Promote the preview pieces and draw a fresh one.

        The game is over when the promoted piece does not fit.
        """

        self.current_piece = self.next_piece
        self.next_piece = self.next_next_piece
        self.next_next_piece = self._new_piece()
        self._drop_accum = 0.0
        LOGGER.debug("Spawned %s", self.current_piece.type.value)
        if not self.board.can_place(self.current_piece):
            self.state = GameState.GAME_OVER
            LOGGER.info(
                "Game over. Score: %d, lines: %d, level: %d",
                self.score,
                self.lines_cleared,
                self.level,
            )

    # Movement ---------------------------------------------------------
    def _shift(self, dx: int) -> None:
        piece = self._active()
        if piece is None:
            return
        moved = piece.moved(dx, 0)
        if self.board.can_place(moved):
            self.current_piece = moved

    def move_left(self) -> None:
        self._shift(-1)

    def move_right(self) -> None:
        self._shift(1)

    def move_down(self) -> bool:
        """Move the piece one row down.

        Returns ``True`` while the piece keeps falling.  When the row below is
        blocked the piece is locked and ``False`` is returned.  ``False`` is
        also returned when input is currently ignored.
        """

        piece = self._active()
        if piece is None:
            return False
        moved = piece.moved(0, 1)
        if self.board.can_place(moved):
            self.current_piece = moved
            return True
        self._lock()
        return False

    def rotate(self) -> None:
        """Rotate clockwise, trying the wall kicks if the piece is blocked."""

        piece = self._active()
        if piece is None:
            return
        rotated = piece.rotated(clockwise=True)
        for dx in (0,) + WALL_KICKS:
            candidate = rotated.moved(dx, 0) if dx else rotated
            if self.board.can_place(candidate):
                self.current_piece = candidate
                return

    def hard_drop(self) -> None:
        """Drop the piece to its resting row and lock it.

        Awards two points per row travelled on top of any line clear bonus.
        """

        piece = self._active()
        if piece is None:
            return
        distance = 0
        while self.board.can_place(piece.moved(0, 1)):
            piece = piece.moved(0, 1)
            distance += 1
        self.current_piece = piece
        self._lock()
        self.score += distance * HARD_DROP_POINTS_PER_CELL

    # Locking ----------------------------------------------------------
    def _lock(self) -> None:
        piece = self.current_piece
        if piece is None:
            return
        self.board.place(piece)
        self.current_piece = None
        rows = self.board.full_lines()
        if not rows:
            self.spawn_next_piece()
            return
        if self.config.line_clear_duration > 0:
            self.line_clear = LineClear(tuple(rows), self.clock)
            LOGGER.debug("Clearing rows %s", rows)
            return
        self._finish_line_clear()

    def _finish_line_clear(self) -> None:
        cleared = self.board.clear_lines()
        self.line_clear = None
        if cleared:
            self.lines_cleared += cleared
            self.score += line_clear_score(cleared, self.level)
            self.level = level_for_lines(self.lines_cleared)
            LOGGER.debug(
                "Cleared %d row(s). Score: %d, level: %d",
                cleared,
                self.score,
                self.level,
            )
        self.spawn_next_piece()

    # Time -------------------------------------------------------------
    def update(self, dt: float) -> None:
        """Advance the engine by ``dt`` seconds.

        Finishes a pending line clear once its animation has run, otherwise
        applies gravity: one ``move_down`` whenever the accumulated time
        reaches :attr:`drop_interval`.  Nothing happens unless playing.
        """

        if self.state is not GameState.PLAYING:
            return
        self.clock += dt
        if self.line_clear is not None:
            due = self.line_clear.started_at + self.config.line_clear_duration
            if self.clock >= due:
                self._finish_line_clear()
            return
        self._drop_accum += dt
        if self._drop_accum >= self.drop_interval:
            self._drop_accum = 0.0
            self.move_down()

    # Session ----------------------------------------------------------
    def pause(self) -> None:
        """Toggle between playing and paused.  Ignored after game over."""

        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
            LOGGER.info("Paused")
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
            self._drop_accum = 0.0
            LOGGER.info("Resumed")

    def reset(self) -> None:
        """Start a new game, discarding the board, score and previews."""

        self._new_game()
        LOGGER.info("Game reset")
