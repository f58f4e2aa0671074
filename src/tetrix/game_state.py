"""Game state enumeration and scoring rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class GameState(Enum):
    """Top level state of a game session."""

    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class LineClear:
    """Rows that are flashing before being removed.

    While an engine holds one of these it is still ``PLAYING`` but has no
    active piece: input and gravity are ignored and nothing spawns until the
    animation has run out.
    """

    rows: Tuple[int, ...]
    started_at: float

    def elapsed(self, now: float) -> float:
        return max(0.0, now - self.started_at)


# Base points per number of lines cleared at once, multiplied by the level.
LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}
HARD_DROP_POINTS_PER_CELL = 2
LINES_PER_LEVEL = 10


def line_clear_score(lines: int, level: int) -> int:
    """Return the points awarded for clearing ``lines`` rows at ``level``.

    Clears of more than four rows are paid as a four-line clear.
    """

    if lines <= 0:
        return 0
    return LINE_SCORES[min(lines, 4)] * level


def level_for_lines(lines: int) -> int:
    """Return the level reached after ``lines`` total cleared rows."""

    return lines // LINES_PER_LEVEL + 1
