"""Device independent input vocabulary.

Front-ends translate keys and gamepad buttons into :class:`InputCommand`
values and hand them to :func:`execute` (directly or through the queue in
:mod:`tetrix.threadsafe`).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .engine import TetrisEngine


class InputCommand(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESET = "reset"


def execute(engine: TetrisEngine, command: InputCommand) -> None:
    """Apply ``command`` to ``engine``."""

    if command is InputCommand.MOVE_LEFT:
        engine.move_left()
    elif command is InputCommand.MOVE_RIGHT:
        engine.move_right()
    elif command is InputCommand.MOVE_DOWN:
        engine.move_down()
    elif command is InputCommand.ROTATE:
        engine.rotate()
    elif command is InputCommand.HARD_DROP:
        engine.hard_drop()
    elif command is InputCommand.PAUSE:
        engine.pause()
    elif command is InputCommand.RESET:
        engine.reset()
    else:
        raise ValueError(f"Unknown command: {command!r}")


# Held-key repeat timings in seconds: (initial delay, repeat interval).
SOFT_DROP_REPEAT = (0.12, 0.02)
SHIFT_REPEAT = (0.15, 0.03)
# Extra pause before a held soft drop acts on the piece that follows a lock.
LANDING_DELAY = 0.08


class KeyRepeat:
    """Auto-repeat timer for a held key or button.

    The first action happens on press and is the caller's job.  After
    ``initial_delay`` seconds the key repeats every ``interval`` seconds for
    as long as it stays held, at most once per :meth:`poll`.
    """

    def __init__(self, initial_delay: float, interval: float) -> None:
        self.initial_delay = initial_delay
        self.interval = interval
        self._next: Optional[float] = None

    @property
    def held(self) -> bool:
        return self._next is not None

    def press(self, now: float) -> None:
        self._next = now + self.initial_delay

    def release(self) -> None:
        self._next = None

    def poll(self, now: float) -> bool:
        """Return whether a repeat is due at ``now``.

        Missed repeats are dropped; the next one is ``interval`` after ``now``.
        """

        if self._next is None or now < self._next:
            return False
        self._next = now + self.interval
        return True

    def landed(self, now: float) -> None:
        """Hold off repeats after the held action locked the piece."""

        if self._next is not None:
            self._next = now + self.initial_delay + LANDING_DELAY
