"""Lock guarded wrapper for hosts that drive the engine from several threads.

The engine itself is single-threaded.  :class:`ThreadSafeEngine` serializes
every mutation and snapshot behind one lock and buffers input commands in a
FIFO queue so that commands arriving between frames are applied in arrival
order before the next tick.
"""

from __future__ import annotations

import threading
from collections import deque
from contextlib import contextmanager
from typing import Deque, Iterator, Optional

from .commands import InputCommand, execute
from .engine import TetrisEngine
from .snapshot import RenderSnapshot


class ThreadSafeEngine:
    """Serialize access to a :class:`TetrisEngine`."""

    def __init__(self, engine: Optional[TetrisEngine] = None) -> None:
        self._engine = engine or TetrisEngine()
        self._lock = threading.Lock()
        self._queue: Deque[InputCommand] = deque()

    def queue_input(self, command: InputCommand) -> None:
        """Queue ``command`` for the next :meth:`update` or :meth:`process_inputs`."""

        with self._lock:
            self._queue.append(command)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def _drain(self) -> None:
        while self._queue:
            execute(self._engine, self._queue.popleft())

    def process_inputs(self) -> None:
        """Apply every queued command in arrival order."""

        with self._lock:
            self._drain()

    def update(self, dt: float) -> None:
        """Apply queued commands, then advance the engine by ``dt`` seconds."""

        with self._lock:
            self._drain()
            self._engine.update(dt)

    def soft_drop(self) -> bool:
        """Apply queued commands, then move the piece down one row.

        Returns the result of :meth:`TetrisEngine.move_down`, ``False`` when
        the piece locked or nothing moved.
        """

        with self._lock:
            self._drain()
            return self._engine.move_down()

    def snapshot(self) -> RenderSnapshot:
        with self._lock:
            return self._engine.snapshot()

    @property
    def drop_interval(self) -> float:
        with self._lock:
            return self._engine.drop_interval

    @property
    def score(self) -> int:
        with self._lock:
            return self._engine.score

    @contextmanager
    def locked(self) -> Iterator[TetrisEngine]:
        """Hold the lock and yield the wrapped engine for direct access."""

        with self._lock:
            yield self._engine
