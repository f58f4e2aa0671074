"""Integer board coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A cell coordinate; ``x`` grows to the right and ``y`` downwards."""

    x: int
    y: int

    def translated(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)
