"""Simple ASCII demo for the Tetris engine.

Run with: `python -m tetrix`

This module prints a single frame composed of the board, the active tetromino
and its ghost, useful as a minimal smoke test without opening a window.  Use
``--drops`` to hard drop a few pieces first and ``--seed`` to pick the piece
sequence.
"""

from __future__ import annotations

import argparse
import logging

from . import EngineConfig, TetrisEngine, render_grid


def _format_grid(grid: list[list[int]]) -> str:
    def cell(value: int) -> str:
        if value > 0:
            return "#"
        if value < 0:
            return "+"
        return "."

    return "\n".join("".join(cell(v) for v in row) for row in grid)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the piece sequence.")
    parser.add_argument("--drops", type=int, default=0, help="Hard drops to perform before printing.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    engine = TetrisEngine(seed=args.seed, config=EngineConfig(line_clear_flash=0.0, line_clear_fade=0.0))
    for _ in range(args.drops):
        engine.hard_drop()
    grid = render_grid(engine.board, engine.current_piece, engine.ghost_piece())
    print(_format_grid(grid))
    print(f"Score: {engine.score}  Lines: {engine.lines_cleared}  Level: {engine.level}  State: {engine.state.value}")


if __name__ == "__main__":
    main()
