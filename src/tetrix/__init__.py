"""Falling-block puzzle engine with a pygame front-end."""

from .board import Board, HEIGHT, WIDTH
from .commands import InputCommand, KeyRepeat, execute
from .engine import EngineConfig, TetrisEngine
from .game_state import GameState, LineClear
from .position import Position
from .settings import GameSettings, SettingsManager
from .snapshot import RenderSnapshot, project_ghost
from .tetromino import Tetromino, TetrominoType, shape_blocks
from .threadsafe import ThreadSafeEngine
from .utils import gravity_interval, render_grid

__all__ = [
    "Board",
    "WIDTH",
    "HEIGHT",
    "Position",
    "Tetromino",
    "TetrominoType",
    "GameState",
    "LineClear",
    "TetrisEngine",
    "EngineConfig",
    "InputCommand",
    "KeyRepeat",
    "ThreadSafeEngine",
    "RenderSnapshot",
    "GameSettings",
    "SettingsManager",
    "execute",
    "gravity_interval",
    "project_ghost",
    "render_grid",
    "shape_blocks",
]
