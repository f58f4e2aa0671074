import pytest

from tetrix.engine import TetrisEngine
from tetrix.position import Position
from tetrix.tetromino import Tetromino, TetrominoType
from tetrix.utils import gravity_interval


def test_gravity_speed_increases_with_level():
    assert gravity_interval(0) == pytest.approx(1.0)
    assert gravity_interval(1) == pytest.approx(0.91)
    assert gravity_interval(5) == pytest.approx(0.55)
    intervals = [gravity_interval(level) for level in range(0, 20)]
    assert intervals == sorted(intervals, reverse=True)


def test_speed_plateaus_after_level_10():
    assert gravity_interval(10) == pytest.approx(0.1)
    assert gravity_interval(15) == pytest.approx(0.1)
    assert gravity_interval(99) == pytest.approx(0.1)


def _engine_with_o(y: int = 5) -> TetrisEngine:
    engine = TetrisEngine(seed=0)
    engine.current_piece = Tetromino(TetrominoType.O, Position(4, y))
    return engine


def test_update_drops_once_per_interval():
    engine = _engine_with_o()
    engine.update(0.5)
    assert engine.current_piece.position == Position(4, 5)
    engine.update(0.5)
    assert engine.current_piece.position == Position(4, 6)
    engine.update(0.5)
    assert engine.current_piece.position == Position(4, 6)


def test_long_frame_only_drops_one_row():
    engine = _engine_with_o()
    engine.update(5.0)
    assert engine.current_piece.position == Position(4, 6)
    assert engine.clock == pytest.approx(5.0)


def test_resume_restarts_the_drop_timer():
    engine = _engine_with_o()
    engine.update(0.8)
    engine.pause()
    engine.pause()
    engine.update(0.8)
    assert engine.current_piece.position == Position(4, 5)
    engine.update(0.2)
    assert engine.current_piece.position == Position(4, 6)


def test_drop_interval_follows_level():
    engine = TetrisEngine(seed=0)
    engine.level = 10
    engine.current_piece = Tetromino(TetrominoType.O, Position(4, 5))
    assert engine.drop_interval == pytest.approx(0.1)
    engine.update(0.15)
    assert engine.current_piece.position == Position(4, 6)


def test_gravity_locks_landed_piece():
    engine = _engine_with_o(y=18)
    upcoming = engine.next_piece
    engine.update(1.0)
    assert engine.board.get_cell(Position(4, 19)) is TetrominoType.O
    assert engine.current_piece == upcoming
