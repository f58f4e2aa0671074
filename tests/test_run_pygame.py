import pygame

from tetrix.board import PIECE_VALUES
from tetrix.commands import InputCommand
from tetrix.engine import TetrisEngine
from tetrix.game_state import GameState
from tetrix.position import Position
from tetrix.run_pygame import GameRunner, command_for_button, command_for_key
from tetrix.settings import SettingsManager
from tetrix.tetromino import Tetromino, TetrominoType


def _runner(tmp_path, engine=None) -> GameRunner:
    return GameRunner(engine or TetrisEngine(seed=0), SettingsManager(tmp_path / "tetrix.json"))


def _key(kind, key):
    return pygame.event.Event(kind, key=key)


def test_key_bindings():
    assert command_for_key(pygame.K_LEFT, GameState.PLAYING) is InputCommand.MOVE_LEFT
    assert command_for_key(pygame.K_d, GameState.PLAYING) is InputCommand.MOVE_RIGHT
    assert command_for_key(pygame.K_SPACE, GameState.PLAYING) is InputCommand.HARD_DROP
    assert command_for_key(pygame.K_ESCAPE, GameState.PAUSED) is InputCommand.PAUSE
    assert command_for_key(pygame.K_q, GameState.PLAYING) is None


def test_reset_only_after_game_over():
    assert command_for_key(pygame.K_r, GameState.PLAYING) is None
    assert command_for_key(pygame.K_r, GameState.GAME_OVER) is InputCommand.RESET
    assert command_for_button(6, GameState.PAUSED) is None
    assert command_for_button(6, GameState.GAME_OVER) is InputCommand.RESET
    assert command_for_button(0, GameState.PLAYING) is InputCommand.ROTATE


def test_key_press_is_queued_and_applied_on_step(tmp_path):
    runner = _runner(tmp_path)
    runner.handle_event(_key(pygame.KEYDOWN, pygame.K_SPACE), now=0.0)
    assert runner.game.pending == 1
    snapshot = runner.step(0.0, now=0.0)
    assert runner.game.pending == 0
    assert snapshot.score > 0


def test_held_soft_drop_repeats_until_release(tmp_path):
    engine = TetrisEngine(seed=0)
    engine.current_piece = Tetromino(TetrominoType.O, Position(4, 5))
    runner = _runner(tmp_path, engine)
    runner.handle_event(_key(pygame.KEYDOWN, pygame.K_DOWN), now=0.0)
    assert runner.game.pending == 0
    assert runner.game.snapshot().current_piece.position == Position(4, 6)
    runner.poll_repeats(0.05)
    assert runner.game.snapshot().current_piece.position == Position(4, 6)
    runner.poll_repeats(0.5)
    assert runner.game.snapshot().current_piece.position == Position(4, 7)
    runner.handle_event(_key(pygame.KEYUP, pygame.K_DOWN), now=0.6)
    runner.poll_repeats(1.0)
    assert runner.game.snapshot().current_piece.position == Position(4, 7)


def test_held_soft_drop_does_not_carry_into_next_piece(tmp_path):
    engine = TetrisEngine(seed=0)
    engine.current_piece = Tetromino(TetrominoType.O, Position(4, 17))
    upcoming = engine.next_piece
    runner = _runner(tmp_path, engine)
    runner.handle_event(_key(pygame.KEYDOWN, pygame.K_DOWN), now=0.0)

    snapshot = runner.step(0.016, now=0.3)

    assert snapshot.board[19][4] is TetrominoType.O
    assert snapshot.current_piece == upcoming
    assert snapshot.current_piece.position == Position(4, 0)
    runner.step(0.016, now=0.45)
    assert runner.game.snapshot().current_piece.position == Position(4, 0)
    runner.step(0.016, now=0.55)
    assert runner.game.snapshot().current_piece.position == Position(4, 1)


def test_music_toggle_is_persisted(tmp_path):
    runner = _runner(tmp_path)
    assert runner.settings.music_enabled
    runner.handle_event(_key(pygame.KEYDOWN, pygame.K_m), now=0.0)
    assert runner.game.pending == 0
    assert runner.settings_manager.load().music_enabled is False


def test_game_over_records_high_score_once(tmp_path):
    engine = TetrisEngine(seed=0)
    for row in range(4):
        engine.board.grid[row, :9] = PIECE_VALUES[TetrominoType.J]
    engine.score = 500
    engine.spawn_next_piece()
    runner = _runner(tmp_path, engine)

    runner.step(0.016, now=0.0)
    assert runner.settings.high_score == 500
    assert runner.settings_manager.load().high_score == 500

    runner.step(0.016, now=0.1)
    assert runner.settings_manager.load().high_score == 500


def test_quit_event_stops_runner(tmp_path):
    runner = _runner(tmp_path)
    runner._running = True
    runner.handle_event(pygame.event.Event(pygame.QUIT), now=0.0)
    assert not runner.running
