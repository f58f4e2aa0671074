"""Pygame front-end for the Tetris engine.

Keyboard and gamepad events are translated into :class:`InputCommand` values
and queued on a :class:`ThreadSafeEngine`; every frame drains the queue,
advances the engine by the frame time and draws an immutable snapshot.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, List, Optional

import pygame

from .board import HEIGHT, WIDTH
from .commands import SHIFT_REPEAT, SOFT_DROP_REPEAT, InputCommand, KeyRepeat
from .engine import EngineConfig, TetrisEngine
from .game_state import GameState
from .settings import GameSettings, SettingsManager
from .snapshot import RenderSnapshot, line_clear_progress
from .tetromino import Tetromino, TetrominoType
from .threadsafe import ThreadSafeEngine

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the preview/score panel right of the board
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
TEXT_COLOR = (230, 230, 235)
FLASH_COLOR = (255, 255, 200)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

KEY_COMMANDS: Dict[int, InputCommand] = {
    pygame.K_LEFT: InputCommand.MOVE_LEFT,
    pygame.K_a: InputCommand.MOVE_LEFT,
    pygame.K_RIGHT: InputCommand.MOVE_RIGHT,
    pygame.K_d: InputCommand.MOVE_RIGHT,
    pygame.K_DOWN: InputCommand.MOVE_DOWN,
    pygame.K_s: InputCommand.MOVE_DOWN,
    pygame.K_UP: InputCommand.ROTATE,
    pygame.K_w: InputCommand.ROTATE,
    pygame.K_SPACE: InputCommand.HARD_DROP,
    pygame.K_ESCAPE: InputCommand.PAUSE,
    pygame.K_r: InputCommand.RESET,
}

# SDL joystick button numbers of a common XInput layout
BUTTON_COMMANDS: Dict[int, InputCommand] = {
    0: InputCommand.ROTATE,  # A
    6: InputCommand.RESET,  # Back
    7: InputCommand.PAUSE,  # Start
}


def command_for_key(key: int, state: GameState) -> Optional[InputCommand]:
    """Return the command bound to ``key``.

    Reset is only honoured once the game is over so a stray key press cannot
    throw away a running game.
    """

    command = KEY_COMMANDS.get(key)
    if command is InputCommand.RESET and state is not GameState.GAME_OVER:
        return None
    return command


def command_for_button(button: int, state: GameState) -> Optional[InputCommand]:
    command = BUTTON_COMMANDS.get(button)
    if command is InputCommand.RESET and state is not GameState.GAME_OVER:
        return None
    return command


def _cell_rect(x: int, y: int, origin: tuple[int, int] = (0, 0)) -> pygame.Rect:
    ox, oy = origin
    return pygame.Rect(ox + x * CELL_SIZE, oy + y * CELL_SIZE, CELL_SIZE, CELL_SIZE)


def draw_board(screen: pygame.Surface, snapshot: RenderSnapshot, config: EngineConfig) -> None:
    """Render locked cells, flashing and fading the rows being cleared."""

    flash, fade = line_clear_progress(
        snapshot, config.line_clear_flash, config.line_clear_fade
    )
    clearing = set(snapshot.lines_to_clear)
    for y, row in enumerate(snapshot.board):
        for x, cell in enumerate(row):
            rect = _cell_rect(x, y)
            color = SHAPE_COLORS[cell] if cell is not None else BACKGROUND
            if y in clearing and cell is not None:
                if fade > 0:
                    color = tuple(int(c * (1.0 - fade)) for c in color)
                elif flash > 0:
                    color = FLASH_COLOR
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_tetromino(
    screen: pygame.Surface,
    piece: Tetromino,
    *,
    origin: tuple[int, int] = (0, 0),
    outline_only: bool = False,
    clip_top: bool = True,
) -> None:
    """Render ``piece``; with ``clip_top`` blocks above the board are skipped."""

    color = SHAPE_COLORS[piece.type]
    for block in piece.absolute_blocks():
        if clip_top and block.y < 0:
            continue
        rect = _cell_rect(block.x, block.y, origin)
        if outline_only:
            pygame.draw.rect(screen, color, rect, 2)
        else:
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def _preview(piece: Tetromino) -> Tetromino:
    """Return ``piece`` anchored for drawing inside the side panel."""

    return Tetromino(piece.type)


def draw_panel(
    screen: pygame.Surface,
    font: pygame.font.Font,
    snapshot: RenderSnapshot,
    settings: GameSettings,
) -> None:
    left = WIDTH * CELL_SIZE + CELL_SIZE // 2
    lines: List[str] = [
        f"Score: {snapshot.score}",
        f"High: {max(settings.high_score, snapshot.score)}",
        f"Lines: {snapshot.lines_cleared}",
        f"Level: {snapshot.level}",
    ]
    if snapshot.state is GameState.PAUSED:
        lines.append("Paused")
    elif snapshot.state is GameState.GAME_OVER:
        lines.extend(["Game over", "R to restart"])
    for i, text in enumerate(lines):
        surface = font.render(text, True, TEXT_COLOR)
        screen.blit(surface, (left, CELL_SIZE // 2 + i * (font.get_linesize() + 4)))

    preview_top = 9 * CELL_SIZE
    for i, piece in enumerate((snapshot.next_piece, snapshot.next_next_piece)):
        draw_tetromino(
            screen,
            _preview(piece),
            origin=(left + CELL_SIZE, preview_top + i * 4 * CELL_SIZE),
            clip_top=False,
        )


def draw_frame(
    screen: pygame.Surface,
    font: pygame.font.Font,
    snapshot: RenderSnapshot,
    config: EngineConfig,
    settings: GameSettings,
) -> None:
    screen.fill(BACKGROUND)
    draw_board(screen, snapshot, config)
    if snapshot.ghost_piece is not None:
        draw_tetromino(screen, snapshot.ghost_piece, outline_only=True)
    if snapshot.current_piece is not None:
        draw_tetromino(screen, snapshot.current_piece)
    draw_panel(screen, font, snapshot, settings)


class GameRunner:
    """Own the window and run the frame loop."""

    def __init__(
        self,
        engine: Optional[TetrisEngine] = None,
        settings_manager: Optional[SettingsManager] = None,
    ) -> None:
        engine = engine or TetrisEngine()
        self.config = engine.config
        self.game = ThreadSafeEngine(engine)
        self.settings_manager = settings_manager or SettingsManager()
        self.settings = self.settings_manager.load()
        self._running = False
        self._score_recorded = False
        self._repeats: Dict[InputCommand, KeyRepeat] = {
            InputCommand.MOVE_DOWN: KeyRepeat(*SOFT_DROP_REPEAT),
            InputCommand.MOVE_LEFT: KeyRepeat(*SHIFT_REPEAT),
            InputCommand.MOVE_RIGHT: KeyRepeat(*SHIFT_REPEAT),
        }
        self._screen: Optional[pygame.Surface] = None
        # Joysticks only report events while a reference is held
        self._joysticks: Dict[int, pygame.joystick.JoystickType] = {}

    @property
    def running(self) -> bool:
        return self._running

    # Input ------------------------------------------------------------
    def _press(self, command: Optional[InputCommand], now: float) -> None:
        if command is None:
            return
        repeat = self._repeats.get(command)
        if repeat is not None:
            repeat.press(now)
        if command is InputCommand.MOVE_DOWN:
            self._soft_drop(now)
        else:
            self.game.queue_input(command)

    def _soft_drop(self, now: float) -> None:
        if not self.game.soft_drop():
            self._repeats[InputCommand.MOVE_DOWN].landed(now)

    def _release(self, command: Optional[InputCommand]) -> None:
        repeat = self._repeats.get(command) if command is not None else None
        if repeat is not None:
            repeat.release()

    def _hat(self, value: tuple[int, int], now: float) -> None:
        hx, hy = value
        for command, active in (
            (InputCommand.MOVE_LEFT, hx < 0),
            (InputCommand.MOVE_RIGHT, hx > 0),
            (InputCommand.MOVE_DOWN, hy < 0),
        ):
            if active and not self._repeats[command].held:
                self._press(command, now)
            elif not active:
                self._release(command)
        if hy > 0:
            self.game.queue_input(InputCommand.ROTATE)

    def handle_event(self, event: pygame.event.Event, now: float) -> None:
        """Translate a pygame event into queued commands or UI toggles."""

        state = self.game.snapshot().state
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_F11:
                self.toggle_fullscreen()
            elif event.key == pygame.K_m:
                self.toggle_music()
            else:
                self._press(command_for_key(event.key, state), now)
        elif event.type == pygame.KEYUP:
            self._release(KEY_COMMANDS.get(event.key))
        elif event.type == pygame.JOYBUTTONDOWN:
            self._press(command_for_button(event.button, state), now)
        elif event.type == pygame.JOYHATMOTION:
            self._hat(event.value, now)
        elif event.type == pygame.JOYDEVICEREMOVED:
            self._joysticks.pop(event.instance_id, None)
        elif event.type == pygame.JOYDEVICEADDED:
            joystick = pygame.joystick.Joystick(event.device_index)
            self._joysticks[joystick.get_instance_id()] = joystick
            LOGGER.info("Gamepad connected: %s", joystick.get_name())

    def poll_repeats(self, now: float) -> None:
        for command, repeat in self._repeats.items():
            if not repeat.poll(now):
                continue
            if command is InputCommand.MOVE_DOWN:
                self._soft_drop(now)
            else:
                self.game.queue_input(command)

    # Settings ---------------------------------------------------------
    def toggle_music(self) -> None:
        self.settings.music_enabled = not self.settings.music_enabled
        self.settings_manager.save(self.settings)
        LOGGER.info("Music %s", "enabled" if self.settings.music_enabled else "disabled")

    def toggle_fullscreen(self) -> None:
        self.settings.fullscreen = not self.settings.fullscreen
        if self._screen is not None:
            try:
                pygame.display.toggle_fullscreen()
            except pygame.error as exc:
                LOGGER.warning("Fullscreen toggle failed: %s", exc)
        self.settings_manager.save(self.settings)

    def _record_score(self, snapshot: RenderSnapshot) -> None:
        if snapshot.state is not GameState.GAME_OVER:
            self._score_recorded = False
            return
        if not self._score_recorded:
            self._score_recorded = True
            if self.settings_manager.record_score(snapshot.score):
                self.settings.high_score = snapshot.score

    def step(self, dt: float, now: float) -> RenderSnapshot:
        """Advance one frame without drawing and return the new snapshot."""

        self.poll_repeats(now)
        self.game.update(dt)
        snapshot = self.game.snapshot()
        self._record_score(snapshot)
        return snapshot

    # Loop -------------------------------------------------------------
    async def _run_loop(self) -> None:
        pygame.init()
        pygame.joystick.init()
        size = (WIDTH * CELL_SIZE + PANEL_WIDTH, HEIGHT * CELL_SIZE)
        flags = pygame.FULLSCREEN | pygame.SCALED if self.settings.fullscreen else 0
        self._screen = pygame.display.set_mode(size, flags)
        pygame.display.set_caption("Tetrix")
        font = pygame.font.Font(None, 28)
        clock = pygame.time.Clock()
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            dt = clock.tick(FPS) / 1000.0
            now = time.monotonic()
            for event in pygame.event.get():
                self.handle_event(event, now)
            snapshot = self.step(dt, now)
            draw_frame(self._screen, font, snapshot, self.config, self.settings)
            pygame.display.flip()
            # Yield to the host event loop to keep it responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def run(self) -> None:
        asyncio.run(self._run_loop())

    def stop(self) -> None:
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
