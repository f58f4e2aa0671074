"""Persisted player settings.

Settings live in a small JSON file, ``~/.config/tetrix.json`` by default.
Reading or writing the file never raises: failures are logged and the game
carries on with defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


LOGGER = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".config" / "tetrix.json"


@dataclass
class GameSettings:
    high_score: int = 0
    music_enabled: bool = True
    fullscreen: bool = False

    def to_json(self) -> dict:
        return {
            "highScore": self.high_score,
            "musicEnabled": self.music_enabled,
            "isFullscreen": self.fullscreen,
        }

    @classmethod
    def from_json(cls, data: dict) -> "GameSettings":
        """Build settings from decoded JSON, keeping defaults for missing keys.

        Raises:
            ValueError: If a present value has the wrong type.
        """

        defaults = cls()
        high_score = data.get("highScore", defaults.high_score)
        music = data.get("musicEnabled", defaults.music_enabled)
        fullscreen = data.get("isFullscreen", defaults.fullscreen)
        if isinstance(high_score, bool) or not isinstance(high_score, int):
            raise ValueError(f"highScore must be an integer, got {high_score!r}")
        if not isinstance(music, bool) or not isinstance(fullscreen, bool):
            raise ValueError("musicEnabled and isFullscreen must be booleans")
        return cls(high_score=max(0, high_score), music_enabled=music, fullscreen=fullscreen)


class SettingsManager:
    """Load and save :class:`GameSettings` from a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH

    def load(self) -> GameSettings:
        if not self.path.exists():
            return GameSettings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("settings root must be an object")
            return GameSettings.from_json(data)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Failed to load settings from %s: %s", self.path, exc)
            return GameSettings()

    def save(self, settings: GameSettings) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(settings.to_json(), indent=2), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Failed to save settings to %s: %s", self.path, exc)

    def record_score(self, score: int) -> bool:
        """Persist ``score`` as the new high score if it beats the stored one."""

        settings = self.load()
        if score <= settings.high_score:
            return False
        settings.high_score = score
        self.save(settings)
        LOGGER.info("New high score: %d", score)
        return True
