"""
Game configuration system for saving/loading user preferences.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Tuple

from settings import ARENA_WIDTH, ARENA_HEIGHT, FPS, AUTOSAVE_SECONDS

logger = logging.getLogger("dungeon_rpg.config")

# Config file location
CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_FILE = CONFIG_DIR / "settings.json"

DEFAULT_SAVE_DIR = Path(__file__).resolve().parent.parent / "saves"


class GameConfig:
    """Manages game configuration/settings."""

    def __init__(self) -> None:
        self.arena_width: int = ARENA_WIDTH
        self.arena_height: int = ARENA_HEIGHT
        self.fps: int = FPS
        self.autosave_seconds: int = AUTOSAVE_SECONDS
        self.save_dir: str = str(DEFAULT_SAVE_DIR)
        self.telemetry_enabled: bool = False

    @property
    def arena_size(self) -> Tuple[int, int]:
        return (self.arena_width, self.arena_height)

    @property
    def autosave_interval_ticks(self) -> int:
        """Autosave cadence converted to simulation ticks (0 disables it)."""
        return max(0, int(self.autosave_seconds * self.fps))

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for saving."""
        return {
            "arena_width": self.arena_width,
            "arena_height": self.arena_height,
            "fps": self.fps,
            "autosave_seconds": self.autosave_seconds,
            "save_dir": self.save_dir,
            "telemetry_enabled": self.telemetry_enabled,
        }

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Load config from dictionary."""
        self.arena_width = int(data.get("arena_width", ARENA_WIDTH))
        self.arena_height = int(data.get("arena_height", ARENA_HEIGHT))
        self.fps = int(data.get("fps", FPS))
        self.autosave_seconds = int(data.get("autosave_seconds", AUTOSAVE_SECONDS))
        self.save_dir = str(data.get("save_dir", DEFAULT_SAVE_DIR))
        self.telemetry_enabled = bool(data.get("telemetry_enabled", False))

    def save(self, path: Path = CONFIG_FILE) -> bool:
        """Save config to file."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving config: %s", e)
            return False

    def load(self, path: Path = CONFIG_FILE) -> bool:
        """Load config from file."""
        if not path.exists():
            return False

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            self.from_dict(data)
            return True
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error("Error loading config: %s", e)
            return False


# Global config instance
_config = GameConfig()


def get_config() -> GameConfig:
    """Get the global config instance."""
    return _config


def load_config() -> GameConfig:
    """Load and return the config."""
    _config.load()
    return _config


def save_config() -> bool:
    """Save the global config."""
    return _config.save()
