"""
Unit tests for GameConfig persistence.
"""

import json

from engine.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.arena_size == (800, 600)
        assert config.autosave_interval_ticks == 30 * 60
        assert config.telemetry_enabled is False

    def test_autosave_disabled(self):
        config = GameConfig()
        config.autosave_seconds = 0
        assert config.autosave_interval_ticks == 0

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config" / "settings.json"
        config = GameConfig()
        config.arena_width = 1024
        config.autosave_seconds = 10
        assert config.save(path) is True

        loaded = GameConfig()
        assert loaded.load(path) is True
        assert loaded.arena_size == (1024, 600)
        assert loaded.autosave_seconds == 10

    def test_missing_file(self, tmp_path):
        assert GameConfig().load(tmp_path / "nope.json") is False

    def test_corrupt_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding="utf-8")

        config = GameConfig()
        assert config.load(path) is False
        assert config.fps == 60

    def test_partial_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"fps": 30}), encoding="utf-8")

        config = GameConfig()
        config.load(path)

        assert config.fps == 30
        assert config.autosave_interval_ticks == 30 * 30
        assert config.arena_width == 800
