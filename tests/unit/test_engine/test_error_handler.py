"""
Unit tests for error types and critical error handling.
"""

import logging

from engine.error_handler import (
    GameError,
    SaveError,
    ValidationError,
    handle_critical_error,
    log_error,
)
from engine.message_log import BattleLog


class _MessageSink:
    def __init__(self):
        self.log = BattleLog()

    def add_message(self, value):
        self.log.add_message(value)


class TestErrorTypes:
    def test_user_message_defaults_to_message(self):
        error = GameError("disk on fire")
        assert error.user_message == "disk on fire"

    def test_subclasses(self):
        assert issubclass(SaveError, GameError)
        assert issubclass(ValidationError, GameError)
        assert SaveError("x", "Could not save.").user_message == "Could not save."


class TestHandling:
    def test_log_error_records_context(self, caplog):
        with caplog.at_level(logging.ERROR, logger="dungeon_rpg"):
            log_error(ValueError("bad"), "load_game")
        assert "load_game" in caplog.text
        assert "ValueError" in caplog.text

    def test_user_message_reaches_game(self):
        sink = _MessageSink()
        handled = handle_critical_error(SaveError("io", "Could not write save file."), "save", game=sink)

        assert handled is True
        assert sink.log.last_message == "Could not write save file."

    def test_generic_error_message(self):
        sink = _MessageSink()
        handle_critical_error(RuntimeError("boom"), "game_tick", game=sink)
        assert "game_tick" in sink.log.last_message

    def test_recovery_action(self):
        calls = []
        assert handle_critical_error(RuntimeError("x"), "ctx", recovery_action=lambda: calls.append(1)) is True
        assert calls == [1]

    def test_unhandled_without_game(self):
        assert handle_critical_error(RuntimeError("x"), "ctx") is False
