"""
Unit tests for the battle message log.
"""

from engine.message_log import BattleLog, LogEntry, get_kind_color
from settings import COLOR_DAMAGE, COLOR_TEXT


class TestKindColors:
    def test_known_kinds(self):
        assert get_kind_color("damage") == COLOR_DAMAGE
        assert get_kind_color("LEVELUP") == (255, 215, 0)

    def test_unknown_kind(self):
        assert get_kind_color("shout") is None
        assert LogEntry("hi", "shout").color == COLOR_TEXT


class TestBattleLog:
    def test_add_and_last_message(self):
        log = BattleLog()
        assert log.last_message == ""

        log.add_entry("Goblin attacks! 3 damage", "damage")

        assert log.last_message == "Goblin attacks! 3 damage"
        assert log.entries[-1].kind == "damage"

    def test_multiline_messages_are_split(self):
        log = BattleLog()
        log.add_entry("Level up! Lv.2\n\nLevel up! Lv.3", "levelup")

        assert log.texts() == ["Level up! Lv.2", "Level up! Lv.3"]
        assert all(e.kind == "levelup" for e in log.entries)

    def test_blank_messages_are_dropped(self):
        log = BattleLog()
        log.add_entry("   ")
        log.add_entry(None)
        assert log.entries == []

    def test_size_is_clamped(self):
        log = BattleLog(max_size=3)
        for i in range(5):
            log.add_message(f"m{i}")
        assert log.texts() == ["m2", "m3", "m4"]

    def test_recent_and_clear(self):
        log = BattleLog()
        for i in range(4):
            log.add_message(str(i))

        assert [e.text for e in log.recent(2)] == ["2", "3"]
        assert log.recent(0) == []

        log.clear()
        assert log.texts() == []
