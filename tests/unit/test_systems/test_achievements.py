"""
Unit tests for achievement conditions, unlocking and passive effects.
"""

from dataclasses import replace

import pytest

from systems.achievements import (
    Achievement,
    AchievementDef,
    AchievementMaster,
    ProgressSnapshot,
    all_achievement_defs,
    get,
)
from world.entities import Player


def _master_for(snapshot_ref, definitions=None):
    """AchievementMaster reading whatever snapshot_ref[0] currently holds."""
    return AchievementMaster(lambda: snapshot_ref[0], definitions)


class TestCatalog:
    def test_all_ten_registered(self):
        ids = {d.id for d in all_achievement_defs()}
        assert ids == {
            "first_kill",
            "kill_10",
            "kill_100",
            "level_10",
            "skill_rank_5",
            "hidden_no_death",
            "hidden_perfect_dodge",
            "hidden_skill_spam",
            "hidden_level_50",
            "hidden_all_skills_max",
        }

    @pytest.mark.parametrize(
        "achievement_id, snapshot, expected",
        [
            ("first_kill", ProgressSnapshot(enemies_killed=0), False),
            ("first_kill", ProgressSnapshot(enemies_killed=1), True),
            ("kill_10", ProgressSnapshot(enemies_killed=10), True),
            ("level_10", ProgressSnapshot(level=9), False),
            ("level_10", ProgressSnapshot(level=10), True),
            ("skill_rank_5", ProgressSnapshot(skill_ranks=(1, 5, 1)), True),
            ("skill_rank_5", ProgressSnapshot(skill_ranks=(4, 4)), False),
            ("hidden_no_death", ProgressSnapshot(enemies_killed=100, total_damage_taken=0), True),
            ("hidden_no_death", ProgressSnapshot(enemies_killed=100, total_damage_taken=1), False),
            ("hidden_perfect_dodge", ProgressSnapshot(enemies_killed=50), True),
            ("hidden_skill_spam", ProgressSnapshot(total_skill_uses=1000), True),
            ("hidden_all_skills_max", ProgressSnapshot(skill_ranks=(6, 6, 5)), False),
            ("hidden_all_skills_max", ProgressSnapshot(skill_ranks=(6, 6, 6)), True),
            ("hidden_all_skills_max", ProgressSnapshot(skill_ranks=()), False),
        ],
    )
    def test_conditions(self, achievement_id, snapshot, expected):
        assert get(achievement_id).condition(snapshot) is expected


class TestAchievement:
    def test_hidden_placeholder_until_unlocked(self):
        achievement = Achievement(get("hidden_skill_spam"))
        assert achievement.display_name == "???"
        assert achievement.display_description == "???"

        achievement.unlock(Player())

        assert achievement.display_name == "Spellslinger"
        assert "1000" in achievement.display_description

    def test_public_achievement_always_visible(self):
        achievement = Achievement(get("first_kill"))
        assert achievement.display_name == "First Blood"

    def test_unlock_applies_passive_once(self):
        player = Player()
        achievement = Achievement(get("kill_100"))

        assert achievement.unlock(player) is True
        assert achievement.unlock(player) is False

        assert player.stats.modifiers.attack == 10
        assert player.stats.modifiers.max_hp == 20
        assert achievement.unlocked_at is not None

    def test_unlock_tops_up_hp_and_mp(self):
        player = Player()
        Achievement(get("level_10")).unlock(player)

        assert player.max_hp == 130
        assert player.hp == 130
        assert player.max_mp == 65
        assert player.mp == 65

    def test_unlock_without_top_up_keeps_pools(self):
        player = Player(hp=40, mp=10.0)
        Achievement(get("level_10")).unlock(player, unlocked_at=123.0, top_up=False)

        assert player.hp == 40
        assert player.mp == 10.0
        assert player.max_hp == 130

    def test_unlock_keeps_given_timestamp(self):
        achievement = Achievement(get("first_kill"))
        achievement.unlock(Player(), unlocked_at=1700000000000.0)
        assert achievement.unlocked_at == 1700000000000.0


class TestAchievementMaster:
    def test_evaluate_unlocks_matching(self):
        player = Player()
        snapshot = [ProgressSnapshot(enemies_killed=10)]
        master = _master_for(snapshot)

        unlocked = master.evaluate(player)

        assert {a.id for a in unlocked} == {"first_kill", "kill_10"}
        assert player.stats.attack == 14
        assert master.unlocked_count() == 2

    def test_duplicate_evaluation_is_idempotent(self):
        player = Player()
        snapshot = [ProgressSnapshot(enemies_killed=1)]
        master = _master_for(snapshot)

        master.evaluate(player)
        before = player.stats.modifiers.to_dict()
        assert master.evaluate(player) == []

        assert player.stats.modifiers.to_dict() == before

    def test_unlock_cascade_uses_fresh_snapshot(self):
        """A stat granted by one unlock can satisfy another condition in the same evaluation."""
        player = Player()
        defs = [
            AchievementDef("needs_attack", "Strong", "", condition=lambda s: s.attack >= 11),
            AchievementDef("grant_attack", "Grant", "", condition=lambda s: True, passive_effects={"attack": 1}),
        ]
        master = AchievementMaster(
            lambda: ProgressSnapshot(attack=player.stats.attack),
            definitions=defs,
        )

        unlocked = master.evaluate(player)

        assert [a.id for a in unlocked] == ["grant_attack", "needs_attack"]

    def test_restore_does_not_top_up(self):
        player = Player(hp=50, mp=20.0)
        master = _master_for([ProgressSnapshot()])

        assert master.restore("kill_100", True, 1.0, player) is True
        assert master.restore("unknown", True, 1.0, player) is False

        assert player.hp == 50
        assert player.stats.modifiers.max_hp == 20
        assert master.get_achievement("kill_100").unlocked_at == 1.0

    def test_restore_locked_applies_nothing(self):
        player = Player()
        master = _master_for([ProgressSnapshot()])
        master.restore("kill_100", False, None, player)

        assert not master.get_achievement("kill_100").unlocked
        assert player.stats.modifiers.attack == 0

    def test_snapshot_is_read_only(self):
        snapshot = ProgressSnapshot(level=3)
        with pytest.raises(Exception):
            snapshot.level = 4
        assert replace(snapshot, level=4).level == 4
