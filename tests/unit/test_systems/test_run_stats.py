"""
Unit tests for run statistics.
"""

from systems.run_stats import RunStats


class TestRunStats:
    def test_counters(self, run_stats):
        run_stats.record_kill()
        run_stats.record_kill()
        run_stats.record_damage_taken(7)
        run_stats.record_damage_taken(0)
        run_stats.record_skill_use()

        assert run_stats.to_dict() == {
            "enemies_killed": 2,
            "total_damage_taken": 7,
            "total_skill_uses": 1,
        }

    def test_merge_overlays_known_fields(self):
        stats = RunStats(enemies_killed=3, total_damage_taken=5)
        stats.merge({"enemies_killed": 12, "mystery": 99})

        assert stats.enemies_killed == 12
        assert stats.total_damage_taken == 5
        assert not hasattr(stats, "mystery")

    def test_merge_accepts_legacy_keys(self):
        stats = RunStats()
        stats.merge({"enemiesKilled": 4, "totalDamageTaken": 30, "totalSkillUses": 9})

        assert stats.to_dict() == {
            "enemies_killed": 4,
            "total_damage_taken": 30,
            "total_skill_uses": 9,
        }

    def test_merge_skips_bad_values(self):
        stats = RunStats(enemies_killed=2)
        stats.merge({"enemies_killed": "lots", "total_skill_uses": None})

        assert stats.enemies_killed == 2
        assert stats.total_skill_uses == 0

    def test_merge_skips_non_finite_values(self):
        stats = RunStats(total_damage_taken=9)
        stats.merge({"total_damage_taken": float("inf"), "enemies_killed": float("nan")})

        assert stats.total_damage_taken == 9
        assert stats.enemies_killed == 0
