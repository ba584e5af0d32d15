"""
Unit tests for hero progression (experience and leveling).
"""

from systems.progression import HeroStats


class TestGrantExp:
    """Tests for HeroStats.grant_exp()."""

    def test_no_level_up_below_threshold(self):
        stats = HeroStats()
        messages = stats.grant_exp(50)

        assert messages == []
        assert stats.level == 1
        assert stats.exp == 50
        assert stats.exp_to_next == 100

    def test_single_level_up_carries_remainder(self):
        """exp=90, exp_to_next=100, +25 -> level 2, exp 15, exp_to_next 150."""
        stats = HeroStats(exp=90)
        messages = stats.grant_exp(25)

        assert stats.level == 2
        assert stats.exp == 15
        assert stats.exp_to_next == 150
        assert messages == ["Level up! Lv.2"]

    def test_level_up_grows_base_stats(self):
        stats = HeroStats()
        stats.grant_exp(100)

        assert stats.base.max_hp == 110
        assert stats.base.max_mp == 55
        assert stats.base.attack == 12
        assert stats.base.defense == 6
        # Speed does not grow with level
        assert stats.base.speed == 3.0

    def test_multi_level_gain_from_one_award(self):
        """100 + 150 + 225 = 475 exp is exactly three levels."""
        stats = HeroStats()
        messages = stats.grant_exp(475)

        assert stats.level == 4
        assert stats.exp == 0
        assert stats.exp_to_next == 337  # floor(225 * 1.5)
        assert len(messages) == 3
        assert stats.base.attack == 16

    def test_non_positive_amount_is_ignored(self):
        stats = HeroStats()
        assert stats.grant_exp(0) == []
        assert stats.grant_exp(-10) == []
        assert stats.exp == 0


class TestEffectiveStats:
    """Effective stats are base + achievement modifiers."""

    def test_effective_adds_modifiers(self):
        stats = HeroStats()
        stats.modifiers.add_deltas({"attack": 1, "max_hp": 20, "speed": 2})

        assert stats.attack == 11
        assert stats.max_hp == 120
        assert stats.speed == 5.0
        assert stats.effective().attack == 11

    def test_leveling_never_touches_modifiers(self):
        stats = HeroStats()
        stats.modifiers.add_deltas({"attack": 3})
        stats.grant_exp(100)

        assert stats.modifiers.attack == 3
        assert stats.base.attack == 12
        assert stats.attack == 15
