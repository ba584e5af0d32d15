"""
Unit tests for damage resolution and target selection.
"""

import pytest

from engine.battle.combat import find_nearest_enemy, resolve_damage, strike
from systems.enemies import get_archetype
from world.entities import Enemy, Player


def _goblin(x, y):
    return Enemy.from_archetype(get_archetype("goblin"), x, y)


class TestDamage:
    @pytest.mark.parametrize(
        "power, defense, expected",
        [(20, 2, 18), (5, 5, 1), (3, 40, 1), (0, 0, 1)],
    )
    def test_resolve_damage(self, power, defense, expected):
        assert resolve_damage(power, defense) == expected

    def test_strike_enemy(self):
        goblin = _goblin(0, 0)
        assert strike(goblin, 20) == 18
        assert goblin.hp == 32

    def test_strike_player_uses_effective_defense(self, player):
        player.stats.modifiers.add_deltas({"defense": 3})
        assert strike(player, 15) == 7
        assert player.hp == 93

    def test_hp_never_negative(self, player):
        strike(player, 10000)
        assert player.hp == 0
        assert not player.is_alive


class TestNearestEnemy:
    def test_picks_closest(self, player):
        far = _goblin(player.x + 100, player.y)
        near = _goblin(player.x, player.y + 20)
        assert find_nearest_enemy(player, [far, near]) is near

    def test_tie_goes_to_roster_order(self, player):
        first = _goblin(player.x + 50, player.y)
        second = _goblin(player.x - 50, player.y)
        assert find_nearest_enemy(player, [first, second]) is first
        assert find_nearest_enemy(player, [second, first]) is second

    def test_empty_roster(self, player):
        assert find_nearest_enemy(player, []) is None

    def test_dead_enemies_are_ignored(self):
        origin = Player(x=0, y=0)
        dead = _goblin(1, 0)
        dead.hp = 0
        alive = _goblin(30, 0)
        assert find_nearest_enemy(origin, [dead, alive]) is alive
