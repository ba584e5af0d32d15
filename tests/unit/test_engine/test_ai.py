"""
Unit tests for enemy pursuit and contact attacks.
"""

import pytest

from engine.battle.ai import in_contact_range, pursue, update_enemy
from systems.enemies import get_archetype
from world.entities import Enemy, Player


def _goblin(x, y):
    # radius 12, speed 1.5, attack interval 60
    return Enemy.from_archetype(get_archetype("goblin"), x, y)


class TestPursue:
    def test_moves_straight_toward_player(self):
        player = Player(x=100, y=0)
        goblin = _goblin(0, 0)

        distance = pursue(goblin, player)

        assert distance == pytest.approx(100)
        assert goblin.x == pytest.approx(1.5)
        assert goblin.y == pytest.approx(0)

    def test_stops_at_contact(self):
        player = Player(x=27, y=0)  # radius 15 + goblin 12
        goblin = _goblin(0, 0)
        pursue(goblin, player)
        assert goblin.x == 0

    def test_same_position_does_not_move(self):
        player = Player(x=50, y=50)
        goblin = _goblin(50, 50)
        assert pursue(goblin, player) == 0
        assert (goblin.x, goblin.y) == (50, 50)


class TestUpdateEnemy:
    def test_contact_range_includes_margin(self):
        player = Player(x=0, y=0)
        goblin = _goblin(37, 0)
        assert in_contact_range(goblin, player, 37)
        assert not in_contact_range(goblin, player, 37.5)

    def test_attacks_in_range_and_starts_cooldown(self):
        player = Player(x=0, y=0)
        goblin = _goblin(30, 0)

        assert update_enemy(goblin, player) is True
        assert goblin.attack_cooldown == 60

    def test_out_of_range_does_not_attack(self):
        player = Player(x=0, y=0)
        goblin = _goblin(300, 0)
        assert update_enemy(goblin, player) is False
        assert goblin.attack_cooldown == 0

    def test_cooldown_blocks_until_expired(self):
        player = Player(x=0, y=0)
        goblin = _goblin(30, 0)
        update_enemy(goblin, player)

        attacks = [update_enemy(goblin, player) for _ in range(60)]

        assert not any(attacks)
        assert goblin.attack_cooldown == 0
        assert update_enemy(goblin, player) is True

    def test_attack_uses_distance_before_moving(self):
        """An enemy that steps into range this tick attacks next tick."""
        player = Player(x=0, y=0)
        goblin = _goblin(38, 0)

        assert update_enemy(goblin, player) is False
        assert goblin.x == pytest.approx(36.5)
        assert update_enemy(goblin, player) is True
