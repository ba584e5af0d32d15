"""
Unit tests for the FloorManager class and floor spawning helpers.
"""

import math
import random

import pytest

from engine.managers.floor_manager import FloorManager
from engine.managers.floor_spawning import (
    build_initial_wave,
    build_periodic_spawn,
    circle_positions,
    edge_position,
)
from systems.dungeons import DungeonMaster


@pytest.fixture
def cave():
    return DungeonMaster().get_dungeon("cave_1")


class TestFloorManager:
    """Tests for FloorManager."""

    def test_initial_state(self, floor_manager):
        """No dungeon means floor 0 and nothing to advance."""
        assert floor_manager.floor == 0
        assert floor_manager.is_final is False
        assert floor_manager.can_advance(True) is False

    def test_start_resets_to_floor_one(self, floor_manager, cave):
        cave.current_floor = 3
        assert floor_manager.start(cave) == 1
        assert floor_manager.floor == 1

    def test_can_advance_requires_empty_roster(self, floor_manager, cave):
        floor_manager.start(cave)
        assert floor_manager.can_advance(False) is False
        assert floor_manager.can_advance(True) is True

    def test_advance_until_final(self, floor_manager, cave):
        floor_manager.start(cave)
        assert floor_manager.advance() == 2
        assert floor_manager.advance() == 3
        assert floor_manager.is_final
        assert floor_manager.can_advance(True) is False

    def test_advance_past_final_is_refused(self, floor_manager, cave):
        floor_manager.start(cave)
        cave.current_floor = cave.floors
        assert floor_manager.advance() == cave.floors


class TestSpawnPositions:
    def test_circle_positions_start_at_angle_zero(self):
        positions = circle_positions((400, 300), 4, radius=200)

        assert len(positions) == 4
        assert positions[0] == pytest.approx((600, 300))
        assert positions[1] == pytest.approx((400, 500))
        assert positions[2] == pytest.approx((200, 300))
        assert positions[3] == pytest.approx((400, 100))

    def test_circle_positions_are_on_the_circle(self):
        for x, y in circle_positions((100, 100), 7, radius=50):
            assert math.hypot(x - 100, y - 100) == pytest.approx(50)

    def test_circle_positions_empty(self):
        assert circle_positions((0, 0), 0) == []

    def test_edge_position_is_on_left_or_right_edge(self):
        rng = random.Random(3)
        for _ in range(30):
            x, y = edge_position((800, 600), rng)
            assert x in (0.0, 800.0)
            assert 0 <= y <= 600


class TestWaveBuilding:
    @pytest.mark.parametrize("floor_index, expected", [(1, 4), (2, 5), (5, 8)])
    def test_wave_size_is_three_plus_floor(self, floor_index, expected):
        assert len(build_initial_wave(floor_index, (400, 300))) == expected

    def test_initial_wave_floor_one(self):
        wave = build_initial_wave(1, (400, 300))
        assert len(wave) == 4
        assert {e.name for e in wave} == {"Goblin"}
        assert all(e.hp == e.max_hp == 50 for e in wave)

    def test_initial_wave_floor_three_is_orcs(self):
        wave = build_initial_wave(3, (400, 300))
        assert len(wave) == 6
        assert {e.name for e in wave} == {"Orc"}

    def test_enemies_in_a_wave_are_distinct_objects(self):
        wave = build_initial_wave(2, (400, 300))
        wave[0].take_damage(10)
        assert wave[1].hp == 50

    def test_periodic_spawn_uses_table(self):
        rng = random.Random(11)
        for _ in range(20):
            enemy = build_periodic_spawn(("orc",), (800, 600), rng)
            assert enemy.name == "Orc"
            assert enemy.x in (0.0, 800.0)
