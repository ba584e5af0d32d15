from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import math
import random

from settings import SPAWN_CIRCLE_RADIUS, WAVE_BASE_SIZE
from world.entities import Enemy
from systems.enemies import choose_wave_archetype, choose_spawn_archetype


def circle_positions(
    center: Tuple[float, float],
    count: int,
    radius: float = SPAWN_CIRCLE_RADIUS,
) -> List[Tuple[float, float]]:
    """
    `count` points evenly spaced on a circle around `center`, starting at
    angle 0 (to the right) and going clockwise in screen coordinates.
    """
    if count <= 0:
        return []
    cx, cy = center
    step = 2 * math.pi / count
    return [
        (cx + math.cos(step * i) * radius, cy + math.sin(step * i) * radius)
        for i in range(count)
    ]


def edge_position(
    arena_size: Tuple[int, int],
    rng: Optional[random.Random] = None,
) -> Tuple[float, float]:
    """Random point on the left or right arena edge."""
    rng = rng or random
    width, height = arena_size
    x = 0.0 if rng.random() > 0.5 else float(width)
    y = rng.random() * height
    return x, y


def build_initial_wave(floor_index: int, center: Tuple[float, float]) -> List[Enemy]:
    """
    Initial wave of a floor: 3 + floor enemies on the spawn circle.

    Every enemy in the wave shares the archetype tier-gated by floor.
    """
    archetype = choose_wave_archetype(floor_index)
    positions = circle_positions(center, WAVE_BASE_SIZE + floor_index)
    return [Enemy.from_archetype(archetype, x, y) for x, y in positions]


def build_periodic_spawn(
    spawn_table: Sequence[str],
    arena_size: Tuple[int, int],
    rng: Optional[random.Random] = None,
) -> Enemy:
    """One reinforcement drawn from the dungeon's spawn table, placed at an edge."""
    rng = rng or random
    archetype = choose_spawn_archetype(spawn_table, rng)
    x, y = edge_position(arena_size, rng)
    return Enemy.from_archetype(archetype, x, y)
