"""
Mid game enemy archetypes.

Tougher enemies that take over the initial waves from floor 3 onward.
"""

from ..types import EnemyArchetype
from ..registry import register_archetype


def register_mid_game_archetypes() -> None:
    """Register all mid game enemy archetypes."""

    register_archetype(
        EnemyArchetype(
            id="orc",
            name="Orc",
            hp=100,
            attack=15,
            defense=5,
            exp=50,
            radius=18,
            color=(255, 107, 107),
            wave_min_floor=3,
        )
    )

    register_archetype(
        EnemyArchetype(
            id="skeleton",
            name="Skeleton",
            hp=80,
            attack=12,
            defense=4,
            exp=40,
            radius=14,
            color=(222, 226, 230),
            wave_min_floor=5,
        )
    )
