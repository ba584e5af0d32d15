"""
Early game enemy archetypes.

Weak enemies that fill the first floors and the beginner spawn tables.
"""

from ..types import EnemyArchetype
from ..registry import register_archetype


def register_early_game_archetypes() -> None:
    """Register all early game enemy archetypes."""

    # Spawn-table only: never forms an initial wave
    register_archetype(
        EnemyArchetype(
            id="slime",
            name="Slime",
            hp=30,
            attack=5,
            defense=1,
            exp=10,
            radius=10,
            color=(51, 154, 240),
        )
    )

    register_archetype(
        EnemyArchetype(
            id="goblin",
            name="Goblin",
            hp=50,
            attack=8,
            defense=2,
            exp=20,
            radius=12,
            color=(81, 207, 102),
            wave_min_floor=1,
        )
    )
