"""
Enemy selection and choice functions.

Two independent policies pick archetypes:
- initial waves are tier-gated by floor number (choose_wave_archetype)
- periodic spawns draw from the dungeon's own spawn table (choose_spawn_archetype)
"""

from typing import Optional, Sequence
import random

from .types import EnemyArchetype
from .registry import ENEMY_ARCHETYPES, get_archetype, DEFAULT_ARCHETYPE_ID


# Used when a dungeon has an empty spawn table
FALLBACK_SPAWN_ID = "slime"


def choose_wave_archetype(floor_index: int) -> EnemyArchetype:
    """
    Pick the archetype that makes up the initial wave on a floor.

    The archetype with the highest `wave_min_floor` not above the floor wins,
    giving fixed breakpoints (goblin -> orc at 3 -> skeleton at 5).
    """
    best: Optional[EnemyArchetype] = None
    for arch in ENEMY_ARCHETYPES.values():
        if arch.wave_min_floor is None or arch.wave_min_floor > floor_index:
            continue
        if best is None or arch.wave_min_floor > best.wave_min_floor:
            best = arch

    if best is None:
        return get_archetype(DEFAULT_ARCHETYPE_ID)
    return best


def choose_spawn_archetype(
    spawn_table: Sequence[str],
    rng: Optional[random.Random] = None,
) -> EnemyArchetype:
    """
    Pick one archetype uniformly from a dungeon spawn table.
    Unknown ids resolve to the default archetype via the registry.
    """
    rng = rng or random
    table = list(spawn_table) or [FALLBACK_SPAWN_ID]
    return get_archetype(rng.choice(table))
