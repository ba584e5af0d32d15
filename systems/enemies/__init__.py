"""
Enemy system module.

This module provides enemy archetypes and the policies that choose them
for initial floor waves and periodic dungeon spawns.
"""

from .types import EnemyArchetype
from .registry import (
    ENEMY_ARCHETYPES, DEFAULT_ARCHETYPE_ID,
    register_archetype, get_archetype,
)
from .selection import choose_wave_archetype, choose_spawn_archetype

# Register all definitions on import
from .definitions import register_all_definitions
register_all_definitions()

__all__ = [
    "EnemyArchetype",
    "ENEMY_ARCHETYPES",
    "DEFAULT_ARCHETYPE_ID",
    "register_archetype",
    "get_archetype",
    "choose_wave_archetype",
    "choose_spawn_archetype",
]
