"""
Enemy registry system.

Manages the global registry of enemy archetypes.
"""

from typing import Dict
import logging

from .types import EnemyArchetype

logger = logging.getLogger("dungeon_rpg.enemies")


# Global registry
ENEMY_ARCHETYPES: Dict[str, EnemyArchetype] = {}

# Archetype used when an unknown id is requested
DEFAULT_ARCHETYPE_ID = "goblin"


def register_archetype(arch: EnemyArchetype) -> EnemyArchetype:
    """Register an enemy archetype."""
    ENEMY_ARCHETYPES[arch.id] = arch
    return arch


def get_archetype(arch_id: str) -> EnemyArchetype:
    """
    Get an enemy archetype by ID.

    Unknown ids fall back to the default archetype instead of raising, so a
    bad spawn table can't stop a battle tick.
    """
    arch = ENEMY_ARCHETYPES.get(arch_id)
    if arch is None:
        logger.warning("Unknown enemy archetype %r, using %r", arch_id, DEFAULT_ARCHETYPE_ID)
        arch = ENEMY_ARCHETYPES[DEFAULT_ARCHETYPE_ID]
    return arch

