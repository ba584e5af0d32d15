"""
Enemy type definitions.

Contains the core dataclass for enemy archetypes.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class EnemyArchetype:
    """
    Defines a *type* of enemy that can appear in battle.

    - id:              stable internal id (used for lookups and spawn tables)
    - name:            display name (battle log / renderer label)
    - hp, attack, defense: combat stats (no floor scaling)
    - exp:             experience granted to the player on kill
    - radius:          collision radius in pixels
    - color:           RGB used by the renderer

    Movement and attack style are shared by all archetypes for now:
    - speed:           pixels moved per tick while pursuing
    - attack_interval: ticks between contact attacks

    - wave_min_floor:  first floor on which this archetype makes up the
                       initial wave (None = never used for initial waves)
    """
    id: str
    name: str
    hp: int
    attack: int
    defense: int
    exp: int
    radius: int
    color: Tuple[int, int, int]

    speed: float = 1.5
    attack_interval: int = 60

    wave_min_floor: Optional[int] = None
