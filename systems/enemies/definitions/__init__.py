"""
Enemy archetype definitions.

Definitions are organized by game phase:
- early_game.py: slime and goblin (floors 1-2, spawn-table fodder)
- mid_game.py:   orc and skeleton (floors 3+)
"""

from . import early_game
from . import mid_game


def register_all_definitions() -> None:
    """Register all enemy archetypes."""
    early_game.register_early_game_archetypes()
    mid_game.register_mid_game_archetypes()
