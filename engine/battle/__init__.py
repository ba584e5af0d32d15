"""
Battle engine module.

This module contains all battle-related engine code, split into logical components:
- scene.py: Main BattleScene class and the per-tick battle loop
- renderer.py: Rendering and drawing logic
- ai.py: Enemy pursuit and contact attacks
- combat.py: Combat calculations (damage floor, nearest target)
- visual_effects.py: Damage popups and the attack line
- types.py: Battle status alias and render view dataclasses
"""

from .scene import BattleScene

__all__ = ["BattleScene"]
