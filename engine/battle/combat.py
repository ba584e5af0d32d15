"""
Battle combat calculations module.

Handles damage resolution and target selection. Everything here is a pure
function of the entities passed in; the BattleScene owns the side effects
that follow (exp, kill counters, logs).
"""

from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from world.entities import Entity, Enemy


def resolve_damage(raw_power: int, defense: int) -> int:
    """Defense reduces damage, but every hit deals at least 1."""
    return max(1, int(raw_power) - int(defense))


def strike(target, raw_power: int) -> int:
    """
    Hit `target` (Player or Enemy) with `raw_power` through its defense.
    Returns the damage actually dealt.
    """
    actual = resolve_damage(raw_power, target.defense)
    target.take_damage(actual)
    return actual


def find_nearest_enemy(origin: "Entity", enemies: Iterable["Enemy"]) -> Optional["Enemy"]:
    """
    Closest living enemy by Euclidean distance.

    Ties go to the enemy met first in roster order (strict comparison).
    """
    nearest: Optional["Enemy"] = None
    nearest_distance = float("inf")
    for enemy in enemies:
        if not enemy.is_alive:
            continue
        distance = origin.distance_to(enemy)
        if distance < nearest_distance:
            nearest_distance = distance
            nearest = enemy
    return nearest
