"""
Enemy AI for real-time battles.

Enemies only pursue and attack on contact:
- step straight toward the player at their own speed until touching
- attack when within contact range once their attack cooldown has run out
"""

from typing import TYPE_CHECKING

import pygame

from settings import CONTACT_MARGIN

if TYPE_CHECKING:
    from world.entities import Enemy, Player


def pursue(enemy: "Enemy", player: "Player") -> float:
    """
    Move `enemy` one step toward `player`, stopping at radius contact.
    Returns the distance measured *before* moving.
    """
    offset = pygame.math.Vector2(player.x - enemy.x, player.y - enemy.y)
    distance = offset.length()

    if distance > 0 and distance > enemy.radius + player.radius:
        step = offset / distance * enemy.speed
        enemy.move_by(step.x, step.y)

    return distance


def in_contact_range(enemy: "Enemy", player: "Player", distance: float) -> bool:
    return distance <= enemy.radius + player.radius + CONTACT_MARGIN


def update_enemy(enemy: "Enemy", player: "Player") -> bool:
    """
    Advance one enemy by one tick.

    The attack check uses the pre-move distance. A cooling-down enemy spends
    the tick counting down and never attacks in the same tick.
    Returns True when the enemy should attack this tick (cooldown is reset
    here, damage is applied by the caller).
    """
    distance = pursue(enemy, player)

    if enemy.attack_cooldown > 0:
        enemy.attack_cooldown -= 1
        return False

    if in_contact_range(enemy, player, distance):
        enemy.attack_cooldown = enemy.attack_interval
        return True
    return False
