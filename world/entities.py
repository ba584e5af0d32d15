# world/entities.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pygame

from settings import COLOR_PLAYER, COLOR_ENEMY
from systems.progression import HeroStats
from systems.enemies.types import EnemyArchetype


@dataclass
class Entity:
    """Base circular entity that lives in the arena."""
    x: float
    y: float
    radius: int

    @property
    def pos(self) -> pygame.math.Vector2:
        return pygame.math.Vector2(self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def move_by(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def distance_to(self, other: "Entity") -> float:
        return self.pos.distance_to(other.pos)


@dataclass
class Player(Entity):
    """
    The single persistent character.

    Progression and stats live in `stats` (HeroStats); this entity owns the
    position plus the current hp / mp pools.
    """
    x: float = 400.0
    y: float = 300.0
    radius: int = 15
    color: Tuple[int, int, int] = COLOR_PLAYER

    stats: HeroStats = field(default_factory=HeroStats)
    hp: int = 100
    mp: float = 50.0
    mp_regen: float = 0.05

    @property
    def max_hp(self) -> int:
        return self.stats.max_hp

    @property
    def max_mp(self) -> int:
        return self.stats.max_mp

    @property
    def defense(self) -> int:
        return self.stats.defense

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp if self.max_hp > 0 else 0.0

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> None:
        self.hp = max(0, self.hp - amount)

    def heal(self, amount: int) -> None:
        self.hp = min(self.max_hp, self.hp + amount)

    def restore_mp(self, amount: float) -> None:
        self.mp = min(self.max_mp, self.mp + amount)

    def consume_mp(self, amount: int) -> bool:
        if self.mp >= amount:
            self.mp -= amount
            return True
        return False

    def full_restore(self) -> None:
        self.hp = self.max_hp
        self.mp = self.max_mp

    def regenerate(self) -> None:
        """Per-tick passive MP regeneration. HP never regenerates on its own."""
        if self.mp < self.max_mp:
            self.mp = min(self.max_mp, self.mp + self.mp_regen)

    def gain_exp(self, amount: int) -> List[str]:
        """Grant experience; every level-up fully restores hp and mp."""
        old_level = self.stats.level
        messages = self.stats.grant_exp(amount)
        if self.stats.level > old_level:
            self.full_restore()
        return messages

    def apply_bonus(self, deltas: Dict[str, int], top_up: bool = True) -> None:
        """
        Add achievement deltas to the modifier block.

        With `top_up`, current hp / mp grow by any max_hp / max_mp delta so
        the bonus is usable right away.
        """
        self.stats.modifiers.add_deltas(deltas)
        if top_up:
            self.hp += int(deltas.get("max_hp", 0))
            self.mp += deltas.get("max_mp", 0)
        self.hp = max(0, min(self.hp, self.max_hp))
        self.mp = max(0.0, min(self.mp, self.max_mp))


@dataclass
class Enemy(Entity):
    """A live enemy in the battle roster, built from an archetype."""
    archetype: Optional[EnemyArchetype] = None
    name: str = ""
    max_hp: int = 1
    hp: int = 1
    attack: int = 0
    defense: int = 0
    exp: int = 0
    speed: float = 1.5
    attack_interval: int = 60
    attack_cooldown: int = 0
    color: Tuple[int, int, int] = COLOR_ENEMY

    @classmethod
    def from_archetype(cls, arch: EnemyArchetype, x: float, y: float) -> "Enemy":
        return cls(
            x=x,
            y=y,
            radius=arch.radius,
            archetype=arch,
            name=arch.name,
            max_hp=arch.hp,
            hp=arch.hp,
            attack=arch.attack,
            defense=arch.defense,
            exp=arch.exp,
            speed=arch.speed,
            attack_interval=arch.attack_interval,
            color=arch.color,
        )

    def take_damage(self, amount: int) -> None:
        self.hp = max(0, self.hp - amount)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_ratio(self) -> float:
        return self.hp / self.max_hp if self.max_hp > 0 else 0.0
