# systems/progression.py

from dataclasses import dataclass, field
from typing import List
import math

from .stats import StatBlock, empty_modifiers


# Per-level base stat growth
LEVEL_UP_GROWTH = {
    "max_hp": 10,
    "max_mp": 5,
    "attack": 2,
    "defense": 1,
}
EXP_CURVE_FACTOR = 1.5


@dataclass
class HeroStats:
    """
    Hero progression and stats.

    - level, exp, exp_to_next: progression
    - base:      core stats grown by leveling (never includes achievement bonuses)
    - modifiers: additive bonuses populated only by unlocked achievements

    The effective value of a stat is always base + modifier, exposed through
    the convenience properties below.
    """
    level: int = 1
    exp: int = 0
    exp_to_next: int = 100

    base: StatBlock = field(default_factory=StatBlock)
    modifiers: StatBlock = field(default_factory=empty_modifiers)

    # ------------------------------------------------------------------
    # Experience / Level
    # ------------------------------------------------------------------

    def grant_exp(self, amount: int) -> List[str]:
        """
        Give experience, handle level ups, and return text messages describing
        what happened. Healing on level-up is the Player's job.
        """
        messages: List[str] = []
        if amount <= 0:
            return messages

        self.exp += amount

        # May level up multiple times if amount is big
        while self.exp >= self.exp_to_next:
            self.exp -= self.exp_to_next
            self.level += 1
            self.exp_to_next = math.floor(self.exp_to_next * EXP_CURVE_FACTOR)
            self.base.add_deltas(LEVEL_UP_GROWTH)

            messages.append(f"Level up! Lv.{self.level}")

        return messages

    # ------------------------------------------------------------------
    # Effective stats
    # ------------------------------------------------------------------

    def effective(self) -> StatBlock:
        return self.base.combined(self.modifiers)

    @property
    def max_hp(self) -> int:
        return self.base.max_hp + self.modifiers.max_hp

    @property
    def max_mp(self) -> int:
        return self.base.max_mp + self.modifiers.max_mp

    @property
    def attack(self) -> int:
        return self.base.attack + self.modifiers.attack

    @property
    def defense(self) -> int:
        return self.base.defense + self.modifiers.defense

    @property
    def speed(self) -> float:
        return self.base.speed + self.modifiers.speed
