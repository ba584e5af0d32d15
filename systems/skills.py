# systems/skills.py

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging
import math

logger = logging.getLogger("dungeon_rpg.skills")


# Usage counts at which a skill reaches rank 1..6
RANK_THRESHOLDS = (0, 100, 500, 2000, 10000, 50000)
_RANK_SUFFIXES = ("", " II", " III", " IV", " V", " ∞")

# Cost shrinks by 0.1% per use, never below half of the base cost
COST_REDUCTION_PER_USE = 0.001
MAX_COST_REDUCTION = 0.5
# Damage grows by 1% per use, uncapped
DAMAGE_GROWTH_PER_USE = 0.01

DEFAULT_COOLDOWN_TICKS = 180  # 3 seconds at 60 FPS


# --- Pure progression formulas ---------------------------------------------


def current_cost(base_cost: int, usage_count: int) -> int:
    reduction = min(MAX_COST_REDUCTION, usage_count * COST_REDUCTION_PER_USE)
    return max(1, math.floor(base_cost * (1 - reduction)))


def current_damage(base_damage: int, usage_count: int) -> int:
    return math.floor(base_damage * (1 + usage_count * DAMAGE_GROWTH_PER_USE))


def skill_rank(usage_count: int) -> int:
    """Highest ladder index whose threshold is met, plus one."""
    for i in range(len(RANK_THRESHOLDS) - 1, -1, -1):
        if usage_count >= RANK_THRESHOLDS[i]:
            return i + 1
    return 1


def rank_name(base_name: str, rank: int) -> str:
    """Display name for a skill at a given rank ("Thunder III", "Heal ∞")."""
    index = max(1, min(rank, len(_RANK_SUFFIXES))) - 1
    return f"{base_name}{_RANK_SUFFIXES[index]}"


# --- Catalog ----------------------------------------------------------------


@dataclass(frozen=True)
class SkillDef:
    """
    Static skill definition.

    - id:            stable id used for saves and lookups
    - element:       "fire", "ice", "thunder", "physical" or "heal"
                     ("heal" skills restore HP instead of targeting)
    - base_cost:     MP cost at usage 0
    - base_damage:   damage (or heal amount) at usage 0
    - base_cooldown: ticks before the skill can be used again
    """
    id: str
    name: str
    description: str
    base_cost: int
    base_damage: int
    element: str = "normal"
    base_cooldown: int = DEFAULT_COOLDOWN_TICKS


SKILL_DEFS: Dict[str, SkillDef] = {}


def register(skill_def: SkillDef) -> SkillDef:
    """
    Register a skill definition in the global catalog and return it.
    """
    SKILL_DEFS[skill_def.id] = skill_def
    return skill_def


def get(skill_id: str) -> SkillDef:
    return SKILL_DEFS[skill_id]


def _build_core_skills() -> None:
    register(SkillDef("fire_ball", "Fire Ball", "Fire attack spell.", 10, 20, "fire"))
    register(SkillDef("ice_arrow", "Ice Arrow", "Ice attack spell.", 12, 25, "ice"))
    register(SkillDef("thunder", "Thunder", "Lightning attack spell.", 15, 30, "thunder"))
    register(SkillDef("heal", "Heal", "Restores HP.", 8, 30, "heal"))
    register(SkillDef("power_strike", "Power Strike", "Physical strike.", 5, 35, "physical"))


_build_core_skills()


# --- Runtime state ----------------------------------------------------------


class Skill:
    """
    A skill owned by the player: catalog identity plus mastery progress.

    Rank is cached but always equal to skill_rank(usage_count) or higher
    (it never goes down).
    """

    def __init__(self, definition: SkillDef) -> None:
        self.definition = definition
        self.usage_count: int = 0
        self.rank: int = 1
        self.cooldown: int = 0

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def element(self) -> str:
        return self.definition.element

    @property
    def is_heal(self) -> bool:
        return self.definition.element == "heal"

    @property
    def cost(self) -> int:
        return current_cost(self.definition.base_cost, self.usage_count)

    @property
    def damage(self) -> int:
        return current_damage(self.definition.base_damage, self.usage_count)

    @property
    def display_name(self) -> str:
        return rank_name(self.definition.name, self.rank)

    def is_ready(self) -> bool:
        return self.cooldown <= 0

    def tick(self) -> None:
        if self.cooldown > 0:
            self.cooldown -= 1

    def use(self) -> bool:
        """
        Record one use: bump usage, restart the cooldown, re-rank.
        Returns True if the rank went up.
        """
        self.usage_count += 1
        self.cooldown = self.definition.base_cooldown
        return self.check_rank_up()

    def check_rank_up(self) -> bool:
        new_rank = max(self.rank, skill_rank(self.usage_count))
        if new_rank > self.rank:
            self.rank = new_rank
            return True
        return False

    def restore(self, usage_count: int, saved_rank: Optional[int] = None) -> None:
        """Restore progress from a save; rank is derived from usage."""
        self.usage_count = max(0, int(usage_count))
        self.rank = skill_rank(self.usage_count)
        if saved_rank is not None and saved_rank != self.rank:
            logger.warning(
                "Saved rank %s for %s disagrees with usage %s; using rank %s",
                saved_rank, self.id, self.usage_count, self.rank,
            )


class SkillMaster:
    """Owns every Skill instance for the player, in catalog order."""

    def __init__(self, definitions: Optional[List[SkillDef]] = None) -> None:
        defs = definitions if definitions is not None else list(SKILL_DEFS.values())
        self.skills: List[Skill] = [Skill(d) for d in defs]

    def get_skill(self, skill_id: str) -> Optional[Skill]:
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None

    def all_skills(self) -> List[Skill]:
        return self.skills

    def tick(self) -> None:
        for skill in self.skills:
            skill.tick()

    def ranks(self) -> Dict[str, int]:
        return {s.id: s.rank for s in self.skills}
