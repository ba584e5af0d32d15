# systems/achievements.py
"""
Achievement system: permanent passive bonuses unlocked by play statistics.

Design:
- Each achievement is an AchievementDef with:
    id, name, description, hidden, condition, passive_effects
- Conditions are pure functions of a ProgressSnapshot, so they can be tested
  without building a Game.
- Runtime unlock state lives in Achievement objects owned by the
  AchievementMaster. Passive effects are added to the player's modifier
  block exactly once, at the moment of unlock (live or restored from a save).
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import logging
import time

from settings import HIDDEN_PLACEHOLDER

logger = logging.getLogger("dungeon_rpg.achievements")


@dataclass(frozen=True)
class ProgressSnapshot:
    """Read-only view of the state achievement conditions may look at."""
    level: int = 1
    attack: int = 0
    defense: int = 0
    max_hp: int = 0
    max_mp: int = 0
    enemies_killed: int = 0
    total_damage_taken: int = 0
    total_skill_uses: int = 0
    skill_ranks: Tuple[int, ...] = ()


Condition = Callable[[ProgressSnapshot], bool]


@dataclass(frozen=True)
class AchievementDef:
    id: str
    name: str
    description: str
    condition: Condition
    hidden: bool = False
    passive_effects: Dict[str, int] = field(default_factory=dict)


# --- Achievement registry ---------------------------------------------------

_ACHIEVEMENTS: Dict[str, AchievementDef] = {}


def register(achievement: AchievementDef) -> None:
    _ACHIEVEMENTS[achievement.id] = achievement


def get(achievement_id: str) -> AchievementDef:
    return _ACHIEVEMENTS[achievement_id]


def all_achievement_defs() -> Iterable[AchievementDef]:
    return _ACHIEVEMENTS.values()


# --- Concrete conditions ----------------------------------------------------


def _any_skill_at_rank(rank: int) -> Condition:
    return lambda s: any(r >= rank for r in s.skill_ranks)


def _all_skills_at_rank(rank: int) -> Condition:
    return lambda s: bool(s.skill_ranks) and all(r >= rank for r in s.skill_ranks)


def _build_achievements() -> None:
    # Public achievements
    register(AchievementDef(
        id="first_kill",
        name="First Blood",
        description="Defeat 1 enemy.",
        condition=lambda s: s.enemies_killed >= 1,
        passive_effects={"attack": 1},
    ))
    register(AchievementDef(
        id="kill_10",
        name="Slayer",
        description="Defeat 10 enemies.",
        condition=lambda s: s.enemies_killed >= 10,
        passive_effects={"attack": 3},
    ))
    register(AchievementDef(
        id="kill_100",
        name="Warrior",
        description="Defeat 100 enemies.",
        condition=lambda s: s.enemies_killed >= 100,
        passive_effects={"attack": 10, "max_hp": 20},
    ))
    register(AchievementDef(
        id="level_10",
        name="Growing Strong",
        description="Reach level 10.",
        condition=lambda s: s.level >= 10,
        passive_effects={"max_hp": 30, "max_mp": 15},
    ))
    register(AchievementDef(
        id="skill_rank_5",
        name="Skill Master",
        description="Raise any skill to rank 5.",
        condition=_any_skill_at_rank(5),
        passive_effects={"max_mp": 20},
    ))

    # Hidden achievements
    register(AchievementDef(
        id="hidden_no_death",
        name="Untouched Hero",
        description="Defeat 100 enemies without taking any damage.",
        condition=lambda s: s.enemies_killed >= 100 and s.total_damage_taken == 0,
        hidden=True,
        passive_effects={"defense": 10, "max_hp": 50},
    ))
    register(AchievementDef(
        id="hidden_perfect_dodge",
        name="Perfect Evasion",
        description="Defeat 50 enemies without taking any damage.",
        condition=lambda s: s.total_damage_taken == 0 and s.enemies_killed >= 50,
        hidden=True,
        passive_effects={"speed": 2},
    ))
    register(AchievementDef(
        id="hidden_skill_spam",
        name="Spellslinger",
        description="Use skills 1000 times.",
        condition=lambda s: s.total_skill_uses >= 1000,
        hidden=True,
        passive_effects={"max_mp": 30},
    ))
    register(AchievementDef(
        id="hidden_level_50",
        name="Legendary Adventurer",
        description="Reach level 50.",
        condition=lambda s: s.level >= 50,
        hidden=True,
        passive_effects={"attack": 20, "defense": 15, "max_hp": 100, "max_mp": 50},
    ))
    register(AchievementDef(
        id="hidden_all_skills_max",
        name="All Master",
        description="Raise every skill to rank 6.",
        condition=_all_skills_at_rank(6),
        hidden=True,
        passive_effects={"attack": 15, "max_mp": 50},
    ))


_build_achievements()


# --- Runtime state ----------------------------------------------------------


class Achievement:
    def __init__(self, definition: AchievementDef) -> None:
        self.definition = definition
        self.unlocked: bool = False
        self.unlocked_at: Optional[float] = None

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def is_hidden(self) -> bool:
        return self.definition.hidden

    @property
    def passive_effects(self) -> Dict[str, int]:
        return self.definition.passive_effects

    @property
    def display_name(self) -> str:
        if self.is_hidden and not self.unlocked:
            return HIDDEN_PLACEHOLDER
        return self.definition.name

    @property
    def display_description(self) -> str:
        if self.is_hidden and not self.unlocked:
            return HIDDEN_PLACEHOLDER
        return self.definition.description

    def check(self, snapshot: ProgressSnapshot) -> bool:
        if self.unlocked:
            return True
        return bool(self.definition.condition(snapshot))

    def unlock(self, player, unlocked_at: Optional[float] = None, top_up: bool = True) -> bool:
        """
        Mark as unlocked and apply passive effects to `player`.
        Returns False (and changes nothing) if already unlocked.
        """
        if self.unlocked:
            return False
        self.unlocked = True
        self.unlocked_at = unlocked_at if unlocked_at is not None else time.time() * 1000
        if self.passive_effects:
            player.apply_bonus(self.passive_effects, top_up=top_up)
        return True


class AchievementMaster:
    """
    Owns every Achievement and evaluates them against snapshots supplied
    by the caller (normally Game.progress_snapshot).
    """

    def __init__(
        self,
        snapshot_provider: Callable[[], ProgressSnapshot],
        definitions: Optional[List[AchievementDef]] = None,
    ) -> None:
        defs = definitions if definitions is not None else list(all_achievement_defs())
        self.achievements: List[Achievement] = [Achievement(d) for d in defs]
        self._snapshot_provider = snapshot_provider

    def get_achievement(self, achievement_id: str) -> Optional[Achievement]:
        for achievement in self.achievements:
            if achievement.id == achievement_id:
                return achievement
        return None

    def all_achievements(self) -> List[Achievement]:
        return self.achievements

    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements if a.unlocked)

    def evaluate(self, player) -> List[Achievement]:
        """
        Unlock every achievement whose condition holds.

        An unlock can change derived state (e.g. stats) that other conditions
        read, so passes repeat with a fresh snapshot until one unlocks nothing.
        Returns the newly unlocked achievements in unlock order.
        """
        newly_unlocked: List[Achievement] = []
        while True:
            snapshot = self._snapshot_provider()
            unlocked_this_pass = False
            for achievement in self.achievements:
                if achievement.unlocked:
                    continue
                if achievement.check(snapshot) and achievement.unlock(player):
                    logger.info("Achievement unlocked: %s", achievement.id)
                    newly_unlocked.append(achievement)
                    unlocked_this_pass = True
                    break
            if not unlocked_this_pass:
                return newly_unlocked

    def restore(self, achievement_id: str, unlocked: bool, unlocked_at: Optional[float], player) -> bool:
        """
        Restore one achievement from a save. Passive effects are re-applied
        without topping up hp/mp, since the saved values already include it.
        """
        achievement = self.get_achievement(achievement_id)
        if achievement is None:
            return False
        if unlocked:
            achievement.unlock(player, unlocked_at=unlocked_at, top_up=False)
        return True
