"""
Real-time battle scene.

One BattleScene lives for one dungeon run. It owns the enemy roster and the
visual effect state and advances them one simulation tick at a time, in a
fixed order:

    regen/cooldowns -> movement -> skill intents -> enemy updates
    -> effect aging -> defeat check -> periodic achievement/spawn checks

Lifecycle decisions (leaving the battle, advancing floors, saving) belong to
the Game; the scene only reports its status.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

import pygame

from settings import (
    ARENA_WIDTH,
    ARENA_HEIGHT,
    ACHIEVEMENT_CHECK_INTERVAL,
    SKILL_INPUT_DEBOUNCE,
    COLOR_DAMAGE,
    COLOR_HEAL,
)
from engine.battle.ai import update_enemy
from engine.battle.combat import strike, find_nearest_enemy
from engine.battle.types import BattleStatus, TERMINAL_STATUSES
from engine.battle.visual_effects import BattleEffects
from engine.error_handler import BattleError
from engine.managers.floor_spawning import build_initial_wave, build_periodic_spawn
from engine.message_log import BattleLog
from systems.input import InputSnapshot
from world.entities import Enemy, Player

if TYPE_CHECKING:
    from systems.dungeons import Dungeon
    from systems.run_stats import RunStats
    from systems.skills import Skill, SkillMaster

logger = logging.getLogger("dungeon_rpg.battle")

# Popups float a little above the unit they belong to
POPUP_OFFSET_Y = 30


class BattleScene:
    def __init__(
        self,
        player: Player,
        skills: "SkillMaster",
        run_stats: "RunStats",
        dungeon: "Dungeon",
        log: Optional[BattleLog] = None,
        arena_size: Tuple[int, int] = (ARENA_WIDTH, ARENA_HEIGHT),
        rng: Optional[random.Random] = None,
        on_progress: Optional[Callable[[], None]] = None,
        on_rank_up: Optional[Callable[["Skill"], None]] = None,
    ) -> None:
        self.player = player
        self.skills = skills
        self.run_stats = run_stats
        self.dungeon = dungeon
        self.log = log if log is not None else BattleLog()
        self.arena_size = arena_size
        self.rng = rng or random.Random()
        # Called whenever achievements should be re-evaluated
        self.on_progress = on_progress
        self.on_rank_up = on_rank_up

        self.enemies: List[Enemy] = []
        self.effects = BattleEffects()
        self.status: BattleStatus = "ongoing"

        # Ticks since the battle started; drives the periodic checks
        self.ticks: int = 0
        self.last_skill_tick: Optional[int] = None

    # ------------ Log helpers ------------

    def _log(self, msg: str, kind: str = "normal") -> None:
        self.log.add_entry(msg, kind)

    def _notify_progress(self) -> None:
        if self.on_progress is not None:
            self.on_progress()

    # ------------ Floor setup ------------

    def start_floor(self, floor_index: int) -> None:
        """Replace the roster with the initial wave of `floor_index`."""
        if not 1 <= floor_index <= self.dungeon.floors:
            raise BattleError(
                f"Floor {floor_index} outside 1..{self.dungeon.floors} of {self.dungeon.id}",
                "That floor does not exist.",
            )
        self.effects.clear()
        self.enemies = self.generate_initial_wave(floor_index)
        self.status = "ongoing"
        self._log(f"Entered floor {floor_index}!")
        logger.debug("Floor %s started with %s enemies", floor_index, len(self.enemies))

    def generate_initial_wave(self, floor_index: int) -> List[Enemy]:
        return build_initial_wave(floor_index, (self.player.x, self.player.y))

    def spawn_enemy(self) -> Enemy:
        """Add one reinforcement from the dungeon's spawn table at an arena edge."""
        enemy = build_periodic_spawn(self.dungeon.spawn_table, self.arena_size, self.rng)
        self.enemies.append(enemy)
        logger.debug("Spawned %s at (%.1f, %.1f)", enemy.name, enemy.x, enemy.y)
        return enemy

    def clear(self) -> None:
        self.enemies = []
        self.effects.clear()

    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # ------------ Per-tick steps ------------

    def move_player(self, dx: float, dy: float) -> None:
        """
        Move along the summed input vector, renormalized to unit length and
        scaled by effective speed, clamped inside the arena.
        """
        if dx == 0 and dy == 0:
            return

        direction = pygame.math.Vector2(dx, dy)
        if direction.length() == 0:
            return
        step = direction.normalize() * self.player.stats.speed

        width, height = self.arena_size
        margin = self.player.radius
        new_x = max(margin, min(width - margin, self.player.x + step.x))
        new_y = max(margin, min(height - margin, self.player.y + step.y))
        self.player.move_to(new_x, new_y)

    def _debounce_ready(self) -> bool:
        return self.last_skill_tick is None or self.ticks - self.last_skill_tick > SKILL_INPUT_DEBOUNCE

    def handle_skill_input(self, snapshot: InputSnapshot, equipped: Sequence[str] = ()) -> None:
        """
        Fire skills for pressed slots.

        Catalog slots and equipped slots share one global debounce, so at
        most one skill fires per debounce window.
        """
        all_skills = self.skills.all_skills()
        for index, pressed in enumerate(snapshot.skill_slots):
            if pressed and index < len(all_skills) and self._debounce_ready():
                self.use_skill(all_skills[index])
                self.last_skill_tick = self.ticks

        for slot, pressed in enumerate(snapshot.equipped_slots):
            if not pressed or slot >= len(equipped) or not self._debounce_ready():
                continue
            skill = self.skills.get_skill(equipped[slot])
            if skill is not None:
                self.use_skill(skill)
                self.last_skill_tick = self.ticks

    def use_skill(self, skill: "Skill") -> bool:
        """
        Cast `skill`. Returns False when it could not be cast (battle over,
        still cooling down, or not enough MP); nothing changes in that case.

        Offensive skills hit the nearest enemy; with an empty roster the cast
        is wasted but still costs MP and starts the cooldown.
        """
        if self.is_over:
            return False
        if not skill.is_ready():
            logger.debug("%s is cooling down (%s ticks)", skill.id, skill.cooldown)
            return False
        if not self.player.consume_mp(skill.cost):
            self._log("Not enough MP!")
            return False

        ranked_up = skill.use()
        self.run_stats.record_skill_use()
        if ranked_up:
            self._log(f"{skill.display_name} reached rank {skill.rank}!", "levelup")
            if self.on_rank_up is not None:
                self.on_rank_up(skill)
            self._notify_progress()

        if skill.is_heal:
            amount = skill.damage
            self.player.heal(amount)
            self._log(f"{skill.display_name}! Restored {amount} HP", "heal")
            self.effects.add_popup(self.player.x, self.player.y - POPUP_OFFSET_Y, f"+{amount}", COLOR_HEAL)
            return True

        target = find_nearest_enemy(self.player, self.enemies)
        if target is None:
            logger.debug("%s used with no enemies in range", skill.id)
            return True

        dealt = strike(target, skill.damage)
        self.effects.set_attack_line((self.player.x, self.player.y), (target.x, target.y), skill.element)
        self._log(f"{skill.display_name}! {dealt} damage to {target.name}", "damage")
        self.effects.add_popup(target.x, target.y - POPUP_OFFSET_Y, f"-{dealt}", COLOR_DAMAGE)

        if not target.is_alive:
            self.kill_enemy(target)
        return True

    def kill_enemy(self, enemy: Enemy) -> None:
        """Remove `enemy`, pay out its exp and count the kill."""
        # Identity, not equality: two enemies can share every field
        self.enemies = [e for e in self.enemies if e is not enemy]
        messages = self.player.gain_exp(enemy.exp)
        self.run_stats.record_kill()
        self._log(f"Defeated {enemy.name}! +{enemy.exp} EXP")
        for message in messages:
            self._log(message, "levelup")

        if not self.enemies:
            self._complete_floor()

    def _complete_floor(self) -> None:
        floor_index = self.dungeon.current_floor
        if self.dungeon.is_final_floor():
            self.status = "victory"
            self._log(f"{self.dungeon.name} cleared!", "levelup")
        else:
            self.status = "cleared"
            self._log(f"Floor {floor_index} cleared! Get ready for the next floor.")
        logger.info("Floor %s of %s cleared", floor_index, self.dungeon.id)

    def update_enemies(self) -> None:
        for enemy in list(self.enemies):
            if update_enemy(enemy, self.player):
                dealt = strike(self.player, enemy.attack)
                self.run_stats.record_damage_taken(dealt)
                self._log(f"{enemy.name} attacks! {dealt} damage", "damage")
                self.effects.add_popup(self.player.x, self.player.y - POPUP_OFFSET_Y, f"-{dealt}", COLOR_DAMAGE)

    def check_defeat(self) -> None:
        if not self.is_over and self.player.hp <= 0:
            self.status = "defeat"
            self._log("You have fallen...", "damage")

    # ------------ Tick ------------

    def update(self, snapshot: InputSnapshot, equipped: Sequence[str] = ()) -> BattleStatus:
        """Advance the battle by one tick and return the resulting status."""
        if self.is_over:
            return self.status

        self.ticks += 1

        self.player.regenerate()
        self.skills.tick()

        self.move_player(snapshot.move_x, snapshot.move_y)
        self.handle_skill_input(snapshot, equipped)
        self.update_enemies()
        self.effects.update()
        self.check_defeat()

        if self.is_over:
            return self.status

        if self.ticks % ACHIEVEMENT_CHECK_INTERVAL == 0:
            self._notify_progress()

        # A cleared floor stays empty until the player moves on
        interval = self.dungeon.spawn_interval
        if self.status == "ongoing" and interval > 0 and self.ticks % interval == 0:
            self.spawn_enemy()

        return self.status
