import logging
import random
from pathlib import Path
from typing import Optional, List

from settings import MAX_EQUIPPED_SKILLS
from world.entities import Player, Enemy
from systems.achievements import Achievement, AchievementMaster, ProgressSnapshot
from systems.dungeons import Dungeon, DungeonMaster
from systems.input import InputSnapshot
from systems.run_stats import RunStats
from systems.skills import Skill, SkillMaster
from systems.stats import empty_modifiers
from ..battle import BattleScene
from ..battle.types import RenderSnapshot, UnitView, PopupView, AttackLineView
from ..config import GameConfig, get_config
from ..error_handler import handle_critical_error
from ..message_log import BattleLog
from ..managers.floor_manager import FloorManager
from ..utils.save_system import SaveStore, FileSaveStore, save_game, load_game

try:
    from telemetry.logger import telemetry
except Exception:  # telemetry must never break the game
    telemetry = None

logger = logging.getLogger("dungeon_rpg.game")

# Battle log lines shown on the HUD
HUD_LOG_LINES = 5


class GameMode:
    BASE = "base"
    DUNGEON_SELECT = "dungeon_select"
    BATTLE = "battle"
    RESULT = "result"


class Game:
    """
    Core game object.

    Owns every long-lived piece of state (player, skills, achievements,
    dungeons, run statistics, loadout) and drives the mode state machine:

    - "base": between runs, loadout can be edited
    - "dungeon_select": choosing a dungeon
    - "battle": real-time fight handled by BattleScene
    - "result": victory / defeat screen (see result_victory)

    Pure simulation: nothing here draws or polls devices. The pygame edge
    (main.py, mode handlers) feeds InputSnapshots into tick() and draws
    render_snapshot().
    """

    @property
    def floor(self) -> int:
        """Current floor number (convenience property for FloorManager)."""
        return self.floor_manager.floor

    @property
    def enemies(self) -> List[Enemy]:
        """Active roster, empty outside of battle."""
        return self.battle.enemies if self.battle is not None else []

    def __init__(
        self,
        store: Optional[SaveStore] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or get_config()
        self.store = store if store is not None else FileSaveStore(Path(self.config.save_dir))
        self.rng = rng or random.Random()

        arena_w, arena_h = self.config.arena_size
        self.player = Player(x=arena_w / 2, y=arena_h / 2)
        self.skill_master = SkillMaster()
        self.run_stats = RunStats()
        self.achievement_master = self.create_achievement_master()
        self.dungeon_master = DungeonMaster()
        self.floor_manager = FloorManager()
        self.battle_log = BattleLog()

        self.mode: str = GameMode.BASE
        self.result_victory: Optional[bool] = None
        self.battle: Optional[BattleScene] = None
        self.current_dungeon: Optional[Dungeon] = None

        # Equipped skill ids, fired by the 1/2/3 slots
        self.loadout: List[str] = []

        self._ticks_since_save: int = 0

    # ------------------------------------------------------------------
    # Messages / telemetry
    # ------------------------------------------------------------------

    def add_message(self, value: str, kind: str = "normal") -> None:
        self.battle_log.add_entry(value, kind)

    def _telemetry(self, event: str, **fields) -> None:
        if telemetry is not None:
            telemetry.log(event, **fields)

    def _set_mode(self, mode: str) -> None:
        if mode == self.mode:
            return
        logger.debug("Mode %s -> %s", self.mode, mode)
        self._telemetry("mode_change", old=self.mode, new=mode)
        self.mode = mode

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    def create_achievement_master(self) -> AchievementMaster:
        return AchievementMaster(self.progress_snapshot)

    def reset_achievements(self) -> None:
        """Fresh, all-locked achievement set with no modifiers applied."""
        self.player.stats.modifiers = empty_modifiers()
        self.achievement_master = self.create_achievement_master()

    def progress_snapshot(self) -> ProgressSnapshot:
        stats = self.player.stats
        effective = stats.effective()
        return ProgressSnapshot(
            level=stats.level,
            attack=effective.attack,
            defense=effective.defense,
            max_hp=effective.max_hp,
            max_mp=effective.max_mp,
            enemies_killed=self.run_stats.enemies_killed,
            total_damage_taken=self.run_stats.total_damage_taken,
            total_skill_uses=self.run_stats.total_skill_uses,
            skill_ranks=tuple(self.skill_master.ranks().values()),
        )

    def check_achievements(self) -> List[Achievement]:
        """Evaluate every locked achievement; returns the new unlocks."""
        unlocked = self.achievement_master.evaluate(self.player)
        for achievement in unlocked:
            self.add_message(f"Achievement unlocked: {achievement.name}", "levelup")
            self._telemetry("achievement_unlocked", id=achievement.id)
        return unlocked

    def _on_skill_rank_up(self, skill: Skill) -> None:
        self._telemetry("skill_rank_up", id=skill.id, rank=skill.rank)

    # ------------------------------------------------------------------
    # Loadout
    # ------------------------------------------------------------------

    def toggle_equipped(self, skill_id: str) -> bool:
        """
        Equip or unequip a skill. Equipping beyond the slot limit is refused.

        Returns:
            True if the loadout changed
        """
        skill = self.skill_master.get_skill(skill_id)
        if skill is None:
            logger.warning("Cannot equip unknown skill %r", skill_id)
            return False
        if skill_id in self.loadout:
            self.loadout.remove(skill_id)
            return True
        if len(self.loadout) >= MAX_EQUIPPED_SKILLS:
            self.add_message(f"You can equip up to {MAX_EQUIPPED_SKILLS} skills.")
            return False
        self.loadout.append(skill_id)
        return True

    def use_equipped_skill(self, slot: int) -> bool:
        if self.mode != GameMode.BATTLE or self.battle is None:
            return False
        if not 0 <= slot < len(self.loadout):
            return False
        skill = self.skill_master.get_skill(self.loadout[slot])
        return skill is not None and self.battle.use_skill(skill)

    # ------------------------------------------------------------------
    # Mode transitions
    # ------------------------------------------------------------------

    def open_dungeon_select(self) -> bool:
        if self.mode != GameMode.BASE:
            logger.debug("open_dungeon_select ignored in mode %s", self.mode)
            return False
        self._set_mode(GameMode.DUNGEON_SELECT)
        return True

    def start_dungeon(self, dungeon_id: str) -> bool:
        """
        Enter a dungeon at floor 1 with full hp/mp and a fresh initial wave.
        Only valid from the base or the dungeon selection.
        """
        if self.mode not in (GameMode.BASE, GameMode.DUNGEON_SELECT):
            logger.debug("start_dungeon(%r) ignored in mode %s", dungeon_id, self.mode)
            return False

        dungeon = self.dungeon_master.resolve(dungeon_id)
        floor_index = self.floor_manager.start(dungeon)
        self.current_dungeon = dungeon

        self.player.full_restore()
        self._center_player()

        self.battle = BattleScene(
            self.player,
            self.skill_master,
            self.run_stats,
            dungeon,
            log=self.battle_log,
            arena_size=self.config.arena_size,
            rng=self.rng,
            on_progress=self.check_achievements,
            on_rank_up=self._on_skill_rank_up,
        )
        self.battle.start_floor(floor_index)
        self.result_victory = None
        self._set_mode(GameMode.BATTLE)
        self._telemetry("battle_start", dungeon=dungeon.id, floor=floor_index)
        logger.info("Started dungeon %s", dungeon.id)
        return True

    def advance_floor(self) -> bool:
        """
        Move to the next floor once the current one is cleared.
        Refused while enemies remain or on the final floor.
        """
        if self.mode != GameMode.BATTLE or self.battle is None:
            return False
        if not self.floor_manager.can_advance(not self.battle.enemies):
            logger.debug("advance_floor refused on floor %s", self.floor)
            return False

        floor_index = self.floor_manager.advance()
        self._center_player()
        self.battle.start_floor(floor_index)
        return True

    def interrupt(self) -> bool:
        """Cancel: abandon whatever is in progress and go back to base."""
        if self.mode == GameMode.BASE:
            return False
        if self.mode == GameMode.BATTLE:
            self._telemetry("battle_end", outcome="retreat", floor=self.floor)
            self.add_message("Retreated to base.")
        self._leave_to_base()
        return True

    def return_to_base(self) -> bool:
        if self.mode not in (GameMode.RESULT, GameMode.DUNGEON_SELECT):
            logger.debug("return_to_base ignored in mode %s", self.mode)
            return False
        self._leave_to_base()
        return True

    def _leave_to_base(self) -> None:
        # The dungeon reference stays until the next start
        if self.battle is not None:
            self.battle.clear()
        self.battle = None
        self._set_mode(GameMode.BASE)

    def _finish_battle(self, victory: bool) -> None:
        self.result_victory = victory
        self._set_mode(GameMode.RESULT)
        self._telemetry(
            "battle_end",
            outcome="victory" if victory else "defeat",
            dungeon=self.current_dungeon.id if self.current_dungeon else None,
            floor=self.floor,
        )
        self.check_achievements()
        self.save()

    def _center_player(self) -> None:
        arena_w, arena_h = self.config.arena_size
        self.player.move_to(arena_w / 2, arena_h / 2)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, snapshot: Optional[InputSnapshot] = None) -> None:
        """
        Advance the game by one frame. Errors inside a tick are logged and
        reported in the battle log; the next tick runs normally.
        """
        try:
            self._tick(snapshot or InputSnapshot.idle())
        except Exception as e:
            handle_critical_error(e, "game_tick", game=self)

    def _tick(self, snapshot: InputSnapshot) -> None:
        self._autosave_tick()

        if self.mode != GameMode.BATTLE or self.battle is None:
            return

        if snapshot.cancel:
            self.interrupt()
            return

        if snapshot.confirm and self.battle.status == "cleared":
            self.advance_floor()

        previous = self.battle.status
        status = self.battle.update(snapshot, self.loadout)

        if status != previous and status in ("cleared", "victory"):
            self._telemetry("floor_cleared", dungeon=self.battle.dungeon.id, floor=self.floor)
        if status in ("victory", "defeat"):
            self._finish_battle(status == "victory")

        if telemetry is not None and self.battle is not None:
            telemetry.tick(mode=self.mode, hp=self.player.hp, enemies=len(self.battle.enemies))

    def _autosave_tick(self) -> None:
        interval = self.config.autosave_interval_ticks
        if interval <= 0:
            return
        self._ticks_since_save += 1
        if self._ticks_since_save >= interval:
            self.save()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> bool:
        ok = save_game(self, self.store)
        self._ticks_since_save = 0
        self._telemetry("save", ok=ok)
        return ok

    def load(self) -> bool:
        ok = load_game(self, self.store)
        self._telemetry("load", ok=ok)
        return ok

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_snapshot(self) -> RenderSnapshot:
        player = self.player
        player_view = UnitView(
            x=player.x,
            y=player.y,
            radius=player.radius,
            hp_ratio=player.hp_ratio,
            color=player.color,
        )

        enemies: List[UnitView] = []
        popups: List[PopupView] = []
        line: Optional[AttackLineView] = None
        if self.battle is not None:
            enemies = [
                UnitView(e.x, e.y, e.radius, e.hp_ratio, e.color, e.name)
                for e in self.battle.enemies
            ]
            popups = [
                PopupView(p.x, p.y + p.offset_y, p.text, p.color, p.get_alpha())
                for p in self.battle.effects.popups
            ]
            attack_line = self.battle.effects.attack_line
            if attack_line is not None:
                line = AttackLineView(attack_line.start, attack_line.end, attack_line.color)

        return RenderSnapshot(
            mode=self.mode,
            player=player_view,
            enemies=enemies,
            popups=popups,
            attack_line=line,
            hp=player.hp,
            max_hp=player.max_hp,
            mp=player.mp,
            max_mp=player.max_mp,
            level=player.stats.level,
            floor=self.floor,
            dungeon_name=self.current_dungeon.name if self.current_dungeon else "",
            log_lines=[entry.text for entry in self.battle_log.recent(HUD_LOG_LINES)],
            victory=self.result_victory if self.mode == GameMode.RESULT else None,
        )
