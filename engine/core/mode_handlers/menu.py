"""
Menu mode handlers: the base between runs, dungeon selection and results.
"""

import pygame

from settings import COLOR_BG
from .base import BaseModeHandler

# Keys 1..5 pick the n-th entry of a menu list
_NUMBER_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5)


def _number_index(event: pygame.event.Event) -> int:
    key = getattr(event, "key", None)
    return _NUMBER_KEYS.index(key) if key in _NUMBER_KEYS else -1


class BaseMenuHandler(BaseModeHandler):
    """Base: shows the hero, lets the player edit the loadout and leave."""

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLOR_BG)
        game = self.game
        player = game.player
        stats = player.stats

        lines = [
            f"Lv.{stats.level}  EXP {stats.exp}/{stats.exp_to_next}",
            f"HP {int(player.hp)}/{player.max_hp}  MP {int(player.mp)}/{player.max_mp}"
            f"  ATK {stats.attack}  DEF {stats.defense}",
            "",
            "Skills (1-5 to equip / unequip):",
        ]
        for index, skill in enumerate(game.skill_master.all_skills(), start=1):
            marker = "*" if skill.id in game.loadout else " "
            lines.append(
                f" {marker}{index}. {skill.display_name}  rank {skill.rank}"
                f"  uses {skill.usage_count}  MP {skill.cost}  power {skill.damage}"
            )
        achievements = game.achievement_master
        lines += [
            "",
            f"Achievements: {achievements.unlocked_count()} / {len(achievements.all_achievements())}",
        ]
        lines += [f"  {a.display_name}: {a.display_description}" for a in achievements.all_achievements()]
        lines += ["", "Enter: choose a dungeon"]
        self.draw_lines(surface, lines)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.KEYDOWN:
            return False
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            return self.game.open_dungeon_select()

        index = _number_index(event)
        skills = self.game.skill_master.all_skills()
        if 0 <= index < len(skills):
            self.game.toggle_equipped(skills[index].id)
            return True
        return False


class DungeonSelectHandler(BaseModeHandler):
    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLOR_BG)
        lines = ["Choose a dungeon:", ""]
        for index, dungeon in enumerate(self.game.dungeon_master.all_dungeons(), start=1):
            lines.append(f"{index}. {dungeon.name} ({dungeon.floors} floors)")
            lines.append(f"   {dungeon.definition.description}")
        lines += ["", "Esc: back"]
        self.draw_lines(surface, lines)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.KEYDOWN:
            return False
        if event.key == pygame.K_ESCAPE:
            return self.game.return_to_base()

        index = _number_index(event)
        dungeons = self.game.dungeon_master.all_dungeons()
        if 0 <= index < len(dungeons):
            return self.game.start_dungeon(dungeons[index].id)
        return False


class ResultHandler(BaseModeHandler):
    def draw(self, surface: pygame.Surface) -> None:
        self.renderer.draw(surface, self.game.render_snapshot())
        if self.game.result_victory:
            name = self.game.current_dungeon.name if self.game.current_dungeon else ""
            lines = ["Dungeon cleared!", f"You conquered {name}!"]
        else:
            lines = ["Game over", "Your experience has been kept."]
        lines += ["", "Enter: return to base"]
        self.draw_lines(surface, lines, y=surface.get_height() // 3)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            return self.game.return_to_base()
        return False
