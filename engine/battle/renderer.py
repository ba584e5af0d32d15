"""
Battle renderer module.

Handles all drawing for the battle screen. Reads a RenderSnapshot and never
touches live game state, so it can be driven by any mode.
"""

from typing import Optional

import pygame

from settings import (
    COLOR_BG,
    COLOR_TEXT,
    COLOR_HP_BAR,
    COLOR_HP_BAR_BG,
    HUD_FONT_SIZE,
    DAMAGE_FONT_SCALE,
)
from engine.battle.types import RenderSnapshot, UnitView, PopupView, AttackLineView


class BattleRenderer:
    """
    Handles all rendering for the battle screen.

    Stateless apart from its fonts; call draw() once per frame.
    """

    def __init__(self, font: Optional[pygame.font.Font] = None):
        """
        Initialize the renderer.

        Args:
            font: Font for HUD text; the default pygame font is used if omitted
        """
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = font or pygame.font.Font(None, HUD_FONT_SIZE)
        self.damage_font = pygame.font.Font(None, int(HUD_FONT_SIZE * DAMAGE_FONT_SCALE))

    # ------------ Units ------------

    def draw_hp_bar(self, surface: pygame.Surface, unit: UnitView, color=COLOR_HP_BAR) -> None:
        """Thin bar just above the unit's circle."""
        bar_width = unit.radius * 2
        bar_height = 5
        bar_x = int(unit.x - unit.radius)
        bar_y = int(unit.y - unit.radius - bar_height - 4)

        bg_rect = pygame.Rect(bar_x, bar_y, bar_width, bar_height)
        pygame.draw.rect(surface, COLOR_HP_BAR_BG, bg_rect)

        ratio = max(0.0, min(1.0, unit.hp_ratio))
        if ratio <= 0.0:
            return
        fg_rect = pygame.Rect(bar_x, bar_y, max(1, int(bar_width * ratio)), bar_height)
        pygame.draw.rect(surface, color, fg_rect)

    def draw_unit(self, surface: pygame.Surface, unit: UnitView) -> None:
        center = (int(unit.x), int(unit.y))
        pygame.draw.circle(surface, unit.color, center, unit.radius)
        pygame.draw.circle(surface, (0, 0, 0), center, unit.radius, width=2)
        self.draw_hp_bar(surface, unit)

        if unit.name:
            label = self.font.render(unit.name, True, COLOR_TEXT)
            surface.blit(label, (center[0] - label.get_width() // 2, center[1] + unit.radius + 2))

    # ------------ Effects ------------

    def draw_attack_line(self, surface: pygame.Surface, line: Optional[AttackLineView]) -> None:
        if line is None:
            return
        pygame.draw.line(surface, line.color, line.start, line.end, 3)

    def draw_popup(self, surface: pygame.Surface, popup: PopupView) -> None:
        # Shadow first for readability on busy backgrounds
        shadow = self.damage_font.render(popup.text, True, (0, 0, 0))
        text = self.damage_font.render(popup.text, True, popup.color)
        shadow.set_alpha(popup.alpha)
        text.set_alpha(popup.alpha)

        x = int(popup.x) - text.get_width() // 2
        y = int(popup.y)
        surface.blit(shadow, (x + 2, y + 2))
        surface.blit(text, (x, y))

    # ------------ HUD ------------

    def draw_hud(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        lines = [
            f"Lv.{snapshot.level}  HP {int(snapshot.hp)}/{snapshot.max_hp}  MP {int(snapshot.mp)}/{snapshot.max_mp}",
        ]
        if snapshot.dungeon_name:
            lines.append(f"{snapshot.dungeon_name}  Floor {snapshot.floor}")
        if snapshot.victory is not None:
            lines.append("Dungeon cleared!" if snapshot.victory else "Game over")

        y = 8
        for line in lines:
            surf = self.font.render(line, True, COLOR_TEXT)
            surface.blit(surf, (8, y))
            y += surf.get_height() + 2

        # Most recent battle log lines, bottom-left
        y = surface.get_height() - 8
        for text in reversed(snapshot.log_lines):
            surf = self.font.render(text, True, COLOR_TEXT)
            y -= surf.get_height() + 2
            surface.blit(surf, (8, y))

    def draw(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        surface.fill(COLOR_BG)

        self.draw_attack_line(surface, snapshot.attack_line)
        for enemy in snapshot.enemies:
            self.draw_unit(surface, enemy)
        self.draw_unit(surface, snapshot.player)
        for popup in snapshot.popups:
            self.draw_popup(surface, popup)

        self.draw_hud(surface, snapshot)
