"""
Battle mode handler: real-time combat scene.
"""

import pygame

from .base import BaseModeHandler


class BattleModeHandler(BaseModeHandler):
    """Draws the battle; movement, skills and cancel arrive via InputSnapshot."""

    def draw(self, surface: pygame.Surface) -> None:
        self.renderer.draw(surface, self.game.render_snapshot())
        if self.game.battle is not None and self.game.battle.status == "cleared":
            self.draw_lines(surface, ["Floor cleared! Press Enter to go deeper."], y=surface.get_height() // 2)
