"""
Base interface for game mode handlers.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pygame

from settings import COLOR_TEXT

if TYPE_CHECKING:
    from engine.battle.renderer import BattleRenderer
    from engine.core.game import Game
    from systems.input import InputSnapshot


class BaseModeHandler(ABC):
    """
    Abstract base for mode-specific update, draw, and event handling.

    Each handler receives a reference to the Game plus the shared renderer
    and implements the pygame-facing side of one mode. Simulation always
    goes through Game.tick().
    """

    def __init__(self, game: "Game", renderer: "BattleRenderer") -> None:
        self.game = game
        self.renderer = renderer

    def update(self, snapshot: "InputSnapshot") -> None:
        """Advance the simulation by one frame."""
        self.game.tick(snapshot)

    @abstractmethod
    def draw(self, surface: pygame.Surface) -> None:
        """Draw the mode-specific view. Does not include flip."""
        ...

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle mode-specific input.

        Returns:
            True if the event was consumed (no further processing needed),
            False otherwise.
        """
        return False

    def draw_lines(self, surface: pygame.Surface, lines, x: int = 40, y: int = 40) -> None:
        """Simple left-aligned text block used by the menu screens."""
        font = self.renderer.font
        for line in lines:
            surf = font.render(line, True, COLOR_TEXT)
            surface.blit(surf, (x, y))
            y += surf.get_height() + 6
