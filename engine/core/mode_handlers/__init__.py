"""
Mode handlers for the main game loop.

Each game mode (base, dungeon select, battle, result) has a handler that
encapsulates update(), draw(), and handle_event() logic. The main loop
delegates to the handler of the current Game.mode.
"""

from typing import Dict, TYPE_CHECKING

from engine.core.game import GameMode
from .base import BaseModeHandler
from .battle import BattleModeHandler
from .menu import BaseMenuHandler, DungeonSelectHandler, ResultHandler

if TYPE_CHECKING:
    from engine.battle.renderer import BattleRenderer
    from engine.core.game import Game


def create_mode_handlers(game: "Game", renderer: "BattleRenderer") -> Dict[str, BaseModeHandler]:
    return {
        GameMode.BASE: BaseMenuHandler(game, renderer),
        GameMode.DUNGEON_SELECT: DungeonSelectHandler(game, renderer),
        GameMode.BATTLE: BattleModeHandler(game, renderer),
        GameMode.RESULT: ResultHandler(game, renderer),
    }


__all__ = [
    "BaseModeHandler",
    "BaseMenuHandler",
    "DungeonSelectHandler",
    "BattleModeHandler",
    "ResultHandler",
    "create_mode_handlers",
]
