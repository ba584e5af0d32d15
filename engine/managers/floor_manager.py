"""
Floor management system.

Tracks the active dungeon's floor and decides when the run may move on.
"""

from __future__ import annotations

import logging
from typing import Optional

from systems.dungeons import Dungeon

logger = logging.getLogger("dungeon_rpg.floors")


class FloorManager:
    """
    Manages progress through the floors of one dungeon run.

    Responsibilities:
    - Reset the floor counter when a dungeon (re)starts
    - Know whether the current floor is the final one
    - Gate explicit floor advancement
    """

    def __init__(self) -> None:
        self.dungeon: Optional[Dungeon] = None

    @property
    def floor(self) -> int:
        """Current floor number (0 when no dungeon has been started)."""
        return self.dungeon.current_floor if self.dungeon is not None else 0

    @property
    def is_final(self) -> bool:
        return self.dungeon is not None and self.dungeon.is_final_floor()

    def start(self, dungeon: Dungeon) -> int:
        """
        Begin a run of `dungeon` at floor 1.

        Returns:
            The starting floor number
        """
        dungeon.reset()
        self.dungeon = dungeon
        return dungeon.current_floor

    def can_advance(self, roster_empty: bool) -> bool:
        """A floor can only be left once it is cleared and more floors remain."""
        return self.dungeon is not None and roster_empty and not self.is_final

    def advance(self) -> int:
        """
        Move to the next floor.

        Callers must check can_advance() first; advancing past the final
        floor is refused and the floor stays unchanged.
        """
        if self.dungeon is None or self.is_final:
            logger.debug("Refusing to advance past floor %s", self.floor)
            return self.floor
        self.dungeon.current_floor += 1
        return self.dungeon.current_floor
