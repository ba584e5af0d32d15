# systems/dungeons.py
"""
Dungeon catalog and runtime dungeon state.

A dungeon is a fixed number of floors. Each floor starts with a tiered wave
(see systems.enemies.selection) and periodically receives reinforcements
drawn from the dungeon's spawn table.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging

logger = logging.getLogger("dungeon_rpg.dungeons")


@dataclass(frozen=True)
class DungeonDef:
    id: str
    name: str
    description: str
    floors: int
    spawn_table: Tuple[str, ...] = ("slime",)
    spawn_interval: int = 180  # ticks between periodic spawns


_DUNGEONS: Dict[str, DungeonDef] = {}

DEFAULT_DUNGEON_ID = "cave_1"


def register(dungeon_def: DungeonDef) -> DungeonDef:
    _DUNGEONS[dungeon_def.id] = dungeon_def
    return dungeon_def


def get(dungeon_id: str) -> DungeonDef:
    return _DUNGEONS[dungeon_id]


def all_dungeon_defs() -> List[DungeonDef]:
    return list(_DUNGEONS.values())


register(DungeonDef(
    id="cave_1",
    name="Cave of Beginnings",
    description="A cave where enemies never stop coming.",
    floors=3,
    spawn_table=("slime", "goblin"),
    spawn_interval=180,  # every 3 seconds
))
register(DungeonDef(
    id="forest_1",
    name="Haunted Forest",
    description="A forest for intermediate adventurers.",
    floors=5,
    spawn_table=("goblin", "orc", "skeleton"),
    spawn_interval=120,
))


@dataclass
class Dungeon:
    """Runtime dungeon: catalog identity plus the floor reached in this run."""
    definition: DungeonDef
    current_floor: int = 1

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def floors(self) -> int:
        return self.definition.floors

    @property
    def spawn_table(self) -> Tuple[str, ...]:
        return self.definition.spawn_table

    @property
    def spawn_interval(self) -> int:
        return self.definition.spawn_interval

    def reset(self) -> None:
        self.current_floor = 1

    def is_final_floor(self) -> bool:
        return self.current_floor >= self.definition.floors


class DungeonMaster:
    """Owns one runtime Dungeon per catalog entry."""

    def __init__(self, definitions: Optional[List[DungeonDef]] = None) -> None:
        defs = definitions if definitions is not None else all_dungeon_defs()
        self.dungeons: List[Dungeon] = [Dungeon(d) for d in defs]

    def get_dungeon(self, dungeon_id: str) -> Optional[Dungeon]:
        for dungeon in self.dungeons:
            if dungeon.id == dungeon_id:
                return dungeon
        return None

    def resolve(self, dungeon_id: str) -> Dungeon:
        """
        Look up a dungeon, falling back to the default entry (or the first
        one) for unknown ids.
        """
        dungeon = self.get_dungeon(dungeon_id)
        if dungeon is not None:
            return dungeon
        logger.warning("Unknown dungeon %r, falling back to %r", dungeon_id, DEFAULT_DUNGEON_ID)
        return self.get_dungeon(DEFAULT_DUNGEON_ID) or self.dungeons[0]

    def all_dungeons(self) -> List[Dungeon]:
        return self.dungeons
