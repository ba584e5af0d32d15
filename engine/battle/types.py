"""
Battle type definitions.

Contains the status alias and the read-only view dataclasses the renderer
draws from.
"""

from dataclasses import dataclass, field
from typing import Literal, List, Optional, Tuple

# Type aliases
BattleStatus = Literal["ongoing", "cleared", "victory", "defeat"]
Color = Tuple[int, int, int]
Point = Tuple[float, float]

TERMINAL_STATUSES = ("victory", "defeat")


@dataclass(frozen=True)
class UnitView:
    """Drawable state of the player or one enemy."""
    x: float
    y: float
    radius: int
    hp_ratio: float
    color: Color
    name: str = ""


@dataclass(frozen=True)
class PopupView:
    x: float
    y: float
    text: str
    color: Color
    alpha: int


@dataclass(frozen=True)
class AttackLineView:
    start: Point
    end: Point
    color: Color


@dataclass(frozen=True)
class RenderSnapshot:
    """
    Everything the renderer needs for one frame.

    Built by Game.render_snapshot(); holds copies, never live entities.
    """
    mode: str
    player: UnitView
    enemies: List[UnitView] = field(default_factory=list)
    popups: List[PopupView] = field(default_factory=list)
    attack_line: Optional[AttackLineView] = None
    hp: int = 0
    max_hp: int = 0
    mp: float = 0.0
    max_mp: int = 0
    level: int = 1
    floor: int = 0
    dungeon_name: str = ""
    log_lines: List[str] = field(default_factory=list)
    victory: Optional[bool] = None
