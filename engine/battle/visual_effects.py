"""
Visual effect state for the battle screen.

Tracks timed damage popups and the single transient attack line. Lifetimes
are counted in simulation ticks; nothing here draws, the renderer reads it.
"""

from typing import List, Optional, Tuple

from settings import (
    COLOR_DAMAGE,
    POPUP_LIFE,
    POPUP_RISE_PER_TICK,
    ATTACK_LINE_LIFE,
    ELEMENT_LINE_COLORS,
    DEFAULT_LINE_COLOR,
)

Color = Tuple[int, int, int]


class DamagePopup:
    """Floating text ("-18", "+30") that rises and fades out."""

    def __init__(
        self,
        x: float,
        y: float,
        text: str,
        color: Color = COLOR_DAMAGE,
        life: int = POPUP_LIFE,
    ):
        self.x = x
        self.y = y
        self.text = text
        self.color = color
        self.life = life
        self.max_life = life
        self.offset_y = 0.0

    def update(self) -> bool:
        """Age by one tick. Returns False if the popup should be removed."""
        self.life -= 1
        self.offset_y -= POPUP_RISE_PER_TICK
        return self.life > 0

    def get_alpha(self) -> int:
        ratio = self.life / self.max_life if self.max_life > 0 else 0.0
        return int(255 * max(0.0, min(1.0, ratio)))


class AttackLine:
    """Line from the caster to the struck enemy, shown for a few ticks."""

    def __init__(
        self,
        start: Tuple[float, float],
        end: Tuple[float, float],
        color: Color,
        life: int = ATTACK_LINE_LIFE,
    ):
        self.start = start
        self.end = end
        self.color = color
        self.life = life

    def update(self) -> bool:
        self.life -= 1
        return self.life > 0


def line_color_for_element(element: str) -> Color:
    return ELEMENT_LINE_COLORS.get(element, DEFAULT_LINE_COLOR)


class BattleEffects:
    """Container for every live effect in the current battle."""

    def __init__(self) -> None:
        self.popups: List[DamagePopup] = []
        self.attack_line: Optional[AttackLine] = None

    def add_popup(self, x: float, y: float, text: str, color: Color = COLOR_DAMAGE) -> DamagePopup:
        popup = DamagePopup(x, y, text, color)
        self.popups.append(popup)
        return popup

    def set_attack_line(self, start: Tuple[float, float], end: Tuple[float, float], element: str) -> None:
        # Only one line at a time; a new strike replaces the old one
        self.attack_line = AttackLine(start, end, line_color_for_element(element))

    def update(self) -> None:
        self.popups = [p for p in self.popups if p.update()]
        if self.attack_line is not None and not self.attack_line.update():
            self.attack_line = None

    def clear(self) -> None:
        self.popups = []
        self.attack_line = None
