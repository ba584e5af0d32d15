from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Set, Tuple, Union

import pygame

from settings import GAMEPAD_DEAD_ZONE, SKILL_SLOT_COUNT, MAX_EQUIPPED_SKILLS


ActionType = Union["InputAction", str]


class InputAction(str, Enum):
    """
    Logical inputs. Keys and gamepad buttons map onto these, never the
    other way round, so rebinding only touches engine/controllers/input.py.
    """

    # Movement
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"

    # Catalog skill slots (one per skill, in catalog order)
    SKILL_1 = "skill_1"
    SKILL_2 = "skill_2"
    SKILL_3 = "skill_3"
    SKILL_4 = "skill_4"
    SKILL_5 = "skill_5"

    # Equipped loadout slots
    EQUIPPED_1 = "equipped_1"
    EQUIPPED_2 = "equipped_2"
    EQUIPPED_3 = "equipped_3"

    # Generic confirm / cancel
    CONFIRM = "confirm"
    CANCEL = "cancel"


SKILL_ACTIONS = (
    InputAction.SKILL_1,
    InputAction.SKILL_2,
    InputAction.SKILL_3,
    InputAction.SKILL_4,
    InputAction.SKILL_5,
)[:SKILL_SLOT_COUNT]

EQUIPPED_ACTIONS = (
    InputAction.EQUIPPED_1,
    InputAction.EQUIPPED_2,
    InputAction.EQUIPPED_3,
)[:MAX_EQUIPPED_SKILLS]


def apply_dead_zone(value: float, dead_zone: float = GAMEPAD_DEAD_ZONE) -> float:
    """Zero out small stick deflections on one axis."""
    return value if abs(value) > dead_zone else 0.0


@dataclass(frozen=True)
class InputSnapshot:
    """
    Everything the simulation reads from input devices for one tick.

    move_x / move_y are the raw summed keyboard + stick contributions;
    the game renormalizes them before moving the player.
    """
    move_x: float = 0.0
    move_y: float = 0.0
    skill_slots: Tuple[bool, ...] = (False,) * SKILL_SLOT_COUNT
    equipped_slots: Tuple[bool, ...] = (False,) * MAX_EQUIPPED_SKILLS
    cancel: bool = False
    confirm: bool = False

    @classmethod
    def idle(cls) -> "InputSnapshot":
        return cls()


class InputManager:
    """
    Keyboard and gamepad state, read in terms of logical actions.

    Keys are tracked from KEYDOWN/KEYUP events (held set plus a per-frame
    "just pressed" set); the first connected gamepad is polled directly.
    snapshot() folds both into the InputSnapshot one tick consumes.
    """

    def __init__(self) -> None:
        self._bindings: Dict[InputAction, Set[int]] = {}
        self._button_bindings: Dict[InputAction, int] = {}

        self._keys_down: Set[int] = set()
        self._keys_just_pressed: Set[int] = set()

        self.joystick: Optional["pygame.joystick.JoystickType"] = None

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    @staticmethod
    def _as_action(action: ActionType) -> InputAction:
        # Unknown strings raise ValueError instead of creating a dead binding
        return action if isinstance(action, InputAction) else InputAction(action)

    def bind_key(self, action: ActionType, key: int) -> None:
        self._bindings.setdefault(self._as_action(action), set()).add(int(key))

    def bind_button(self, action: ActionType, button: int) -> None:
        """One gamepad button per action; rebinding replaces it."""
        self._button_bindings[self._as_action(action)] = int(button)

    def get_bindings(self, action: ActionType) -> Set[int]:
        """Copy of the keys bound to `action`."""
        return set(self._bindings.get(self._as_action(action), ()))

    # ------------------------------------------------------------------
    # Frame / events
    # ------------------------------------------------------------------

    def begin_frame(self) -> None:
        """Forget last frame's presses. Call before pumping events."""
        self._keys_just_pressed.clear()

    def process_event(self, event: pygame.event.Event) -> None:
        """Observe one pygame event. Events are never consumed here."""
        if event.type == pygame.KEYDOWN:
            key = int(getattr(event, "key", -1))
            if key >= 0 and key not in self._keys_down:
                self._keys_down.add(key)
                self._keys_just_pressed.add(key)

        elif event.type == pygame.KEYUP:
            self._keys_down.discard(int(getattr(event, "key", -1)))

        elif event.type == pygame.JOYDEVICEADDED and self.joystick is None:
            self.joystick = pygame.joystick.Joystick(event.device_index)

        elif event.type == pygame.JOYDEVICEREMOVED and self.joystick is not None:
            if getattr(event, "instance_id", None) == self.joystick.get_instance_id():
                self.joystick = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _button_pressed(self, action: InputAction) -> bool:
        button = self._button_bindings.get(action)
        if self.joystick is None or button is None:
            return False
        if button >= self.joystick.get_numbuttons():
            return False
        return bool(self.joystick.get_button(button))

    def is_action_pressed(self, action: ActionType) -> bool:
        """Held right now, on the keyboard or the gamepad."""
        act = self._as_action(action)
        held = self._bindings.get(act, set()) & self._keys_down
        return bool(held) or self._button_pressed(act)

    def was_action_just_pressed(self, action: ActionType) -> bool:
        """Keyboard press that happened during the current frame."""
        act = self._as_action(action)
        return bool(self._bindings.get(act, set()) & self._keys_just_pressed)

    def gamepad_direction(self) -> Tuple[float, float]:
        """Left stick direction with the dead-zone applied per axis."""
        if self.joystick is None or self.joystick.get_numaxes() < 2:
            return 0.0, 0.0
        return (
            apply_dead_zone(self.joystick.get_axis(0)),
            apply_dead_zone(self.joystick.get_axis(1)),
        )

    def snapshot(self) -> InputSnapshot:
        """Collect the per-tick input state the simulation consumes."""
        dx = 0.0
        dy = 0.0
        if self.is_action_pressed(InputAction.MOVE_UP):
            dy -= 1
        if self.is_action_pressed(InputAction.MOVE_DOWN):
            dy += 1
        if self.is_action_pressed(InputAction.MOVE_LEFT):
            dx -= 1
        if self.is_action_pressed(InputAction.MOVE_RIGHT):
            dx += 1

        stick_x, stick_y = self.gamepad_direction()

        return InputSnapshot(
            move_x=dx + stick_x,
            move_y=dy + stick_y,
            skill_slots=tuple(self.is_action_pressed(a) for a in SKILL_ACTIONS),
            equipped_slots=tuple(self.is_action_pressed(a) for a in EQUIPPED_ACTIONS),
            cancel=self.is_action_pressed(InputAction.CANCEL),
            confirm=self.was_action_just_pressed(InputAction.CONFIRM),
        )
