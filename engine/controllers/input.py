from __future__ import annotations

import pygame

from systems.input import InputManager, InputAction, SKILL_ACTIONS


def create_default_input_manager() -> InputManager:
    """
    Create an InputManager instance with the game's default bindings.

    This keeps all key-to-action wiring in one place so we can:
    - Tweak controls easily.
    - Add per-profile / per-save custom bindings later.
    """
    mgr = InputManager()

    # ------------------------------------------------------------------
    # Movement: WASD + arrow keys
    # ------------------------------------------------------------------
    mgr.bind_key(InputAction.MOVE_UP, pygame.K_w)
    mgr.bind_key(InputAction.MOVE_UP, pygame.K_UP)

    mgr.bind_key(InputAction.MOVE_DOWN, pygame.K_s)
    mgr.bind_key(InputAction.MOVE_DOWN, pygame.K_DOWN)

    mgr.bind_key(InputAction.MOVE_LEFT, pygame.K_a)
    mgr.bind_key(InputAction.MOVE_LEFT, pygame.K_LEFT)

    mgr.bind_key(InputAction.MOVE_RIGHT, pygame.K_d)
    mgr.bind_key(InputAction.MOVE_RIGHT, pygame.K_RIGHT)

    # ------------------------------------------------------------------
    # Skills: Z / X / C / V / B -> catalog slots 1-5, gamepad buttons 0-4
    # ------------------------------------------------------------------
    skill_keys = (pygame.K_z, pygame.K_x, pygame.K_c, pygame.K_v, pygame.K_b)
    for button, (action, key) in enumerate(zip(SKILL_ACTIONS, skill_keys)):
        mgr.bind_key(action, key)
        mgr.bind_button(action, button)

    # Equipped loadout: 1 / 2 / 3
    mgr.bind_key(InputAction.EQUIPPED_1, pygame.K_1)
    mgr.bind_key(InputAction.EQUIPPED_2, pygame.K_2)
    mgr.bind_key(InputAction.EQUIPPED_3, pygame.K_3)

    # ------------------------------------------------------------------
    # Confirm (advance to the next floor) / cancel (back to base)
    # ------------------------------------------------------------------
    mgr.bind_key(InputAction.CONFIRM, pygame.K_RETURN)
    mgr.bind_key(InputAction.CONFIRM, pygame.K_KP_ENTER)

    mgr.bind_key(InputAction.CANCEL, pygame.K_ESCAPE)

    return mgr
