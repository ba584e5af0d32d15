import sys
from pathlib import Path

import pygame

from settings import TITLE
from engine.config import load_config
from engine.core.game import Game
from engine.core.mode_handlers import create_mode_handlers
from engine.battle.renderer import BattleRenderer
from engine.controllers.input import create_default_input_manager
from systems.input import InputSnapshot
try:
    from telemetry.logger import telemetry
except Exception:  # telemetry must never break the game
    telemetry = None


def main() -> None:
    config = load_config()

    pygame.init()
    pygame.display.set_caption(TITLE)

    screen = pygame.display.set_mode(config.arena_size)
    clock = pygame.time.Clock()

    if telemetry is not None and config.telemetry_enabled:
        telemetry.enabled = True
        telemetry.init(Path(config.save_dir) / "telemetry.jsonl")

    game = Game(config=config)
    game.load()

    input_manager = create_default_input_manager()
    handlers = create_mode_handlers(game, BattleRenderer())

    # --- Main loop ---
    running = True
    while running:
        clock.tick(config.fps)

        # Reset per-frame input state before processing events.
        input_manager.begin_frame()

        mode_before = game.mode
        for event in pygame.event.get():
            # Let the InputManager observe every event first so it can
            # maintain key state.
            input_manager.process_event(event)

            if event.type == pygame.QUIT:
                running = False
                continue

            handlers[game.mode].handle_event(event)

        # Keys that just switched modes must not also act in the new mode
        snapshot = input_manager.snapshot() if game.mode == mode_before else InputSnapshot.idle()
        handlers[game.mode].update(snapshot)
        handlers[game.mode].draw(screen)
        pygame.display.flip()

    game.save()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
