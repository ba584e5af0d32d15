"""
Smoke tests for the battle renderer and the mode handlers that drive it.
"""

import pygame
import pytest

from engine.battle.renderer import BattleRenderer
from engine.core.game import GameMode
from engine.core.mode_handlers import create_mode_handlers
from systems.input import InputSnapshot


@pytest.fixture
def renderer():
    return BattleRenderer()


@pytest.fixture
def handlers(game, renderer):
    return create_mode_handlers(game, renderer)


def _keydown(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


class TestBattleRenderer:
    def test_draw_base_snapshot(self, renderer, game, sample_screen):
        renderer.draw(sample_screen, game.render_snapshot())

    def test_draw_battle_with_effects(self, renderer, game, sample_screen):
        game.start_dungeon("cave_1")
        scene = game.battle
        scene.use_skill(game.skill_master.get_skill("fire_ball"))
        assert scene.effects.attack_line is not None

        renderer.draw(sample_screen, game.render_snapshot())

    def test_damage_font_is_larger(self, renderer):
        assert renderer.damage_font.get_height() > renderer.font.get_height()


class TestModeHandlers:
    def test_one_handler_per_mode(self, handlers):
        assert set(handlers) == {
            GameMode.BASE,
            GameMode.DUNGEON_SELECT,
            GameMode.BATTLE,
            GameMode.RESULT,
        }

    def test_menu_flow(self, game, handlers, sample_screen):
        assert handlers[game.mode].handle_event(_keydown(pygame.K_2)) is True
        assert game.loadout == ["ice_arrow"]

        handlers[game.mode].handle_event(_keydown(pygame.K_RETURN))
        assert game.mode == GameMode.DUNGEON_SELECT
        handlers[game.mode].draw(sample_screen)

        handlers[game.mode].handle_event(_keydown(pygame.K_2))
        assert game.mode == GameMode.BATTLE
        assert game.current_dungeon.id == "forest_1"

    def test_dungeon_select_escape(self, game, handlers):
        game.open_dungeon_select()
        assert handlers[game.mode].handle_event(_keydown(pygame.K_ESCAPE)) is True
        assert game.mode == GameMode.BASE

    def test_every_mode_draws(self, game, handlers, sample_screen):
        handlers[GameMode.BASE].draw(sample_screen)

        game.start_dungeon("cave_1")
        game.battle.enemies = []
        game.battle.status = "cleared"
        handlers[GameMode.BATTLE].update(InputSnapshot.idle())
        handlers[GameMode.BATTLE].draw(sample_screen)

        game.battle.status = "defeat"
        game.tick()
        assert game.mode == GameMode.RESULT
        handlers[GameMode.RESULT].draw(sample_screen)

        handlers[GameMode.RESULT].handle_event(_keydown(pygame.K_RETURN))
        assert game.mode == GameMode.BASE
