"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import os
import random

import pytest
import pygame
from typing import Generator

# Headless SDL: no window or audio device needed
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(scope="session", autouse=True)
def pygame_init() -> Generator[None, None, None]:
    """
    Initialize pygame for the test session.
    This runs once before all tests and cleans up after.
    """
    pygame.init()
    # Use a small headless surface (no display needed)
    pygame.display.set_mode((800, 600), pygame.HIDDEN)
    yield
    pygame.quit()


@pytest.fixture
def sample_screen() -> pygame.Surface:
    """
    Create a sample pygame surface for tests that need a screen.
    """
    return pygame.Surface((800, 600))


@pytest.fixture
def player():
    """
    Create a fresh level 1 Player in the middle of the arena.
    """
    from world.entities import Player
    return Player()


@pytest.fixture
def skill_master():
    """
    Create a SkillMaster holding the full skill catalog.
    """
    from systems.skills import SkillMaster
    return SkillMaster()


@pytest.fixture
def run_stats():
    from systems.run_stats import RunStats
    return RunStats()


@pytest.fixture
def game_config(tmp_path):
    """
    GameConfig pointing at a temporary save directory, autosave disabled.
    """
    from engine.config import GameConfig
    config = GameConfig()
    config.save_dir = str(tmp_path / "saves")
    config.autosave_seconds = 0
    return config


@pytest.fixture
def memory_store():
    from engine.utils.save_system import MemorySaveStore
    return MemorySaveStore()


@pytest.fixture
def game(game_config, memory_store):
    """
    Create a Game with an in-memory save store and a seeded RNG.
    """
    from engine.core.game import Game
    return Game(store=memory_store, config=game_config, rng=random.Random(1234))


@pytest.fixture
def floor_manager():
    """
    Create a FloorManager for testing.
    """
    from engine.managers.floor_manager import FloorManager
    return FloorManager()
