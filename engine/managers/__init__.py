from .floor_manager import FloorManager
from .floor_spawning import build_initial_wave, build_periodic_spawn

__all__ = [
    "FloorManager",
    "build_initial_wave",
    "build_periodic_spawn",
]
