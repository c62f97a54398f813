from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from treasure_run.config import GameConfig, Variant
from treasure_run.world import World, new_world


@pytest.fixture()
def classic_world() -> World:
    """A level-1 classic world with no entities placed."""
    return new_world(GameConfig(), seed=7)


@pytest.fixture()
def platformer_world() -> World:
    """A level-1 platformer world with only the spawn ledge."""
    from treasure_run.placement import spawn_ledge

    config = GameConfig(variant=Variant.PLATFORMER)
    world = new_world(config, seed=7)
    world.platforms = [spawn_ledge(config)]
    world.reset_player()
    return world
