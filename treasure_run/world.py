"""The World: every piece of mutable game state in one place."""

from dataclasses import dataclass, field

import numpy as np
from gymnasium.utils import seeding

from treasure_run.config import GameConfig
from treasure_run.entities import Player
from treasure_run.progression import level_params


CLASSIC_PLAYER_SIZE = 30
PLATFORMER_PLAYER_SIZE = 24
SPAWN_X = 50


@dataclass
class World:
    config: GameConfig
    rng: np.random.Generator
    player: Player
    level: int = 1
    score: int = 0
    lives: int = 3
    treasures: list = field(default_factory=list)
    obstacles: list = field(default_factory=list)
    platforms: list = field(default_factory=list)
    particles: list = field(default_factory=list)

    @property
    def width(self):
        return self.config.width

    @property
    def height(self):
        return self.config.height

    @property
    def params(self):
        return level_params(self.level, self.config.variant)

    @property
    def death_zone_height(self):
        return self.params.death_zone_height

    @property
    def ground_y(self):
        """Top edge of the death zone."""
        return self.height - self.death_zone_height

    def spawn_position(self):
        if self.config.is_platformer:
            # Standing on the spawn ledge, whose top sits at the vertical center.
            return SPAWN_X, self.config.spawn_y - self.player.height
        return SPAWN_X, self.config.spawn_y

    def reset_player(self):
        """Put the player back on its spawn pose with no residual motion."""
        p = self.player
        p.x, p.y = self.spawn_position()
        p.vx = 0.0
        p.vy = 0.0
        p.on_ground = self.config.is_platformer
        p.speed = self.params.player_speed


def new_world(config=None, seed=None):
    """Create an empty level-1 world; ``placement.generate_level`` fills it."""
    config = config or GameConfig()
    rng, _ = seeding.np_random(seed)
    size = PLATFORMER_PLAYER_SIZE if config.is_platformer else CLASSIC_PLAYER_SIZE
    world = World(
        config=config,
        rng=rng,
        player=Player(0.0, 0.0, width=size, height=size),
        lives=config.starting_lives,
    )
    world.reset_player()
    return world
