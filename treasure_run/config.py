"""Game configuration."""

from dataclasses import dataclass
from enum import Enum


class Variant(Enum):
    CLASSIC = "classic"
    PLATFORMER = "platformer"


# Smallest canvas the placement generator can lay a level out on.
MIN_CANVAS_WIDTH = 320
MIN_CANVAS_HEIGHT = 240


@dataclass(frozen=True)
class GameConfig:
    """Static settings for one game.

    The canvas must be at least MIN_CANVAS_WIDTH x MIN_CANVAS_HEIGHT; below
    that the spawn safe zones and the death zone leave no legal room for
    placement. ``validate_implementation`` on the environment checks it.
    """

    width: int = 800
    height: int = 600
    variant: Variant = Variant.CLASSIC
    fps: int = 60
    starting_lives: int = 3
    max_steps: int = 10000

    @property
    def is_platformer(self) -> bool:
        return self.variant is Variant.PLATFORMER

    @property
    def spawn_y(self) -> float:
        return self.height / 2
