"""
Game entity records.

Entities only hold state; the per-frame rules that mutate them live in
``systems``.
"""

from dataclasses import dataclass
from enum import Enum


class PlayerStatus(Enum):
    ALIVE = "alive"
    DEATH = "death"


@dataclass
class Player:
    """The avatar. Never destroyed, only moved back to its spawn pose."""
    x: float
    y: float
    width: float = 30.0
    height: float = 30.0
    speed: float = 5.0
    vx: float = 0.0  # platformer only
    vy: float = 0.0  # platformer only
    on_ground: bool = False  # platformer only

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def right(self):
        return self.x + self.width


@dataclass
class Treasure:
    x: float
    y: float
    width: float = 20.0
    height: float = 20.0
    collected: bool = False


@dataclass
class Obstacle:
    """A static or moving hazard.

    Moving obstacles wander from their origin and turn back once they stray
    further than ``move_radius``.
    """
    x: float
    y: float
    width: float
    height: float
    moving: bool = False
    vx: float = 0.0
    vy: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    move_radius: float = 50.0


@dataclass
class Platform:
    x: float
    y: float
    width: float = 100.0
    height: float = 14.0


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int = 30
    max_life: int = 30

    @property
    def alpha(self):
        return max(0.0, self.life / self.max_life)
