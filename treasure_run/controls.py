"""Logical input directions and the physical keys bound to them."""

from dataclasses import dataclass
from enum import Enum

import pygame


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Several physical keys may drive the same direction.
KEY_BINDINGS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}

JUMP_KEYS = (pygame.K_SPACE,)

# MultiDiscrete movement index -> direction, as in the action space of the env
MOVEMENT_ACTIONS = {
    1: Direction.UP,
    2: Direction.DOWN,
    3: Direction.LEFT,
    4: Direction.RIGHT,
}


@dataclass(frozen=True)
class Controls:
    """Immutable snapshot of the input for one tick.

    In the platformer variant UP and ``jump`` both request a jump.
    """

    directions: frozenset = frozenset()
    jump: bool = False

    @classmethod
    def of(cls, *directions, jump=False):
        return cls(frozenset(directions), jump)

    @classmethod
    def from_keys(cls, pressed, bindings=None):
        """Build a snapshot from ``pygame.key.get_pressed()`` or any mapping
        indexable by key code."""
        bindings = KEY_BINDINGS if bindings is None else bindings
        directions = frozenset(d for key, d in bindings.items() if pressed[key])
        jump = any(pressed[key] for key in JUMP_KEYS)
        return cls(directions, jump)

    @classmethod
    def from_action(cls, action):
        movement, jump = int(action[0]), int(action[1]) == 1
        direction = MOVEMENT_ACTIONS.get(movement)
        directions = frozenset() if direction is None else frozenset([direction])
        return cls(directions, jump)

    def __contains__(self, direction):
        return direction in self.directions

    @property
    def wants_jump(self):
        return self.jump or Direction.UP in self.directions


NO_INPUT = Controls()
