"""Messages emitted by the simulation step for the UI layer."""

from dataclasses import dataclass
from enum import Enum


class DeathCause(Enum):
    DEATH_ZONE = "death_zone"
    OBSTACLE = "obstacle"


@dataclass(frozen=True)
class TreasureCollected:
    x: float
    y: float
    score: int


@dataclass(frozen=True)
class LifeLost:
    cause: DeathCause
    lives: int


@dataclass(frozen=True)
class LevelUp:
    level: int
    score: int
    treasure_count: int
    obstacle_count: int
    moving_obstacle_count: int
    death_zone_height: int

    @property
    def message(self):
        lines = [
            f"Level {self.level}! Difficulty increased!",
            f"- More obstacles ({self.obstacle_count})",
            "- Larger obstacles",
            f"- More treasures ({self.treasure_count})",
            "- Bigger death zone",
        ]
        if self.moving_obstacle_count:
            lines.append(f"- Moving obstacles ({self.moving_obstacle_count})")
        return "\n".join(lines)


@dataclass(frozen=True)
class GameOver:
    score: int
    level: int

    @property
    def message(self):
        return f"Game Over! Final Score: {self.score}"
