"""Difficulty formulas. Everything here is a pure function of the level."""

from dataclasses import dataclass

from treasure_run.config import Variant


LEVEL_UP_BONUS = 500
MOVING_OBSTACLES_FROM_LEVEL = 3


@dataclass(frozen=True)
class LevelParams:
    level: int
    death_zone_height: int
    treasure_count: int
    obstacle_count: int
    obstacle_width: int
    obstacle_height: int
    moving_obstacle_count: int
    platform_count: int
    player_speed: float


def death_zone_height(level):
    return 10 + 3 * level


def moving_obstacle_count(level, obstacle_count):
    if level < MOVING_OBSTACLES_FROM_LEVEL:
        return 0
    return obstacle_count // 2


def level_params(level, variant=Variant.CLASSIC):
    """Entity counts, sizes and speeds for ``level`` of ``variant``."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")

    if variant is Variant.PLATFORMER:
        obstacles = min(1 + level, 8)
        size = min(30 + 2 * level, 50)
        return LevelParams(
            level=level,
            death_zone_height=death_zone_height(level),
            treasure_count=min(3 + level, 10),
            obstacle_count=obstacles,
            obstacle_width=size,
            obstacle_height=size,
            moving_obstacle_count=moving_obstacle_count(level, obstacles),
            platform_count=min(5 + level, 12),
            player_speed=min(8.0, 6.0 + 0.2 * (level - 1)),
        )

    obstacles = min(2 + level, 15)
    return LevelParams(
        level=level,
        death_zone_height=death_zone_height(level),
        treasure_count=min(3 + 2 * level, 25),
        obstacle_count=obstacles,
        obstacle_width=min(40 + 8 * level, 160),
        obstacle_height=min(40 + 4 * level, 100),
        moving_obstacle_count=moving_obstacle_count(level, obstacles),
        platform_count=0,
        player_speed=5.0 if level == 1 else min(8.0, 5.0 + 0.3 * level),
    )
