"""
The per-tick simulation step and the level transitions around it.
"""

import logging

from treasure_run.entities import PlayerStatus
from treasure_run.events import DeathCause, GameOver, LevelUp, LifeLost, TreasureCollected
from treasure_run.placement import generate_level
from treasure_run.progression import LEVEL_UP_BONUS
from treasure_run.systems import (
    check_treasure,
    obstacle_hits,
    update_obstacle,
    update_particles,
    update_player,
)


logger = logging.getLogger(__name__)


def step(world, controls):
    """Advance ``world`` by one tick and return the events it produced.

    A GameOver event is always the last one; nothing else runs in that tick.
    At most one life is lost per tick.
    """
    events = []

    # --- 1/2. Player movement and the death zone ---
    status = update_player(world, controls)
    life_lost = False
    if status is PlayerStatus.DEATH:
        life_lost = True
        if _lose_life(world, DeathCause.DEATH_ZONE, events):
            return events

    # --- 3. Particles ---
    update_particles(world)

    # --- 4. Moving obstacles ---
    for obstacle in world.obstacles:
        if obstacle.moving:
            update_obstacle(world, obstacle)

    # --- 5. Treasures ---
    for treasure in world.treasures:
        if check_treasure(world, treasure):
            events.append(TreasureCollected(treasure.x, treasure.y, world.score))

    # --- 6. Obstacles ---
    if not life_lost:
        for obstacle in world.obstacles:
            if obstacle_hits(world.player, obstacle):
                if _lose_life(world, DeathCause.OBSTACLE, events):
                    return events
                break

    # --- 7. Level complete ---
    if level_complete(world):
        events.append(next_level(world))

    return events


def _lose_life(world, cause, events):
    """Take a life and respawn the player. Returns True on game over."""
    world.lives = max(0, world.lives - 1)
    events.append(LifeLost(cause, world.lives))
    if world.lives <= 0:
        logger.info("game over at level %d with score %d", world.level, world.score)
        events.append(GameOver(world.score, world.level))
        return True
    world.reset_player()
    return False


def level_complete(world):
    # An empty set never counts as cleared, or every tick would level up.
    return bool(world.treasures) and all(t.collected for t in world.treasures)


def next_level(world):
    world.level += 1
    world.score += LEVEL_UP_BONUS
    generate_level(world)
    world.reset_player()

    params = world.params
    logger.info("level %d reached, score %d", world.level, world.score)
    return LevelUp(
        level=world.level,
        score=world.score,
        treasure_count=len(world.treasures),
        obstacle_count=len(world.obstacles),
        moving_obstacle_count=params.moving_obstacle_count,
        death_zone_height=params.death_zone_height,
    )


def reset_world(world):
    """Back to level 1 with full lives and a freshly generated layout."""
    world.level = 1
    world.score = 0
    world.lives = world.config.starting_lives
    world.particles = []
    generate_level(world)
    world.reset_player()
