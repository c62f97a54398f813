"""
Level layout by rejection sampling.

Candidates are drawn uniformly inside the legal area (everything above the
death zone) and rejected while they collide with what is already placed or
with a spawn safe zone. When the attempt budget runs out the last candidate
is accepted anyway, except for platformer treasures, which are dropped.
Callers must cope with a layout that is looser or smaller than asked for.

Platformer levels are drawn near what is already placed instead: each tier
within a jump of another, each treasure in the band a jump can reach above
a platform.
"""

import logging

from treasure_run.entities import Obstacle, Platform, Treasure
from treasure_run.geometry import overlaps, padded, random_range
from treasure_run.systems import jump_height


logger = logging.getLogger(__name__)

OBSTACLE_ATTEMPTS = 50
PLATFORM_ATTEMPTS = 50
TREASURE_ATTEMPTS = 100

TREASURE_SIZE = 20
STATIC_OBSTACLE_PADDING = 40
MOVING_OBSTACLE_PADDING = 60

PLATFORM_WIDTH = 100
PLATFORM_HEIGHT = 14
PLATFORM_VERTICAL_GAP = 40
PLATFORM_MIN_CLEARANCE = 40
PLATFORM_MIN_TOP = 40
SPAWN_LEDGE_X = 30
TREASURE_LIFT = 4

# Rise needed on top of a tier gap to clear the edge and land.
JUMP_CLEARANCE = 30
JUMP_REACH = int(jump_height()) - JUMP_CLEARANCE
HORIZONTAL_REACH = 80


def obstacle_safe_zone(config):
    """Area around the player spawn that obstacles keep out of."""
    return (0.0, config.spawn_y - 50, 100.0, 100.0)


def treasure_safe_zone(config):
    return (0.0, config.spawn_y - 60, 120.0, 120.0)


def _hits_any(x, y, w, h, rects):
    return any(overlaps(x, y, w, h, *r) for r in rects)


def _as_rect(entity):
    return (entity.x, entity.y, entity.width, entity.height)


def _grow(rect, padding):
    x, y, w, h = rect
    return (x - padding, y - padding, w + 2 * padding, h + 2 * padding)


def sample_in(rng, bounds, blocked, attempts):
    """Draw top-left corners inside ``bounds()`` until ``blocked(x, y)`` is False.

    ``bounds`` is called once per attempt and returns
    ``(x_min, y_min, x_max, y_max)``. Returns ``(x, y, accepted)``;
    ``accepted`` is False when the budget ran out and (x, y) is simply the
    last candidate tried.
    """
    x = y = 0.0
    for _ in range(attempts):
        x_min, y_min, x_max, y_max = bounds()
        x = random_range(rng, x_min, x_max)
        y = random_range(rng, y_min, y_max)
        if not blocked(x, y):
            return x, y, True
    return x, y, False


def sample_position(rng, width, height, area_width, area_height, blocked, attempts, top=0):
    """Draw positions for a ``width`` x ``height`` box anywhere in the area."""
    box = (0, top, area_width - width, area_height - height)
    return sample_in(rng, lambda: box, blocked, attempts)


def generate_obstacles(world, params=None, keep_clear=()):
    """Place the level's obstacles.

    ``keep_clear`` rectangles get the same padding treasures ask of
    obstacles, wider for moving ones.
    """
    params = params or world.params
    config = world.config
    w, h = params.obstacle_width, params.obstacle_height
    area_height = config.height - params.death_zone_height
    avoid = [obstacle_safe_zone(config)] + [_as_rect(p) for p in world.platforms]

    obstacles = []
    for i in range(params.obstacle_count):
        moving = i < params.moving_obstacle_count
        pad = MOVING_OBSTACLE_PADDING if moving else STATIC_OBSTACLE_PADDING
        placed = [_as_rect(o) for o in obstacles]
        kept = [_grow(r, pad) for r in keep_clear]

        def blocked(x, y):
            return (
                _hits_any(x, y, w, h, placed)
                or _hits_any(x, y, w, h, avoid)
                or _hits_any(x, y, w, h, kept)
            )

        x, y, accepted = sample_position(
            world.rng, w, h, config.width, area_height, blocked, OBSTACLE_ATTEMPTS
        )
        if not accepted:
            logger.debug("obstacle %d placed after exhausting %d attempts", i, OBSTACLE_ATTEMPTS)

        obstacle = Obstacle(x, y, w, h, moving=moving)
        if moving:
            obstacle.vx = random_range(world.rng, -1.0, 1.0)
            obstacle.vy = random_range(world.rng, -1.0, 1.0)
            obstacle.origin_x, obstacle.origin_y = x, y
        obstacles.append(obstacle)
    return obstacles


def treasure_blocked(x, y, obstacles, treasures, safe_zone=None, size=TREASURE_SIZE):
    """Whether a treasure at (x, y) is too close to a hazard or another treasure.

    Obstacles are padded so every treasure can be picked up without brushing
    against one; moving obstacles get a wider berth.
    """
    for o in obstacles:
        pad = MOVING_OBSTACLE_PADDING if o.moving else STATIC_OBSTACLE_PADDING
        if overlaps(x, y, size, size, *padded(o, pad)):
            return True
    if _hits_any(x, y, size, size, [_as_rect(t) for t in treasures]):
        return True
    return safe_zone is not None and overlaps(x, y, size, size, *safe_zone)


def generate_treasures(world, obstacles, params=None):
    params = params or world.params
    area_height = world.height - params.death_zone_height
    safe_zone = treasure_safe_zone(world.config)

    treasures = []
    while len(treasures) < params.treasure_count:
        x, y, accepted = sample_position(
            world.rng, TREASURE_SIZE, TREASURE_SIZE, world.width, area_height,
            lambda cx, cy: treasure_blocked(cx, cy, obstacles, treasures, safe_zone),
            TREASURE_ATTEMPTS,
        )
        if not accepted:
            logger.debug("treasure placed after exhausting %d attempts", TREASURE_ATTEMPTS)
        treasures.append(Treasure(x, y))
    return treasures


def spawn_ledge(config):
    return Platform(SPAWN_LEDGE_X, config.spawn_y, PLATFORM_WIDTH, PLATFORM_HEIGHT)


def platform_window(anchor, area_width, y_min, y_max):
    """Top-left corners a new platform may take and still be reached from ``anchor``.

    Returns ``(x_min, y_min, x_max, y_max)``. Tops stay within ``JUMP_REACH``
    of the anchor's top and the edge gap within ``HORIZONTAL_REACH``, so the
    player can jump up to the new tier or drop down onto it, and back.
    """
    return (
        max(0.0, anchor.x - PLATFORM_WIDTH - HORIZONTAL_REACH),
        max(y_min, anchor.y - JUMP_REACH),
        min(area_width - PLATFORM_WIDTH, anchor.x + anchor.width + HORIZONTAL_REACH),
        min(y_max, anchor.y + JUMP_REACH),
    )


def generate_platforms(world, params=None):
    """Spawn ledge first, then each new tier within reach of one already placed."""
    params = params or world.params
    config = world.config
    ledge = spawn_ledge(config)
    platforms = [ledge]
    # Tops stay clear of the ground line and leave headroom under the canvas top.
    y_max = config.height - params.death_zone_height - PLATFORM_MIN_CLEARANCE

    def bounds():
        anchor = platforms[int(world.rng.integers(len(platforms)))]
        return platform_window(anchor, config.width, PLATFORM_MIN_TOP, y_max)

    for i in range(1, params.platform_count):
        placed = [padded_vertically(p) for p in platforms]

        def blocked(x, y):
            return _hits_any(x, y, PLATFORM_WIDTH, PLATFORM_HEIGHT, placed)

        x, y, accepted = sample_in(world.rng, bounds, blocked, PLATFORM_ATTEMPTS)
        if not accepted:
            logger.debug("platform %d placed after exhausting %d attempts", i, PLATFORM_ATTEMPTS)
        platforms.append(Platform(x, y, PLATFORM_WIDTH, PLATFORM_HEIGHT))
    return platforms


def padded_vertically(platform, gap=PLATFORM_VERTICAL_GAP):
    return (platform.x, platform.y - gap, platform.width, platform.height + 2 * gap)


def treasure_slots(platforms, target):
    """Treasures centred on top of each non-spawn platform, at most ``target``."""
    return [
        Treasure(plat.x + (plat.width - TREASURE_SIZE) / 2, plat.y - TREASURE_SIZE - TREASURE_LIFT)
        for plat in platforms[1:target + 1]
    ]


def treasure_window(plat, area_width):
    """Spots above ``plat`` that a player standing on it can touch with a jump."""
    return (
        plat.x,
        max(0.0, plat.y - JUMP_REACH),
        min(area_width - TREASURE_SIZE, plat.x + plat.width - TREASURE_SIZE),
        plat.y - TREASURE_SIZE - TREASURE_LIFT,
    )


def generate_platform_treasures(world, platforms, obstacles, params=None):
    """One treasure on top of each platform, then sampling for the rest.

    Slots that ended up too close to an obstacle are dropped. The rest are
    sampled in the band above a random platform and skipped when their budget
    runs out, so the result may hold fewer than ``params.treasure_count``.
    """
    params = params or world.params
    target = params.treasure_count
    safe_zone = treasure_safe_zone(world.config)

    treasures = []
    for slot in treasure_slots(platforms, target):
        if treasure_blocked(slot.x, slot.y, obstacles, treasures):
            logger.debug("treasure slot at (%.0f, %.0f) dropped next to an obstacle", slot.x, slot.y)
            continue
        treasures.append(slot)

    plats = [_as_rect(p) for p in platforms]

    def bounds():
        plat = platforms[int(world.rng.integers(len(platforms)))]
        return treasure_window(plat, world.width)

    def blocked(x, y):
        return (
            treasure_blocked(x, y, obstacles, treasures, safe_zone)
            or _hits_any(x, y, TREASURE_SIZE, TREASURE_SIZE, plats)
        )

    while len(treasures) < target:
        x, y, accepted = sample_in(world.rng, bounds, blocked, TREASURE_ATTEMPTS)
        if not accepted:
            logger.debug("treasure skipped after %d attempts, %d of %d placed",
                         TREASURE_ATTEMPTS, len(treasures), target)
            target -= 1
            continue
        treasures.append(Treasure(x, y))
    return treasures


def generate_level(world):
    """Build fresh platforms, obstacles and treasures for ``world.level``."""
    params = world.params
    if world.config.is_platformer:
        platforms = generate_platforms(world, params)
        world.platforms = platforms
        slots = [_as_rect(t) for t in treasure_slots(platforms, params.treasure_count)]
        obstacles = generate_obstacles(world, params, keep_clear=slots)
        treasures = generate_platform_treasures(world, platforms, obstacles, params)
    else:
        world.platforms = []
        obstacles = generate_obstacles(world, params)
        treasures = generate_treasures(world, obstacles, params)
    world.obstacles = obstacles
    world.treasures = treasures
    logger.debug(
        "level %d laid out: %d treasures, %d obstacles, %d platforms",
        world.level, len(treasures), len(obstacles), len(world.platforms),
    )
