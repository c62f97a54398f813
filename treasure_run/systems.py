"""
Per-frame update rules.

Each function takes the World (or the records it owns) and mutates it in
place. Drawing is handled separately in ``render``.
"""

from treasure_run.controls import Direction
from treasure_run.entities import Particle, PlayerStatus
from treasure_run.geometry import distance, random_range, rects_overlap


# Platformer physics
ACCELERATION = 0.8
FRICTION = 0.85
GRAVITY = 0.3
JUMP_POWER = -9.0
MAX_FALL_SPEED = 10.0
GROUND_TOLERANCE = 0.5

# Scoring and effects
TREASURE_SCORE = 100
PARTICLES_PER_BURST = 8
PARTICLE_SPEED = 2.0
PARTICLE_LIFE = 30


def update_player(world, controls):
    if world.config.is_platformer:
        return update_platformer_player(world, controls)
    return update_classic_player(world, controls)


def update_classic_player(world, controls):
    """Move by ``speed`` along every held direction, clamped to the canvas."""
    p = world.player
    if Direction.UP in controls:
        p.y = max(0.0, p.y - p.speed)
    if Direction.DOWN in controls:
        p.y = min(world.height - p.height, p.y + p.speed)
    if Direction.LEFT in controls:
        p.x = max(0.0, p.x - p.speed)
    if Direction.RIGHT in controls:
        p.x = min(world.width - p.width, p.x + p.speed)

    if p.bottom >= world.ground_y:
        return PlayerStatus.DEATH
    return PlayerStatus.ALIVE


def update_platformer_player(world, controls):
    p = world.player

    # --- Horizontal input, speed cap and friction ---
    if Direction.LEFT in controls:
        p.vx -= ACCELERATION
    if Direction.RIGHT in controls:
        p.vx += ACCELERATION
    p.vx = max(-p.speed, min(p.speed, p.vx))
    p.vx *= FRICTION

    # --- Jump and gravity ---
    if controls.wants_jump and p.on_ground:
        p.vy = JUMP_POWER
        p.on_ground = False
    if not p.on_ground:
        p.vy = min(p.vy + GRAVITY, MAX_FALL_SPEED)

    p.x += p.vx
    p.y += p.vy

    # --- Canvas bounds ---
    if p.x < 0:
        p.x = 0.0
        p.vx = 0.0
    elif p.right > world.width:
        p.x = world.width - p.width
        p.vx = 0.0
    if p.y < 0:
        p.y = 0.0
        if p.vy < 0:
            p.vy = 0.0

    resolve_platform_collisions(p, world.platforms)

    # Platforms only save the player by holding it above the ground line.
    if p.bottom >= world.ground_y:
        return PlayerStatus.DEATH
    return PlayerStatus.ALIVE


def jump_height(power=JUMP_POWER, gravity=GRAVITY):
    """Pixels a standing jump rises, integrated tick by tick like the player."""
    rise, vy = 0.0, power + gravity
    while vy < 0:
        rise -= vy
        vy += gravity
    return rise


def resolve_platform_collisions(player, platforms):
    """Push the player out of every platform it overlaps and set on_ground."""
    p = player
    landed = False
    for plat in platforms:
        if not rects_overlap(p, plat):
            continue
        if p.vy >= 0 and p.y < plat.y:
            p.y = plat.y - p.height
            p.vy = 0.0
            landed = True
        elif p.vy < 0 and p.bottom > plat.y + plat.height:
            p.y = plat.y + plat.height
            p.vy = 0.0
        elif p.vx > 0 and p.x < plat.x:
            p.x = plat.x - p.width
            p.vx = 0.0
        elif p.vx < 0 and p.right > plat.x + plat.width:
            p.x = plat.x + plat.width
            p.vx = 0.0
    p.on_ground = landed or is_supported(p, platforms)


def is_supported(player, platforms):
    """True when the player rests on top of a platform."""
    for plat in platforms:
        if (
            abs(player.bottom - plat.y) <= GROUND_TOLERANCE
            and player.x < plat.x + plat.width
            and player.right > plat.x
        ):
            return True
    return False


def update_obstacle(world, obstacle):
    """Advance a moving obstacle; static obstacles are left alone."""
    o = obstacle
    if not o.moving:
        return
    o.x += o.vx
    o.y += o.vy

    if o.x <= 0 or o.x + o.width >= world.width:
        o.vx = -o.vx
        o.x = max(0.0, min(world.width - o.width, o.x))

    floor = world.ground_y
    if o.y <= 0 or o.y + o.height >= floor:
        o.vy = -o.vy
        o.y = max(0.0, min(floor - o.height, o.y))

    # Soft leash: it may overshoot the radius for a tick before turning back.
    if distance(o.x, o.y, o.origin_x, o.origin_y) > o.move_radius:
        o.vx = -o.vx
        o.vy = -o.vy


def obstacle_hits(player, obstacle):
    return rects_overlap(player, obstacle)


def check_treasure(world, treasure):
    """Collect ``treasure`` if the player touches it for the first time."""
    t = treasure
    if t.collected:
        return False
    if not rects_overlap(world.player, t):
        return False
    t.collected = True
    world.score += TREASURE_SCORE
    spawn_particles(world, t.x + t.width / 2, t.y + t.height / 2)
    return True


def spawn_particles(world, x, y, count=PARTICLES_PER_BURST):
    for _ in range(count):
        world.particles.append(Particle(
            x=x,
            y=y,
            vx=random_range(world.rng, -PARTICLE_SPEED, PARTICLE_SPEED),
            vy=random_range(world.rng, -PARTICLE_SPEED, PARTICLE_SPEED),
            life=PARTICLE_LIFE,
            max_life=PARTICLE_LIFE,
        ))


def update_particles(world):
    for particle in world.particles:
        particle.x += particle.vx
        particle.y += particle.vy
        particle.life -= 1
    world.particles = [p for p in world.particles if p.life > 0]
