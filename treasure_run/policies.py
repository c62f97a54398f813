from treasure_run.geometry import center

NOOP, UP, DOWN, LEFT, RIGHT = range(5)


def policy(env):
    # Strategy: head for the closest uncollected treasure by Manhattan distance.
    # In the classic game close the larger gap first; in the platformer walk
    # toward it and jump whenever it sits above the player and we stand on ground.
    world = env.game.world
    player = world.player
    remaining = [t for t in world.treasures if not t.collected]
    if not remaining:
        return [NOOP, 0, 0]

    px, py = center(player)
    target = min(remaining, key=lambda t: abs(center(t)[0] - px) + abs(center(t)[1] - py))
    tx, ty = center(target)
    dx, dy = tx - px, ty - py

    if world.config.is_platformer:
        jump = 1 if dy < -player.height and player.on_ground else 0
        if abs(dx) < player.width / 2:
            return [NOOP, jump, 0]
        return [RIGHT if dx > 0 else LEFT, jump, 0]

    if abs(dx) >= abs(dy) and dx != 0:
        return [RIGHT if dx > 0 else LEFT, 0, 0]
    if dy > 0:
        return [DOWN, 0, 0]
    elif dy < 0:
        return [UP, 0, 0]
    return [NOOP, 0, 0]  # Already on top of it
