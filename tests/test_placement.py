from __future__ import annotations

import itertools

import numpy as np
import pytest

from treasure_run.config import GameConfig, Variant
from treasure_run.entities import Obstacle, Platform
from treasure_run.geometry import overlaps, padded, rects_overlap
from treasure_run.placement import (
    HORIZONTAL_REACH,
    JUMP_REACH,
    MOVING_OBSTACLE_PADDING,
    PLATFORM_MIN_CLEARANCE,
    PLATFORM_MIN_TOP,
    STATIC_OBSTACLE_PADDING,
    generate_level,
    generate_obstacles,
    generate_platform_treasures,
    generate_treasures,
    obstacle_safe_zone,
    padded_vertically,
    sample_position,
    treasure_safe_zone,
)
from treasure_run.systems import jump_height
from treasure_run.world import new_world


def _rect(entity):
    return (entity.x, entity.y, entity.width, entity.height)


def test_classic_level_one_layout(classic_world) -> None:
    generate_level(classic_world)

    assert len(classic_world.obstacles) == 3
    assert len(classic_world.treasures) == 5
    assert classic_world.platforms == []
    assert not any(o.moving for o in classic_world.obstacles)

    for entity in classic_world.obstacles + classic_world.treasures:
        assert 0 <= entity.x <= classic_world.width - entity.width
        assert 0 <= entity.y <= classic_world.ground_y - entity.height


def test_obstacles_never_overlap_each_other_or_the_spawn_zone() -> None:
    for seed in range(20):
        world = new_world(GameConfig(), seed=seed)
        obstacles = generate_obstacles(world)
        for a, b in itertools.combinations(obstacles, 2):
            assert not rects_overlap(a, b)
        zone = obstacle_safe_zone(world.config)
        assert not any(overlaps(*_rect(o), *zone) for o in obstacles)


def test_treasures_keep_clear_of_padded_obstacles() -> None:
    for seed in range(20):
        world = new_world(GameConfig(), seed=seed)
        generate_level(world)
        zone = treasure_safe_zone(world.config)
        for t in world.treasures:
            assert not overlaps(*_rect(t), *zone)
            for o in world.obstacles:
                assert not overlaps(*_rect(t), *padded(o, STATIC_OBSTACLE_PADDING))
        for a, b in itertools.combinations(world.treasures, 2):
            assert not rects_overlap(a, b)


def test_moving_obstacles_from_level_three(classic_world) -> None:
    classic_world.level = 3
    generate_level(classic_world)

    moving = [o for o in classic_world.obstacles if o.moving]
    assert len(moving) == 2
    for o in moving:
        assert (o.origin_x, o.origin_y) == (o.x, o.y)
        assert -1.0 <= o.vx < 1.0 and -1.0 <= o.vy < 1.0
        assert o.move_radius == 50


def test_sample_position_reports_exhaustion() -> None:
    rng = np.random.default_rng(0)

    x, y, accepted = sample_position(rng, 10, 10, 100, 100, lambda cx, cy: True, 5)
    assert not accepted
    assert 0 <= x <= 90 and 0 <= y <= 90

    x, y, accepted = sample_position(rng, 10, 10, 100, 100, lambda cx, cy: False, 5)
    assert accepted


def test_classic_treasures_are_kept_when_budget_runs_out(classic_world) -> None:
    wall = [Obstacle(0, 0, classic_world.width, classic_world.height)]

    treasures = generate_treasures(classic_world, wall)

    assert len(treasures) == 5


def test_platformer_treasures_are_skipped_when_budget_runs_out(platformer_world) -> None:
    wall = [Obstacle(0, 0, platformer_world.width, platformer_world.height)]

    assert generate_platform_treasures(platformer_world, platformer_world.platforms, wall) == []


def test_platformer_level_layout() -> None:
    for seed in range(10):
        config = GameConfig(variant=Variant.PLATFORMER)
        world = new_world(config, seed=seed)
        generate_level(world)

        ledge = world.platforms[0]
        assert (ledge.x, ledge.y) == (30, config.spawn_y)
        assert len(world.platforms) == 6
        for plat in world.platforms:
            assert PLATFORM_MIN_TOP <= plat.y <= world.ground_y - PLATFORM_MIN_CLEARANCE
        for a, b in itertools.combinations(world.platforms, 2):
            assert not overlaps(*_rect(a), *padded_vertically(b))

        for o in world.obstacles:
            assert not any(rects_overlap(o, p) for p in world.platforms)

        # Seeded treasures sit centred on top of a non-spawn platform.
        assert 0 < len(world.treasures) <= 4
        seeded = [
            t for t in world.treasures
            if any(t.x == p.x + (p.width - t.width) / 2 and t.y + t.height < p.y
                   for p in world.platforms[1:])
        ]
        assert seeded


def _edge_gap(a, b):
    return max(a.x - (b.x + b.width), b.x - (a.x + a.width), 0.0)


def _reachable_platforms(platforms):
    """Platforms reachable from the spawn ledge by jumping up or dropping down."""
    seen = {0}
    frontier = [0]
    while frontier:
        a = platforms[frontier.pop()]
        for j, b in enumerate(platforms):
            if j in seen:
                continue
            if abs(a.y - b.y) <= JUMP_REACH and _edge_gap(a, b) <= HORIZONTAL_REACH:
                seen.add(j)
                frontier.append(j)
    return seen


def _within_jump_above(t, plat):
    return (
        plat.x <= t.x <= plat.x + plat.width - t.width
        and plat.y - JUMP_REACH <= t.y
        and t.y + t.height < plat.y
    )


def test_jump_reach_is_below_the_jump_height() -> None:
    assert 0 < JUMP_REACH < jump_height()


@pytest.mark.parametrize("level", [1, 3, 5, 8])
def test_platformer_levels_can_be_cleared(level: int) -> None:
    config = GameConfig(variant=Variant.PLATFORMER)
    for seed in range(50):
        world = new_world(config, seed=seed)
        world.level = level
        generate_level(world)

        assert _reachable_platforms(world.platforms) == set(range(len(world.platforms)))
        for t in world.treasures:
            assert any(_within_jump_above(t, p) for p in world.platforms)
            assert t.y + t.height < world.ground_y


@pytest.mark.parametrize("level", [1, 3, 5, 8])
def test_platformer_treasures_keep_clear_of_padded_obstacles(level: int) -> None:
    config = GameConfig(variant=Variant.PLATFORMER)
    for seed in range(50):
        world = new_world(config, seed=seed)
        world.level = level
        generate_level(world)

        for t in world.treasures:
            for o in world.obstacles:
                pad = MOVING_OBSTACLE_PADDING if o.moving else STATIC_OBSTACLE_PADDING
                assert not overlaps(*_rect(t), *padded(o, pad))


def test_obstacles_keep_clear_of_reserved_slots(platformer_world) -> None:
    slot = (400.0, 200.0, 20.0, 20.0)
    platformer_world.level = 8

    for _ in range(5):
        for o in generate_obstacles(platformer_world, keep_clear=[slot]):
            pad = MOVING_OBSTACLE_PADDING if o.moving else STATIC_OBSTACLE_PADDING
            assert not overlaps(*_rect(o), 400 - pad, 200 - pad, 20 + 2 * pad, 20 + 2 * pad)


def test_seeded_slots_next_to_an_obstacle_are_dropped(platformer_world) -> None:
    plat = Platform(400, 300, 100, 14)
    platforms = platformer_world.platforms + [plat]
    blocker = Obstacle(440, 250, 30, 30)

    treasures = generate_platform_treasures(platformer_world, platforms, [blocker])

    for t in treasures:
        assert not overlaps(*_rect(t), *padded(blocker, STATIC_OBSTACLE_PADDING))


def test_layout_is_reproducible_from_the_seed() -> None:
    layouts = []
    for _ in range(2):
        world = new_world(GameConfig(), seed=42)
        generate_level(world)
        layouts.append([_rect(e) for e in world.obstacles + world.treasures])

    assert layouts[0] == layouts[1]
