from __future__ import annotations

import numpy as np

from treasure_run.controls import NO_INPUT, Controls, Direction
from treasure_run.entities import Obstacle, Particle, Treasure
from treasure_run.events import DeathCause, GameOver, LevelUp, LifeLost, TreasureCollected
from treasure_run.simulation import level_complete, next_level, reset_world, step


def _park_in_death_zone(world) -> None:
    world.player.y = world.ground_y - world.player.height


def test_death_zone_costs_a_life_and_respawns(classic_world) -> None:
    _park_in_death_zone(classic_world)

    events = step(classic_world, NO_INPUT)

    assert events == [LifeLost(DeathCause.DEATH_ZONE, 2)]
    assert classic_world.lives == 2
    assert (classic_world.player.x, classic_world.player.y) == classic_world.spawn_position()


def test_obstacle_hit_costs_a_life_and_respawns(classic_world) -> None:
    player = classic_world.player
    player.x, player.y = 400.0, 100.0
    classic_world.obstacles = [Obstacle(410, 110, 40, 40)]

    events = step(classic_world, NO_INPUT)

    assert events == [LifeLost(DeathCause.OBSTACLE, 2)]
    assert (player.x, player.y) == classic_world.spawn_position()


def test_at_most_one_life_lost_per_tick(classic_world) -> None:
    spawn_x, spawn_y = classic_world.spawn_position()
    # Two obstacles sitting on the spawn point: the respawned player lands on them.
    classic_world.obstacles = [
        Obstacle(spawn_x, spawn_y, 40, 40),
        Obstacle(spawn_x + 5, spawn_y + 5, 40, 40),
    ]
    _park_in_death_zone(classic_world)

    step(classic_world, NO_INPUT)
    assert classic_world.lives == 2

    # Next tick the obstacles count, but only once.
    step(classic_world, NO_INPUT)
    assert classic_world.lives == 1


def test_last_life_ends_the_game_and_skips_the_rest(classic_world) -> None:
    classic_world.lives = 1
    classic_world.particles = [Particle(10, 10, 1.0, 1.0, life=5)]
    classic_world.treasures = [Treasure(0, 0, collected=True)]
    _park_in_death_zone(classic_world)

    events = step(classic_world, NO_INPUT)

    assert isinstance(events[-1], GameOver)
    assert events[-1].score == 0
    assert classic_world.lives == 0
    # Particles were not aged and no level-up happened.
    assert classic_world.particles[0].life == 5
    assert classic_world.level == 1


def test_collecting_the_last_treasure_levels_up_once(classic_world) -> None:
    player = classic_world.player
    classic_world.treasures = [Treasure(player.x + 5, player.y + 5)]

    events = step(classic_world, NO_INPUT)

    assert isinstance(events[0], TreasureCollected)
    level_ups = [e for e in events if isinstance(e, LevelUp)]
    assert len(level_ups) == 1
    assert classic_world.level == 2
    assert classic_world.score == 100 + 500
    assert len(classic_world.treasures) == 7
    assert not any(t.collected for t in classic_world.treasures)

    # The fresh set keeps clear of the spawn point, so nothing re-triggers.
    assert not any(isinstance(e, LevelUp) for e in step(classic_world, NO_INPUT))
    assert classic_world.level == 2


def test_partial_collection_does_not_level_up(classic_world) -> None:
    player = classic_world.player
    classic_world.treasures = [Treasure(player.x + 5, player.y + 5), Treasure(700, 50)]

    step(classic_world, NO_INPUT)

    assert classic_world.level == 1
    assert not level_complete(classic_world)


def test_empty_treasure_set_is_not_a_clear(classic_world) -> None:
    classic_world.treasures = []

    assert not level_complete(classic_world)


def test_next_level_regenerates_and_resets_the_player(platformer_world) -> None:
    player = platformer_world.player
    player.x, player.vx, player.vy, player.on_ground = 300.0, 4.0, -3.0, False

    event = next_level(platformer_world)

    assert event.level == 2
    assert "Level 2!" in event.message
    assert (player.x, player.y) == platformer_world.spawn_position()
    assert (player.vx, player.vy) == (0.0, 0.0)
    assert player.on_ground
    assert len(platformer_world.platforms) == 7
    assert platformer_world.treasures


def test_level_three_event_mentions_moving_obstacles(classic_world) -> None:
    classic_world.level = 2

    event = next_level(classic_world)

    assert event.level == 3
    assert event.death_zone_height == 19
    assert event.moving_obstacle_count == 2
    assert "Moving obstacles (2)" in event.message
    assert sum(o.moving for o in classic_world.obstacles) == 2


def test_particles_age_during_the_step(classic_world) -> None:
    classic_world.particles = [Particle(10, 10, 1.0, 1.0, life=1), Particle(10, 10, 1.0, 1.0, life=3)]

    step(classic_world, NO_INPUT)

    assert [p.life for p in classic_world.particles] == [2]


def test_moving_obstacles_advance_during_the_step(classic_world) -> None:
    mover = Obstacle(400, 100, 40, 40, moving=True, vx=1.0, vy=0.5, origin_x=400, origin_y=100)
    still = Obstacle(600, 100, 40, 40)
    classic_world.obstacles = [mover, still]

    step(classic_world, NO_INPUT)

    assert (mover.x, mover.y) == (401.0, 100.5)
    assert (still.x, still.y) == (600, 100)


def test_reset_world_restores_level_one(classic_world) -> None:
    classic_world.level, classic_world.score, classic_world.lives = 4, 2300, 1
    classic_world.particles = [Particle(0, 0, 0, 0)]

    reset_world(classic_world)

    assert (classic_world.score, classic_world.lives, classic_world.level) == (0, 3, 1)
    assert classic_world.particles == []
    assert len(classic_world.treasures) == 5
    assert len(classic_world.obstacles) == 3
    assert classic_world.player.speed == 5.0


def test_score_never_decreases_and_lives_stay_non_negative(classic_world) -> None:
    reset_world(classic_world)
    rng = np.random.default_rng(5)
    directions = list(Direction)
    last_score = 0
    for _ in range(2000):
        held = [d for d in directions if rng.random() < 0.3]
        events = step(classic_world, Controls.of(*held))
        assert classic_world.score >= last_score
        assert classic_world.lives >= 0
        assert classic_world.level >= 1
        last_score = classic_world.score
        if events and isinstance(events[-1], GameOver):
            break
