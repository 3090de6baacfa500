import math
import random

import pytest

from starbreak.config import DEFAULT_CONFIG
from starbreak.spawner import (
    generate_craters, generate_shape, hp_for_size, make_asteroid, make_stars,
    spawn_interval, spawn_system,
)


def test_spawn_interval_shrinks_with_difficulty():
    cfg = DEFAULT_CONFIG
    assert spawn_interval(cfg, 1.0) == pytest.approx(153.0)
    assert spawn_interval(cfg, 10.0) == pytest.approx(108.0)
    assert spawn_interval(cfg, 2.0) < spawn_interval(cfg, 1.0)


def test_spawn_interval_has_floor():
    assert spawn_interval(DEFAULT_CONFIG, 1000.0) == DEFAULT_CONFIG.spawn_interval_floor


@pytest.mark.parametrize("size, hp", [(40, 1), (69.9, 1), (70, 2), (99.9, 2)])
def test_hp_is_two_tier(size, hp):
    assert hp_for_size(DEFAULT_CONFIG, size) == hp


@pytest.mark.parametrize("seed", range(20))
def test_shape_is_perturbed_polygon(seed):
    radius = 30.0
    shape = generate_shape(radius, random.Random(seed))
    assert 8 <= len(shape) <= 13
    for v in shape:
        r = math.hypot(v.x, v.y)
        assert 0.6 * radius - 1e-9 <= r <= 1.2 * radius + 1e-9


@pytest.mark.parametrize("seed", range(20))
def test_craters_count_and_size(seed):
    size = 80.0
    craters = generate_craters(size, random.Random(seed))
    assert 1 <= len(craters) <= 3
    for c in craters:
        assert abs(c.x) <= size * 0.3
        assert abs(c.y) <= size * 0.3
        assert size * 0.05 <= c.r <= size * 0.2


@pytest.mark.parametrize("seed", range(20))
def test_asteroid_spawns_above_and_within_bounds(seed):
    cfg = DEFAULT_CONFIG
    a = make_asteroid(cfg, 1.0, random.Random(seed))
    assert cfg.asteroid_min_size <= a.width <= cfg.asteroid_max_size
    assert a.width / 2 <= a.x <= cfg.width - a.width / 2
    assert a.y == -a.width
    assert a.hp == hp_for_size(cfg, a.width)
    assert a.score_value == cfg.asteroid_score
    assert 0.5 * 1.1 <= a.vy <= 1.5 * 1.1
    assert isinstance(a.shape, tuple) and isinstance(a.craters, tuple)


def test_fall_speed_scales_with_difficulty():
    slow = make_asteroid(DEFAULT_CONFIG, 1.0, random.Random(3))
    fast = make_asteroid(DEFAULT_CONFIG, 11.0, random.Random(3))
    assert fast.vy == pytest.approx(slow.vy * 2.1 / 1.1)


def test_spawn_system_waits_for_interval(world):
    interval = int(spawn_interval(world.config, world.difficulty))
    for _ in range(interval - 1):
        assert not spawn_system(world)
    assert world.asteroids == []

    assert spawn_system(world)
    assert len(world.asteroids) == 1
    assert world.frames_since_last_spawn == 0
    assert world.difficulty == pytest.approx(1.0 + world.config.difficulty_increment)


def test_difficulty_is_monotonic(world):
    seen = [world.difficulty]
    for _ in range(2000):
        spawn_system(world)
        seen.append(world.difficulty)
    assert all(b >= a for a, b in zip(seen, seen[1:]))
    assert seen[-1] > seen[0]


def test_make_stars_fills_the_canvas():
    stars = make_stars(DEFAULT_CONFIG, random.Random(1))
    assert len(stars) == DEFAULT_CONFIG.star_count
    for s in stars:
        assert 0 <= s.x <= DEFAULT_CONFIG.width
        assert 0 <= s.y <= DEFAULT_CONFIG.height
        assert 0.2 <= s.speed <= 2.2
