"""
Spawn & difficulty scheduling
-----------------------------
A frame counter since the last spawn is compared against an interval that
shrinks as the difficulty multiplier grows (down to a hard floor). Every
spawn bumps the multiplier, so spawn rate and fall speed both climb for as
long as the session lasts.
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, List, Tuple

from .config import ASTEROID_COLOR, GameConfig
from .entities import Asteroid, Crater, Point, Star

if TYPE_CHECKING:
    from .world import World


def spawn_interval(config: GameConfig, difficulty: float) -> float:
    """Frames between asteroid spawns at the given difficulty"""
    return max(config.spawn_interval_floor,
               config.spawn_interval_initial - difficulty * config.spawn_interval_step)


def hp_for_size(config: GameConfig, size: float) -> int:
    return 1 if size < config.asteroid_large_size else 2


def generate_shape(radius: float, rng: random.Random) -> Tuple[Point, ...]:
    """Perturbed regular polygon with 8-13 vertices, each at 0.6-1.2 x radius"""
    n = 8 + rng.randrange(6)
    points = []
    for i in range(n):
        ang = (i / n) * math.pi * 2
        r = radius * (0.6 + rng.random() * 0.6)
        points.append(Point(math.cos(ang) * r, math.sin(ang) * r))
    return tuple(points)


def generate_craters(size: float, rng: random.Random) -> Tuple[Crater, ...]:
    craters = []
    for _ in range(rng.randint(1, 3)):
        craters.append(Crater(
            x=(rng.random() - 0.5) * size * 0.6,
            y=(rng.random() - 0.5) * size * 0.6,
            r=rng.random() * size * 0.15 + size * 0.05,
        ))
    return tuple(craters)


def make_asteroid(config: GameConfig, difficulty: float, rng: random.Random) -> Asteroid:
    size = rng.uniform(config.asteroid_min_size, config.asteroid_max_size)
    return Asteroid(
        x=rng.random() * (config.width - size) + size / 2,
        y=-size,
        vx=(rng.random() - 0.5) * 2,
        vy=(rng.random() * 1.0 + 0.5) * (1 + difficulty * config.fall_speed_factor),
        width=size,
        height=size,
        color=ASTEROID_COLOR,
        hp=hp_for_size(config, size),
        score_value=config.asteroid_score,
        rotation_speed=(rng.random() - 0.5) * 0.05,
        shape=generate_shape(size / 2, rng),
        craters=generate_craters(size, rng),
    )


def spawn_system(world: World) -> bool:
    """Advance the spawn counter; spawn one asteroid when it is due."""
    world.frames_since_last_spawn += 1
    if world.frames_since_last_spawn < spawn_interval(world.config, world.difficulty):
        return False

    world.asteroids.append(make_asteroid(world.config, world.difficulty, world.rng))
    world.frames_since_last_spawn = 0
    world.difficulty += world.config.difficulty_increment
    return True


def make_stars(config: GameConfig, rng: random.Random) -> List[Star]:
    return [
        Star(
            x=rng.random() * config.width,
            y=rng.random() * config.height,
            size=rng.random() * 2 + 0.5,
            speed=rng.random() * 2 + 0.2,
            brightness=rng.random(),
        )
        for _ in range(config.star_count)
    ]
