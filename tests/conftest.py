import random
from dataclasses import replace

import pytest

from starbreak.config import DEFAULT_CONFIG
from starbreak.entities import Asteroid
from starbreak.game import Game
from starbreak.world import World

# Power-up drops disabled so kills are deterministic
NO_DROPS = replace(DEFAULT_CONFIG, powerup_chance=0.0)


@pytest.fixture
def world():
    return World(NO_DROPS, rng=random.Random(7))


@pytest.fixture
def game():
    g = Game(NO_DROPS, rng=random.Random(7), clock=lambda: 1000.0)
    g.start()
    return g


def make_rock(x=400.0, y=300.0, size=50.0, hp=1, **kwargs):
    return Asteroid(x=x, y=y, width=size, height=size, hp=hp, score_value=1, **kwargs)
