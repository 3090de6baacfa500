import random
from dataclasses import FrozenInstanceError, replace

import pytest

from conftest import NO_DROPS, make_rock
from starbreak.config import DEFAULT_CONFIG
from starbreak.entities import Bullet
from starbreak.game import Game, GameLoop
from starbreak.movement import NO_INPUT, InputState, Intent
from starbreak.state import GameState

PAUSE = InputState([Intent.PAUSE])


def star_positions(game):
    return [s.y for s in game.world.stars]


def test_start_from_title_resets_session():
    g = Game(NO_DROPS, rng=random.Random(1))
    assert g.state is GameState.TITLE
    assert (g.score, g.lives) == (0, 3)

    g.world.asteroids.append(make_rock())
    g.world.score = 12
    assert g.start()

    assert g.state is GameState.PLAYING
    assert (g.score, g.lives, g.difficulty) == (0, 3, 1.0)
    assert g.world.asteroids == []
    assert g.world.bullets == [] and g.world.particles == [] and g.world.texts == []


def test_title_only_drifts_stars():
    g = Game(NO_DROPS, rng=random.Random(1))
    before = star_positions(g)
    x = g.world.player.x
    g.step(InputState([Intent.LEFT, Intent.FIRE]))
    assert star_positions(g) != before
    assert g.world.player.x == x
    assert g.world.bullets == []


def test_bullet_kills_small_asteroid_in_one_frame(game):
    rock = make_rock(x=200, y=300, hp=1)
    game.world.asteroids.append(rock)
    # moves 10 units up onto the rock's center before collisions run
    game.world.bullets.append(Bullet(x=200, y=310, vy=-10, damage=1))

    game.step()

    assert game.score == rock.score_value
    assert game.world.asteroids == []
    assert game.world.bullets == []
    assert [t.text for t in game.world.texts] == ["+1"]


def test_last_life_lost_to_ground_ends_game_same_frame(game):
    game.world.lives = 1
    game.world.asteroids.append(make_rock(y=game.world.config.height + 26))

    assert game.step() is GameState.GAME_OVER
    assert game.lives == 0


def test_game_over_stops_simulation(game):
    game.world.lives = 1
    game.world.asteroids.append(make_rock(y=700))
    game.step()
    rock = make_rock(x=100, y=100, vy=2)
    game.world.asteroids.append(rock)
    game.step()
    assert rock.y == 100


def test_pause_freezes_everything_but_stars(game):
    rock = make_rock(x=100, y=100, vy=2)
    game.world.asteroids.append(rock)
    game.step()
    assert rock.y == 102

    assert game.step(PAUSE) is GameState.PAUSED
    score, lives = game.score, game.lives
    stars = star_positions(game)
    for _ in range(10):
        game.step(InputState([Intent.LEFT, Intent.FIRE]))

    assert rock.y == 102
    assert (game.score, game.lives) == (score, lives)
    assert game.world.bullets == []
    assert star_positions(game) != stars

    assert game.step(PAUSE) is GameState.PLAYING
    assert rock.y == 104


def test_restart_and_abort_reset(game):
    game.world.score = 5
    game.world.lives = 0
    game.step()
    assert game.state is GameState.GAME_OVER

    assert game.restart()
    assert (game.state, game.score, game.lives) == (GameState.PLAYING, 0, 3)

    game.world.score = 4
    game.toggle_pause()
    assert game.abort()
    assert (game.state, game.score) == (GameState.TITLE, 0)


def test_clock_sampled_once_per_playing_frame():
    calls = []

    def clock():
        calls.append(1)
        return 50.0

    g = Game(NO_DROPS, rng=random.Random(1), clock=clock)
    g.step()
    assert calls == []
    g.start()
    g.step(InputState([Intent.FIRE]))
    assert len(calls) == 1
    assert g.world.now == 50.0


def test_explicit_now_overrides_clock(game):
    game.world.player.double_shot_expires_at = 20.0
    game.step(InputState([Intent.FIRE]), now=19.0)
    assert len(game.world.bullets) == 2


def test_snapshot_is_immutable(game):
    game.world.asteroids.append(make_rock(x=100, y=100))
    snap = game.snapshot()

    assert snap.state is GameState.PLAYING
    assert isinstance(snap.asteroids, tuple)
    assert snap.asteroids[0].x == 100
    with pytest.raises(FrozenInstanceError):
        snap.score = 99
    with pytest.raises(FrozenInstanceError):
        snap.player.x = -1
    with pytest.raises(FrozenInstanceError):
        snap.asteroids[0].hp = -5
    assert game.world.asteroids[0].hp == 1


def test_snapshot_does_not_follow_later_frames(game):
    game.world.player.double_shot_expires_at = 20.0
    rock = make_rock(x=100, y=100, vy=2)
    game.world.asteroids.append(rock)
    snap = game.snapshot()

    game.step(now=1.0)

    assert rock.y == 102
    assert snap.asteroids[0].y == 100
    assert snap.player.has_double_shot(1.0)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_invariants_hold_over_long_sessions(seed):
    cfg = replace(DEFAULT_CONFIG, spawn_interval_initial=40.0, spawn_interval_floor=10.0)
    g = Game(cfg, rng=random.Random(seed))
    g.start()
    rng = random.Random(seed + 100)
    moves = [(), (Intent.LEFT,), (Intent.RIGHT,)]

    last_score = 0
    invulnerable = 0
    for frame in range(4000):
        held = list(rng.choice(moves)) + [Intent.FIRE]
        state = g.step(InputState(held), now=frame / 60)

        w = g.world
        assert 0 <= g.lives <= cfg.initial_lives
        assert g.score >= last_score
        last_score = g.score
        assert all(a.alive and a.hp > 0 for a in w.asteroids)
        assert all(b.alive for b in w.bullets)
        assert all(p.life > 0 for p in w.particles)
        assert w.player.width / 2 <= w.player.x <= cfg.width - w.player.width / 2
        if invulnerable > 0 and state is GameState.PLAYING:
            assert w.events["damage"] == 0
            assert w.player.invulnerable == invulnerable - 1
        invulnerable = w.player.invulnerable

        if state is GameState.GAME_OVER:
            assert g.lives == 0
            g.restart()
            last_score = 0
            invulnerable = 0


class FakeScheduler:
    def __init__(self):
        self.scheduled = []

    def schedule(self, fn, interval):
        self.scheduled.append((fn, interval))

    def unschedule(self, fn):
        self.scheduled = [(f, i) for f, i in self.scheduled if f != fn]


def test_game_loop_ticks_and_cancels(game):
    clock = FakeScheduler()
    frames = []
    loop = GameLoop(game, lambda: NO_INPUT, clock.schedule, clock.unschedule,
                    on_frame=lambda g: frames.append(g.score))

    loop.start()
    assert len(clock.scheduled) == 1
    fn, interval = clock.scheduled[0]
    assert interval == pytest.approx(1 / 60)

    fn(1 / 60)
    fn(5.0)  # a long stall still advances a single frame
    assert loop.frames == 2
    assert len(frames) == 2

    loop.cancel()
    assert clock.scheduled == []

    stars = star_positions(game)
    fn(1 / 60)
    assert loop.frames == 2
    assert star_positions(game) == stars
