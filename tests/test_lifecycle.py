import pytest

from starbreak.entities import FloatingText, Particle, Star
from starbreak.lifecycle import (
    emit_explosion, invulnerability_system, particle_system, spawn_text,
    star_system, text_system,
)


def test_particle_integrates_and_fades(world):
    p = Particle(x=10, y=10, vx=1, vy=-2, life=4, max_life=4)
    world.particles.append(p)

    particle_system(world)

    assert (p.x, p.y) == (11, 8)
    assert p.life == 3
    assert p.alpha == pytest.approx(0.75)


def test_particle_purged_when_life_runs_out(world):
    world.particles.append(Particle(life=2, max_life=2))
    particle_system(world)
    world.sweep()
    assert len(world.particles) == 1
    particle_system(world)
    world.sweep()
    assert world.particles == []


def test_fractional_life_is_purged_at_or_below_zero(world):
    p = Particle(life=0.5, max_life=50)
    world.particles.append(p)
    particle_system(world)
    assert not p.alive
    assert p.alpha == 0.0


def test_explosion_debris_lifetimes(world):
    burst = emit_explosion(world, 100, 100)
    assert len(burst) == 15
    for p in burst:
        assert 30 <= p.life < 50
        assert p.max_life == 50
        assert 2 <= p.width < 6


def test_floating_text_drifts_up_and_expires(world):
    label = spawn_text(world, 50, 200, "+1")
    assert label.life == label.max_life == 40

    text_system(world)
    assert label.y == 199
    assert label.alpha == pytest.approx(39 / 40)

    for _ in range(39):
        text_system(world)
    world.sweep()
    assert world.texts == []


def test_text_alive_tracks_life():
    t = FloatingText(x=0, y=0, text="+1", life=1, max_life=40)
    assert t.alive
    t.life -= 1
    assert not t.alive


def test_stars_wrap_vertically(world):
    world.stars = [Star(x=5, y=599.5, size=1, speed=1, brightness=1), Star(x=5, y=10, size=1, speed=2, brightness=1)]
    star_system(world)
    assert world.stars[0].y == 0
    assert world.stars[1].y == 12


def test_invulnerability_counts_down_and_blinks(world):
    p = world.player
    p.invulnerable = 120
    p.flash = True

    history = []
    for _ in range(120):
        invulnerability_system(world)
        history.append((p.invulnerable, p.flash))

    counts = [c for c, _ in history]
    assert counts == list(range(119, -1, -1))
    # toggles on every multiple of the flash period
    assert history[9] == (110, False)
    assert history[19] == (100, True)
    assert history[-1] == (0, False)


def test_flash_forced_off_without_invulnerability(world):
    world.player.flash = True
    invulnerability_system(world)
    assert world.player.flash is False
    assert world.player.invulnerable == 0
