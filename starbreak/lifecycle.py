"""
Lifecycle of transient entities: particles, floating text, stars, blink
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .config import (
    ASTEROID_COLOR, Color, DAMAGE_PARTICLE_COLOR, HIT_PARTICLE_COLOR, TEXT_COLOR,
)
from .entities import FloatingText, Particle

if TYPE_CHECKING:
    from .world import World


# (count, spread, color) of each burst kind
HIT_BURST = (3, 5.0, HIT_PARTICLE_COLOR)
EXPLOSION_BURST = (15, 8.0, ASTEROID_COLOR)
DAMAGE_BURST = (20, 10.0, DAMAGE_PARTICLE_COLOR)


def emit_particles(world: World, x: float, y: float, count: int, spread: float,
                   color: Color, life: float, size: float) -> List[Particle]:
    rng = world.rng
    burst = [
        Particle(
            x=x, y=y,
            vx=(rng.random() - 0.5) * spread,
            vy=(rng.random() - 0.5) * spread,
            width=size, height=size,
            color=color,
            life=life, max_life=life,
        )
        for _ in range(count)
    ]
    world.particles.extend(burst)
    return burst


def emit_hit(world: World, x: float, y: float) -> List[Particle]:
    count, spread, color = HIT_BURST
    return emit_particles(world, x, y, count, spread, color, life=10, size=2)


def emit_damage(world: World, x: float, y: float) -> List[Particle]:
    count, spread, color = DAMAGE_BURST
    return emit_particles(world, x, y, count, spread, color, life=40, size=3)


def emit_explosion(world: World, x: float, y: float) -> List[Particle]:
    """Varied debris: life 30-50 frames against a common max of 50."""
    count, spread, color = EXPLOSION_BURST
    rng = world.rng
    burst = []
    for _ in range(count):
        size = rng.random() * 4 + 2
        burst.append(Particle(
            x=x, y=y,
            vx=(rng.random() - 0.5) * spread,
            vy=(rng.random() - 0.5) * spread,
            width=size, height=rng.random() * 4 + 2,
            color=color,
            life=30 + rng.random() * 20, max_life=50,
        ))
    world.particles.extend(burst)
    return burst


def spawn_text(world: World, x: float, y: float, text: str, color: Color = TEXT_COLOR) -> FloatingText:
    cfg = world.config
    label = FloatingText(x=x, y=y, text=text, color=color, size=cfg.text_size,
                         life=cfg.text_life, max_life=cfg.text_life)
    world.texts.append(label)
    return label


def particle_system(world: World):
    for p in world.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        if p.life <= 0:
            p.alive = False


def text_system(world: World):
    for t in world.texts:
        t.y -= 1
        t.life -= 1


def star_system(world: World):
    height = world.config.height
    for s in world.stars:
        s.y += s.speed
        if s.y > height:
            s.y = 0


def invulnerability_system(world: World):
    """Count down the damage window; blink every flash period, solid once done."""
    player = world.player
    if player.invulnerable > 0:
        player.invulnerable -= 1
        if player.invulnerable <= 0:
            player.flash = False
        elif player.invulnerable % world.config.flash_period == 0:
            player.flash = not player.flash
    else:
        player.flash = False
