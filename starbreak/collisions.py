"""
Collision & damage resolution

All tests are circular: distance between centers against a radius taken from
entity widths. Asteroid polygons are for drawing only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .config import DOUBLE_SHOT_COLOR, EXTRA_LIFE_COLOR
from .entities import Asteroid, Bullet, PowerUp, PowerUpType
from .lifecycle import emit_damage, emit_explosion, emit_hit, spawn_text
from .utils import within

if TYPE_CHECKING:
    from .world import World

logger = logging.getLogger(__name__)


# ----------------------------
# Power-ups
# ----------------------------

def roll_powerup(world: World, x: float, y: float) -> Optional[PowerUp]:
    """Chance-based drop at a destroyed asteroid's position"""
    cfg = world.config
    rng = world.rng
    if rng.random() >= cfg.powerup_chance:
        return None

    extra_life = rng.random() < cfg.extra_life_chance
    p = PowerUp(
        x=x, y=y,
        vy=cfg.powerup_speed,
        width=cfg.powerup_size,
        height=cfg.powerup_size,
        color=EXTRA_LIFE_COLOR if extra_life else DOUBLE_SHOT_COLOR,
        type=PowerUpType.EXTRA_LIFE if extra_life else PowerUpType.DOUBLE_SHOT,
    )
    world.powerups.append(p)
    return p


def apply_powerup(world: World, p: PowerUp):
    player = world.player
    if p.type is PowerUpType.DOUBLE_SHOT:
        # Refresh, never stack
        player.double_shot_expires_at = world.now + world.config.double_shot_duration
    elif p.type is PowerUpType.EXTRA_LIFE:
        world.gain_life()
    p.alive = False
    world.events["pickup"] += 1


def powerup_system(world: World):
    """Fall, pulse, pickup, and bottom-bound removal."""
    player = world.player
    bottom = world.config.height + world.config.powerup_prune_margin

    for p in world.powerups:
        if not p.alive:
            continue
        p.x += p.vx
        p.y += p.vy
        p.pulse += 0.1

        if within(p.x, p.y, player.x, player.y, player.width):
            apply_powerup(world, p)
        elif p.y >= bottom:
            p.alive = False


# ----------------------------
# Asteroids
# ----------------------------

def move_asteroid(world: World, a: Asteroid):
    width = world.config.width
    a.x += a.vx
    a.y += a.vy
    a.rotation += a.rotation_speed

    half = a.width / 2
    if a.x < half:
        a.x = half
        a.vx = -a.vx
    elif a.x > width - half:
        a.x = width - half
        a.vx = -a.vx


def destroy_asteroid(world: World, a: Asteroid):
    """Award score, label, explosion, and a possible power-up drop."""
    a.alive = False
    world.add_score(a.score_value)
    world.events["kill"] += 1
    spawn_text(world, a.x, a.y, f"+{a.score_value}")
    emit_explosion(world, a.x, a.y)
    roll_powerup(world, a.x, a.y)


def hit_asteroid(world: World, a: Asteroid, b: Bullet):
    a.hp -= b.damage
    b.alive = False
    world.events["hit"] += 1
    emit_hit(world, b.x, b.y)
    if a.hp <= 0:
        destroy_asteroid(world, a)


def check_bullets(world: World, a: Asteroid):
    radius = a.width / 2
    for b in world.bullets:
        if not a.alive:
            return
        if b.alive and within(b.x, b.y, a.x, a.y, radius):
            hit_asteroid(world, a, b)


def check_player(world: World, a: Asteroid) -> bool:
    player = world.player
    if player.invulnerable > 0 or not a.alive:
        return False
    if not within(player.x, player.y, a.x, a.y, a.width / 2 + player.width / 3):
        return False

    world.lose_life()
    player.invulnerable = world.config.invulnerable_frames
    player.flash = True
    a.alive = False
    world.events["damage"] += 1
    emit_damage(world, player.x, player.y)
    logger.debug("Player hit, lives=%d", world.lives)
    return True


def check_ground(world: World, a: Asteroid) -> bool:
    if not a.alive or a.y - a.height / 2 <= world.config.height:
        return False
    a.alive = False
    world.lose_life()
    world.events["ground"] += 1
    return True


def asteroid_system(world: World):
    """Move every live asteroid, then resolve ground, bullets, and player."""
    for a in world.asteroids:
        if not a.alive:
            continue
        move_asteroid(world, a)
        if check_ground(world, a):
            continue
        check_bullets(world, a)
        check_player(world, a)
