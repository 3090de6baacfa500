"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import Color


@dataclass(frozen=True)
class Point:
    """Polygon vertex relative to an asteroid's center"""
    x: float
    y: float


@dataclass(frozen=True)
class Crater:
    """Decorative circle on an asteroid's surface"""
    x: float
    y: float
    r: float


@dataclass
class Body:
    """Shared shape of every moving entity"""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    color: Color = (255, 255, 255)
    alive: bool = True  # tombstone, swept at end of frame


@dataclass
class Player(Body):
    """Player ship"""
    invulnerable: int = 0  # frames remaining
    flash: bool = False
    double_shot_expires_at: float = 0.0  # absolute time, 0 = no buff

    def has_double_shot(self, now: float) -> bool:
        return now < self.double_shot_expires_at


@dataclass
class Asteroid(Body):
    """Falling rock; shape and craters are frozen at spawn"""
    hp: int = 1
    score_value: int = 1
    rotation_speed: float = 0.0
    shape: Tuple[Point, ...] = ()
    craters: Tuple[Crater, ...] = ()


@dataclass
class Bullet(Body):
    """Player projectile"""
    damage: int = 1


class PowerUpType(str, Enum):
    DOUBLE_SHOT = "DOUBLE_SHOT"
    EXTRA_LIFE = "EXTRA_LIFE"


@dataclass
class PowerUp(Body):
    """Collectible dropped by destroyed asteroids"""
    type: PowerUpType = PowerUpType.DOUBLE_SHOT
    pulse: float = 0.0  # animation phase only


@dataclass
class Particle(Body):
    """Cosmetic debris"""
    life: float = 0.0
    max_life: float = 1.0

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)


@dataclass
class FloatingText:
    """Score label drifting upward"""
    x: float
    y: float
    text: str
    color: Color = (255, 255, 255)
    size: int = 20
    life: int = 40
    max_life: int = 40

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)

    @property
    def alive(self) -> bool:
        return self.life > 0


@dataclass
class Star:
    """Background star, wraps vertically forever"""
    x: float
    y: float
    size: float
    speed: float
    brightness: float
