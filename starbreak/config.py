"""
Gameplay constants for the Starbreak simulation core
"""

from dataclasses import dataclass
from typing import Tuple


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class GameConfig:
    """Every tunable of the simulation. Defaults reproduce the arcade game."""

    # World bounds (4:3 logical canvas)
    width: int = 800
    height: int = 600

    # Player
    player_speed: float = 3.5
    player_width: float = 50.0
    player_height: float = 60.0
    player_offset_bottom: float = 80.0  # spawn y = height - offset
    max_tilt: float = 15.0  # degrees
    tilt_step: float = 2.0
    tilt_recovery: float = 1.0
    initial_lives: int = 3

    # Firing
    fire_rate: int = 30  # frames between shots
    bullet_speed: float = 10.0
    bullet_width: float = 4.0
    bullet_height: float = 12.0
    bullet_damage: int = 1
    double_shot_offset: float = 12.0
    double_shot_duration: float = 10.0  # seconds
    bullet_prune_y: float = -20.0

    # Spawning / difficulty
    spawn_interval_initial: float = 158.0  # frames
    spawn_interval_floor: float = 30.0
    spawn_interval_step: float = 5.0  # frames removed per difficulty unit
    difficulty_increment: float = 0.02
    fall_speed_factor: float = 0.1
    asteroid_min_size: float = 40.0
    asteroid_max_size: float = 100.0
    asteroid_large_size: float = 70.0  # at or above -> 2 hp
    asteroid_score: int = 1

    # Damage
    invulnerable_frames: int = 120
    flash_period: int = 10

    # Power-ups
    powerup_chance: float = 0.06
    extra_life_chance: float = 0.25
    powerup_speed: float = 1.5
    powerup_size: float = 20.0
    powerup_prune_margin: float = 50.0

    # Cosmetics
    star_count: int = 150
    text_life: int = 40
    text_size: int = 20

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"World bounds must be positive, got {self.width}x{self.height}")
        if self.initial_lives < 1:
            raise ValueError(f"initial_lives must be >= 1, got {self.initial_lives}")
        if self.spawn_interval_floor <= 0:
            raise ValueError("spawn_interval_floor must be positive")


DEFAULT_CONFIG = GameConfig()


# Display colors (RGB)
PLAYER_COLOR: Color = (6, 182, 212)
BULLET_COLOR: Color = (103, 232, 249)
DOUBLE_SHOT_BULLET_COLOR: Color = (250, 204, 21)
ASTEROID_COLOR: Color = (148, 163, 184)
HIT_PARTICLE_COLOR: Color = (255, 255, 255)
DAMAGE_PARTICLE_COLOR: Color = (239, 68, 68)
EXTRA_LIFE_COLOR: Color = (244, 114, 182)
DOUBLE_SHOT_COLOR: Color = (251, 191, 36)
TEXT_COLOR: Color = (255, 255, 255)
