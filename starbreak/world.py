"""
World aggregate: the single owned value threaded through every frame step
"""

from __future__ import annotations

import logging
import random
from dataclasses import FrozenInstanceError, dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from .config import DEFAULT_CONFIG, GameConfig, PLAYER_COLOR
from .entities import Asteroid, Bullet, FloatingText, Particle, Player, PowerUp, Star
from .spawner import make_stars
from .state import GameState
from .utils import clamp

logger = logging.getLogger(__name__)

EVENT_KEYS = ("hit", "kill", "damage", "ground", "pickup", "shot")


class EntityView:
    """Read-only view over a private copy of one entity.

    Attribute reads (properties and methods included) go to the copy;
    any assignment raises FrozenInstanceError.
    """

    __slots__ = ("_entity",)

    def __init__(self, entity: Any):
        object.__setattr__(self, "_entity", replace(entity))

    def __getattr__(self, name: str):
        return getattr(self._entity, name)

    def __setattr__(self, name: str, value):
        raise FrozenInstanceError(f"cannot assign to field '{name}'")

    def __delattr__(self, name: str):
        raise FrozenInstanceError(f"cannot delete field '{name}'")

    def __repr__(self):
        return f"EntityView({self._entity!r})"


def view_all(entities) -> Tuple[EntityView, ...]:
    return tuple(EntityView(e) for e in entities)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of one frame, handed to renderers and HUDs."""
    state: GameState
    score: int
    lives: int
    difficulty: float
    now: float
    player: EntityView
    asteroids: Tuple[EntityView, ...]
    bullets: Tuple[EntityView, ...]
    powerups: Tuple[EntityView, ...]
    particles: Tuple[EntityView, ...]
    texts: Tuple[EntityView, ...]
    stars: Tuple[EntityView, ...]


class World:
    """All mutable simulation state of one session"""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng or random.Random()

        # Background survives resets
        self.stars: List[Star] = make_stars(self.config, self.rng)

        self.player: Player = None  # type: ignore
        self.asteroids: List[Asteroid] = []
        self.bullets: List[Bullet] = []
        self.powerups: List[PowerUp] = []
        self.particles: List[Particle] = []
        self.texts: List[FloatingText] = []

        self.score = 0
        self.lives = self.config.initial_lives
        self.difficulty = 1.0
        self.frames_since_last_shot = self.config.fire_rate
        self.frames_since_last_spawn = 0
        self.now = 0.0

        # Per-frame event counters, cleared at the start of each step
        self.events: Dict[str, int] = {}

        self.reset()

    def reset(self):
        """Clear every entity and counter back to a fresh session."""
        cfg = self.config
        self.player = self.make_player()
        self.asteroids = []
        self.bullets = []
        self.powerups = []
        self.particles = []
        self.texts = []
        self.score = 0
        self.lives = cfg.initial_lives
        self.difficulty = 1.0
        self.frames_since_last_shot = cfg.fire_rate
        self.frames_since_last_spawn = 0
        self.clear_events()
        logger.debug("World reset")

    def make_player(self) -> Player:
        cfg = self.config
        return Player(
            x=cfg.width / 2,
            y=cfg.height - cfg.player_offset_bottom,
            width=cfg.player_width,
            height=cfg.player_height,
            color=PLAYER_COLOR,
        )

    def clear_events(self):
        self.events = {k: 0 for k in EVENT_KEYS}

    # ----------------------------
    # Score / lives (clamped)
    # ----------------------------

    def add_score(self, value: int):
        if value > 0:
            self.score += value

    def lose_life(self):
        self.lives = int(clamp(self.lives - 1, 0, self.config.initial_lives))

    def gain_life(self):
        self.lives = int(clamp(self.lives + 1, 0, self.config.initial_lives))

    # ----------------------------
    # Frame end
    # ----------------------------

    def sweep(self):
        """Drop every tombstoned entity."""
        self.bullets = [b for b in self.bullets if b.alive]
        self.asteroids = [a for a in self.asteroids if a.alive and a.hp > 0]
        self.powerups = [p for p in self.powerups if p.alive]
        self.particles = [p for p in self.particles if p.alive]
        self.texts = [t for t in self.texts if t.alive]

    def snapshot(self, state: GameState) -> Snapshot:
        return Snapshot(
            state=state,
            score=self.score,
            lives=self.lives,
            difficulty=self.difficulty,
            now=self.now,
            player=EntityView(self.player),
            asteroids=view_all(self.asteroids),
            bullets=view_all(self.bullets),
            powerups=view_all(self.powerups),
            particles=view_all(self.particles),
            texts=view_all(self.texts),
            stars=view_all(self.stars),
        )
