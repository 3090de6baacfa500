"""
Frame orchestration
-------------------
``Game`` sequences every system once per tick in a fixed order and exposes
score, lives, state and a read-only snapshot to hosts. ``GameLoop`` binds a
``Game`` to a host scheduler (arcade/pyglet clock, or a fake in tests) and
can be cancelled to stop all further mutation.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from .collisions import asteroid_system, powerup_system
from .config import GameConfig
from .lifecycle import invulnerability_system, particle_system, star_system, text_system
from .movement import NO_INPUT, InputState, bullet_system, fire_system, movement_system
from .spawner import spawn_system
from .state import GameState, GameStateMachine
from .world import Snapshot, World

logger = logging.getLogger(__name__)


class Game:
    """One simulation session: the world plus the state machine governing it"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.world = World(config, rng)
        self.machine = GameStateMachine(on_reset=self.world.reset)
        self._clock = clock

    # ----------------------------
    # Host UI surface
    # ----------------------------

    @property
    def state(self) -> GameState:
        return self.machine.state

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def lives(self) -> int:
        return self.world.lives

    @property
    def difficulty(self) -> float:
        return self.world.difficulty

    def snapshot(self) -> Snapshot:
        return self.world.snapshot(self.state)

    # ----------------------------
    # Actions
    # ----------------------------

    def start(self) -> bool:
        return self.machine.start()

    def toggle_pause(self) -> bool:
        return self.machine.toggle_pause()

    def restart(self) -> bool:
        return self.machine.restart()

    def abort(self) -> bool:
        return self.machine.abort()

    # ----------------------------
    # Frame step
    # ----------------------------

    def step(self, inputs: InputState = NO_INPUT, now: Optional[float] = None) -> GameState:
        """
        Advance one frame.

        ``now`` is sampled once (from the clock when not given) and reused by
        every decision in this frame.
        """
        world = self.world

        if inputs.pause:
            self.machine.toggle_pause()

        world.clear_events()
        star_system(world)
        if not self.machine.is_playing:
            return self.state

        world.now = self._clock() if now is None else now

        movement_system(world, inputs)
        fire_system(world, inputs)
        bullet_system(world)
        powerup_system(world)
        spawn_system(world)
        asteroid_system(world)
        particle_system(world)
        text_system(world)
        invulnerability_system(world)
        world.sweep()

        if world.lives <= 0 and self.machine.lose():
            logger.info("Game over with score %d", world.score)
        return self.state


class GameLoop:
    """
    Cancellable fixed-cadence driver.

    ``schedule(fn, interval)`` / ``unschedule(fn)`` follow the arcade/pyglet
    clock signature; ``fn`` receives the elapsed seconds. A large gap between
    ticks still advances exactly one frame.
    """

    def __init__(
        self,
        game: Game,
        poll_input: Callable[[], InputState],
        schedule: Callable[[Callable[[float], None], float], None],
        unschedule: Callable[[Callable[[float], None]], None],
        on_frame: Optional[Callable[[Game], None]] = None,
        fps: int = 60,
    ):
        self.game = game
        self.poll_input = poll_input
        self.on_frame = on_frame
        self.interval = 1.0 / fps
        self._schedule = schedule
        self._unschedule = unschedule
        self._tick = self.tick
        self.running = False
        self.frames = 0

    def start(self):
        if self.running:
            return
        self.running = True
        self._schedule(self._tick, self.interval)

    def tick(self, delta_time: float = 0.0):
        if not self.running:
            return
        self.game.step(self.poll_input())
        self.frames += 1
        if self.on_frame is not None:
            self.on_frame(self.game)

    def cancel(self):
        if not self.running:
            return
        self.running = False
        self._unschedule(self._tick)
        logger.debug("Game loop cancelled after %d frames", self.frames)
