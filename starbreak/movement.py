"""
Movement & input resolution

Input is level-triggered: the set of intents held this frame is resolved once.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Hashable, Iterable, List, Set

from .config import BULLET_COLOR, DOUBLE_SHOT_BULLET_COLOR
from .entities import Bullet
from .utils import approach, clamp

if TYPE_CHECKING:
    from .world import World


class Intent(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    FIRE = "fire"
    PAUSE = "pause"  # toggle, delivered once per press by the host


class InputState:
    """Immutable set of intents held during one frame"""

    __slots__ = ("_held",)

    def __init__(self, held: Iterable[Intent] = ()):
        self._held: FrozenSet[Intent] = frozenset(held)

    def __contains__(self, intent: Intent) -> bool:
        return intent in self._held

    def __iter__(self):
        return iter(self._held)

    def __eq__(self, other):
        return isinstance(other, InputState) and self._held == other._held

    def __hash__(self):
        return hash(self._held)

    def __repr__(self):
        return f"InputState({sorted(i.value for i in self._held)})"

    @property
    def left(self) -> bool:
        return Intent.LEFT in self._held

    @property
    def right(self) -> bool:
        return Intent.RIGHT in self._held

    @property
    def fire(self) -> bool:
        return Intent.FIRE in self._held

    @property
    def pause(self) -> bool:
        return Intent.PAUSE in self._held


NO_INPUT = InputState()


class HeldInputs:
    """
    Tracks which bound device buttons are held and resolves them to an InputState.

    Bindings map any hashable source (a key symbol, a mouse button tag) to an
    intent. Pause is edge-triggered: one request yields one PAUSE intent.
    """

    def __init__(self, bindings: Dict[Hashable, Intent]):
        self.bindings = dict(bindings)
        self._held: Set[Hashable] = set()
        self._pause_requested = False

    def press(self, source: Hashable) -> bool:
        if source not in self.bindings:
            return False
        self._held.add(source)
        return True

    def release(self, source: Hashable):
        self._held.discard(source)

    def request_pause(self):
        self._pause_requested = True

    def poll(self) -> InputState:
        held = {self.bindings[s] for s in self._held}
        if self._pause_requested:
            held.add(Intent.PAUSE)
            self._pause_requested = False
        return InputState(held)


def movement_system(world: World, inputs: InputState):
    """Horizontal motion with a hard clamp; tilt eases toward the held side."""
    cfg = world.config
    player = world.player

    if inputs.left:
        player.vx = -cfg.player_speed
        player.rotation = approach(player.rotation, -cfg.max_tilt, cfg.tilt_step)
    elif inputs.right:
        player.vx = cfg.player_speed
        player.rotation = approach(player.rotation, cfg.max_tilt, cfg.tilt_step)
    else:
        player.vx = 0.0
        player.rotation = approach(player.rotation, 0.0, cfg.tilt_recovery)

    half = player.width / 2
    player.x = clamp(player.x + player.vx, half, cfg.width - half)


def fire_system(world: World, inputs: InputState) -> List[Bullet]:
    """Emit one bullet (two under double-shot) once the cooldown has elapsed."""
    cfg = world.config
    player = world.player

    world.frames_since_last_shot += 1
    if not inputs.fire or world.frames_since_last_shot < cfg.fire_rate:
        return []

    if player.has_double_shot(world.now):
        offsets = (-cfg.double_shot_offset, cfg.double_shot_offset)
        color = DOUBLE_SHOT_BULLET_COLOR
    else:
        offsets = (0.0,)
        color = BULLET_COLOR

    shots = [
        Bullet(
            x=player.x + dx,
            y=player.y - player.height / 2,
            vy=-cfg.bullet_speed,
            width=cfg.bullet_width,
            height=cfg.bullet_height,
            color=color,
            damage=cfg.bullet_damage,
        )
        for dx in offsets
    ]
    world.bullets.extend(shots)
    world.frames_since_last_shot = 0
    world.events["shot"] += len(shots)
    return shots


def bullet_system(world: World):
    """Integrate bullets and tombstone the ones past the top bound."""
    limit = world.config.bullet_prune_y
    for b in world.bullets:
        if not b.alive:
            continue
        b.x += b.vx
        b.y += b.vy
        if b.y < limit:
            b.alive = False
