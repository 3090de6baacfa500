"""
Game state machine: TITLE, PLAYING, PAUSED, GAME_OVER
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    TITLE = "TITLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class Action(str, Enum):
    START = "start"
    TOGGLE_PAUSE = "toggle_pause"
    LOSE = "lose"
    RESTART = "restart"
    ABORT = "abort"


# (action, from) -> (to, resets session)
TRANSITIONS: Dict[Tuple[Action, GameState], Tuple[GameState, bool]] = {
    (Action.START, GameState.TITLE): (GameState.PLAYING, True),
    (Action.TOGGLE_PAUSE, GameState.PLAYING): (GameState.PAUSED, False),
    (Action.TOGGLE_PAUSE, GameState.PAUSED): (GameState.PLAYING, False),
    (Action.LOSE, GameState.PLAYING): (GameState.GAME_OVER, False),
    (Action.RESTART, GameState.GAME_OVER): (GameState.PLAYING, True),
    (Action.ABORT, GameState.PAUSED): (GameState.TITLE, True),
    (Action.ABORT, GameState.GAME_OVER): (GameState.TITLE, True),
}


class GameStateMachine:
    """
    Tracks the active state and applies legal transitions.

    Illegal actions are ignored (return False). Transitions that begin or
    abandon a session invoke ``on_reset`` before the new state is entered.
    """

    def __init__(self, on_reset: Optional[Callable[[], None]] = None):
        self.state = GameState.TITLE
        self._on_reset = on_reset

    def apply(self, action: Action) -> bool:
        target = TRANSITIONS.get((action, self.state))
        if target is None:
            logger.debug("Ignoring %s while %s", action.value, self.state.value)
            return False

        new_state, resets = target
        if resets and self._on_reset is not None:
            self._on_reset()

        logger.info("State %s -> %s", self.state.value, new_state.value)
        self.state = new_state
        return True

    def start(self) -> bool:
        return self.apply(Action.START)

    def toggle_pause(self) -> bool:
        return self.apply(Action.TOGGLE_PAUSE)

    def lose(self) -> bool:
        return self.apply(Action.LOSE)

    def restart(self) -> bool:
        return self.apply(Action.RESTART)

    def abort(self) -> bool:
        return self.apply(Action.ABORT)

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING
