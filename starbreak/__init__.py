"""Starbreak - real-time simulation core of a 2D asteroid shooter"""

from .config import GameConfig, DEFAULT_CONFIG
from .env import StarbreakEnv, run_random_episode
from .game import Game, GameLoop
from .highscore import HighScoreStore
from .movement import InputState, Intent
from .state import GameState
from .world import Snapshot, World

__all__ = [
    'Game',
    'GameLoop',
    'GameConfig',
    'DEFAULT_CONFIG',
    'GameState',
    'HighScoreStore',
    'InputState',
    'Intent',
    'Snapshot',
    'World',
    'StarbreakEnv',
    'run_random_episode',
]
