"""
High score persistence: one integer under a fixed key in a JSON document
"""

import json
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

HIGHSCORE_KEY = "cosmic-defender-highscore"
DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".starbreak", "highscore.json")


class HighScoreStore:
    """
    Reads and writes the best score. Anything missing or malformed on disk
    loads as 0; write errors propagate to the caller.
    """

    def __init__(self, path: Optional[str] = None, key: str = HIGHSCORE_KEY):
        self.path = path or DEFAULT_PATH
        self.key = key
        self._cached: Optional[int] = None

    def load(self) -> int:
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            value = 0
        except (OSError, ValueError) as e:
            logger.warning("Unreadable high score file %s (%s); starting from 0", self.path, e)
            value = 0
        else:
            value = data.get(self.key, 0) if isinstance(data, dict) else 0
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                logger.warning("Ignoring malformed high score %r in %s", value, self.path)
                value = 0

        self._cached = value
        return value

    @property
    def value(self) -> int:
        if self._cached is None:
            return self.load()
        return self._cached

    def save(self, score: int):
        data = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r") as f:
                    existing = json.load(f)
                if isinstance(existing, dict):
                    data = existing
            except (OSError, ValueError) as e:
                logger.warning("Replacing unreadable high score file %s (%s)", self.path, e)

        data[self.key] = int(score)
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f)

        self._cached = int(score)
        logger.info("Saved high score %d to %s", score, self.path)

    def submit(self, score: int) -> bool:
        """Persist score if it beats the stored one. Returns True on a new record."""
        if score <= self.value:
            return False
        self.save(score)
        return True
