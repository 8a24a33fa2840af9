"""High-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "snakeHighScore"


class HighScoreStore(Protocol):
    def load_high_score(self) -> int: ...

    def save_high_score(self, candidate: int) -> None: ...


def _coerce_score(value: object) -> int:
    if isinstance(value, bool):
        return 0
    try:
        score = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0
    return max(score, 0)


class InMemoryHighScoreStore:
    """Process-local store, mainly for tests and the demo."""

    def __init__(self, initial: int = 0) -> None:
        self.value = _coerce_score(initial)

    def load_high_score(self) -> int:
        return self.value

    def save_high_score(self, candidate: int) -> None:
        if candidate > self.value:
            self.value = candidate


class JsonHighScoreStore:
    """Keeps the high score in a small JSON file.

    A missing or unreadable file loads as 0. Saving only writes when the
    candidate beats the value currently on disk.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def load_high_score(self) -> int:
        try:
            raw = json.loads(self.path.read_text())
        except FileNotFoundError:
            return 0
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable high score file %s.", self.path)
            return 0
        if not isinstance(raw, dict):
            return 0
        return _coerce_score(raw.get(HIGH_SCORE_KEY, 0))

    def save_high_score(self, candidate: int) -> None:
        if candidate <= self.load_high_score():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({HIGH_SCORE_KEY: int(candidate)}))
        logger.info("High score %d saved to %s", candidate, self.path)
