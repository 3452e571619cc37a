"""Gap-passage scoring and best-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Protocol

from .config import BEST_SCORE_KEY, GameConfig
from .entities import Gap

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, best: int) -> None: ...


class MemoryScoreStore:
    """Keeps the best score for the lifetime of the process only."""

    def __init__(self, best: int = 0) -> None:
        self.best = max(0, int(best))
        self.saves = 0

    def load(self) -> int:
        return self.best

    def save(self, best: int) -> None:
        self.best = int(best)
        self.saves += 1


class JsonScoreStore:
    """Stores ``{"fillTheAirBest": n}`` in a small JSON file."""

    def __init__(self, path: str | Path, key: str = BEST_SCORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = int(data.get(self.key, 0))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("ignoring unreadable best score file %s: %s", self.path, exc)
            return 0
        return max(0, value)

    def save(self, best: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: int(best)}), encoding="utf-8")
        except OSError as exc:
            logger.warning("could not save best score to %s: %s", self.path, exc)


class ScoreTracker:
    """Counts gaps the bubble has cleared; each gap pays out once."""

    def __init__(self, config: GameConfig, store: ScoreStore) -> None:
        self.config = config
        self.store = store
        self.score = 0
        self.best_score = max(0, int(store.load()))

    def reset(self) -> None:
        self.score = 0

    def update(self, gaps: Iterable[Gap], bubble_x: float, scroll_offset: float) -> int:
        """Mark newly cleared gaps as passed. Returns the points added this call."""
        gained = 0
        for gap in gaps:
            if not gap.passed and gap.screen_x(scroll_offset) + gap.width < bubble_x:
                gap.passed = True
                gained += self.config.points_per_gap
        self.score += gained
        return gained

    def finalize(self) -> bool:
        """Record the session's score; True if it set a new best."""
        if self.score > self.best_score:
            self.best_score = self.score
            self.store.save(self.best_score)
            logger.info("new best score %d", self.best_score)
            return True
        return False
