"""The game session state machine and its fixed per-tick pipeline."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .collision import CollisionDetector, Outcome
from .config import MIN_FIELD_WIDTH, GameConfig
from .entities import Bubble, Gap, Obstacle
from .generator import ObstacleGenerator
from .scoring import MemoryScoreStore, ScoreStore, ScoreTracker
from .world import World

logger = logging.getLogger(__name__)


class Phase(Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


class SessionListener(Protocol):
    """Receives discrete session events (audio, UI). All methods are optional."""

    def on_grow_start(self) -> None: ...

    def on_grow_stop(self) -> None: ...

    def on_terminal(self, reason: str) -> None: ...

    def on_score_changed(self, score: int, best: int) -> None: ...


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one frame for the renderer."""

    phase: Phase
    bubble: Bubble
    obstacles: tuple[Obstacle, ...]
    gaps: tuple[Gap, ...]
    scroll_offset: float
    score: int
    best_score: int
    reason: str | None


def fit_config(config: GameConfig) -> GameConfig:
    """Clamp field dimensions up to the smallest playable field."""
    width = max(config.field_width, MIN_FIELD_WIDTH)
    height = max(config.field_height, config.min_field_height)
    if (width, height) != (config.field_width, config.field_height):
        logger.warning(
            "field %sx%s too small, using %sx%s",
            config.field_width,
            config.field_height,
            width,
            height,
        )
        return dataclasses.replace(config, field_width=width, field_height=height)
    return config


class GameSession:
    """
    Owns bubble, world, and score for one run of the program.

    Input collaborators call ``start``, ``restart`` and ``set_growing``; the
    frame loop calls ``tick`` once per fixed step and reads ``snapshot``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: ScoreStore | None = None,
        seed: int | None = None,
        listeners: list[SessionListener] | None = None,
    ) -> None:
        self.config = fit_config(config or GameConfig())
        self.seed = seed
        self.listeners: list[SessionListener] = list(listeners or [])
        self.detector = CollisionDetector(self.config)
        self.scores = ScoreTracker(self.config, store or MemoryScoreStore())
        self.phase = Phase.START
        self.outcome: Outcome | None = None
        self.ticks = 0
        self._reset_world()

    # --- state -------------------------------------------------------------

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def best_score(self) -> int:
        return self.scores.best_score

    @property
    def reason(self) -> str | None:
        return self.outcome.reason if self.outcome else None

    def _reset_world(self) -> None:
        generator = ObstacleGenerator(self.config, self.config.field_height, self.seed)
        self.bubble = Bubble(self.config)
        self.world = World(self.config, generator)
        self.scores.reset()
        self.outcome = None
        self.ticks = 0
        # A fresh stream per session so restarts are not replays
        if self.seed is not None:
            self.seed += 1

    def _emit(self, name: str, *args) -> None:
        for listener in self.listeners:
            handler = getattr(listener, name, None)
            if handler is not None:
                handler(*args)

    # --- control signals ---------------------------------------------------

    def start(self) -> None:
        if self.phase is not Phase.START:
            logger.debug("start ignored in phase %s", self.phase.value)
            return
        self._begin()

    def restart(self) -> None:
        if self.phase is not Phase.GAME_OVER:
            logger.debug("restart ignored in phase %s", self.phase.value)
            return
        self._reset_world()
        self._begin()

    def _begin(self) -> None:
        self.phase = Phase.PLAYING
        logger.info("session started (best %d)", self.best_score)
        self._emit("on_score_changed", self.score, self.best_score)

    def set_growing(self, growing: bool) -> None:
        if self.phase is not Phase.PLAYING:
            return
        growing = bool(growing)
        if growing == self.bubble.is_growing:
            return
        self.bubble.is_growing = growing
        self._emit("on_grow_start" if growing else "on_grow_stop")

    # --- tick --------------------------------------------------------------

    def tick(self) -> Outcome | None:
        """Run one fixed step. Returns the terminal outcome if this step ended the session."""
        if self.phase is not Phase.PLAYING:
            return None
        self.ticks += 1
        bubble = self.bubble
        world = self.world

        bubble.update()
        if bubble.disappeared:
            return self._end(Outcome.BUBBLE_DISAPPEARED)
        if bubble.below(self.config.field_height):
            return self._end(Outcome.FELL_OFF_BOTTOM)

        world.advance()

        outcome = self.detector.check(bubble, world.obstacles, world.gaps, world.scroll_offset)
        if outcome is not None:
            return self._end(outcome)

        if self.scores.update(world.gaps, bubble.x, world.scroll_offset):
            self._emit("on_score_changed", self.score, self.best_score)

        world.ramp()
        return None

    def _end(self, outcome: Outcome) -> Outcome:
        self.phase = Phase.GAME_OVER
        self.outcome = outcome
        if self.bubble.is_growing:
            self.bubble.is_growing = False
            self._emit("on_grow_stop")
        self.scores.finalize()
        logger.info("game over after %d ticks: %s (score %d)", self.ticks, outcome.reason, self.score)
        self._emit("on_terminal", outcome.reason)
        self._emit("on_score_changed", self.score, self.best_score)
        return outcome

    def snapshot(self) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            bubble=self.bubble.copy(),
            obstacles=tuple(self.world.obstacles),
            gaps=tuple(dataclasses.replace(g) for g in self.world.gaps),
            scroll_offset=self.world.scroll_offset,
            score=self.score,
            best_score=self.best_score,
            reason=self.reason,
        )
