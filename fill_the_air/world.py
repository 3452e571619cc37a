"""Scrolling world: obstacle spawning, pruning, and the difficulty ramp."""

from __future__ import annotations

import logging

from .config import INITIAL_WORLD_SPAN, GameConfig
from .entities import Gap, Obstacle
from .generator import ObstacleGenerator, ObstacleGroup

logger = logging.getLogger(__name__)


class World:
    """
    Holds every live obstacle and gap in world-space plus the scroll state.

    Entries are kept in spawn order, which is also left-to-right order.
    """

    def __init__(self, config: GameConfig, generator: ObstacleGenerator) -> None:
        self.config = config
        self.generator = generator
        self.field_width = float(config.field_width)
        self.obstacles: list[Obstacle] = []
        self.gaps: list[Gap] = []
        self.scroll_offset = 0.0
        self.scroll_speed = config.initial_scroll_speed
        self.last_spawn_x = self.field_width
        self._prewarm()

    def _prewarm(self) -> None:
        # Fill the first screen and a bit so obstacles are visible immediately
        x = self.field_width
        while x < self.field_width + INITIAL_WORLD_SPAN:
            self._add(self.generator.generate(x))
            self.last_spawn_x = x
            x += self.config.obstacle_spacing

    def _add(self, group: ObstacleGroup) -> None:
        self.obstacles.extend(group.obstacles)
        self.gaps.append(group.gap)

    def advance(self) -> None:
        """Scroll by the current speed, spawn at most one group, prune what fell behind."""
        self.scroll_offset += self.scroll_speed

        if self.last_spawn_x - self.scroll_offset < self.field_width + self.config.spawn_lookahead:
            self.last_spawn_x += self.config.obstacle_spacing
            self._add(self.generator.generate(self.last_spawn_x))

        self.prune()

    def prune(self) -> None:
        limit = -self.config.prune_margin
        before = len(self.obstacles) + len(self.gaps)
        self.obstacles = [o for o in self.obstacles if o.screen_x(self.scroll_offset) > limit]
        self.gaps = [g for g in self.gaps if g.screen_x(self.scroll_offset) > limit]
        removed = before - len(self.obstacles) - len(self.gaps)
        if removed:
            logger.debug("pruned %d entries at offset %.1f", removed, self.scroll_offset)

    def ramp(self) -> None:
        """Nudge scroll speed up toward the cap."""
        cfg = self.config
        self.scroll_speed = min(self.scroll_speed + cfg.scroll_speed_increment, cfg.max_scroll_speed)
