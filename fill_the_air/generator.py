"""Procedural obstacle generation: one top/bottom pair and its gap per call."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from .config import (
    FLOATING_HEIGHT,
    FLOATING_MARGIN,
    FLOATING_OFFSET_X,
    FLOATING_WIDTH,
    LOOSE_EDGE_MARGIN,
    LOOSE_GAP_RANGE,
    LOOSE_MIN_GAP,
    PATTERNS,
    GameConfig,
    GenerationPolicy,
)
from .entities import BLOCKING, FLOATING, Gap, Obstacle

logger = logging.getLogger(__name__)


@dataclass
class ObstacleGroup:
    x: float
    gap: Gap
    obstacles: list[Obstacle] = field(default_factory=list)


class ObstacleGenerator:
    """
    Builds obstacle groups at requested world x positions.

    Under ``GenerationPolicy.SAFE`` every gap is at least
    ``2 * max_radius + safety_margin`` tall, so a fully inflated bubble always
    fits. ``GenerationPolicy.LOOSE`` draws from a wider range with no such
    guarantee. Sizes come from one seeded stream and cosmetic patterns from a
    second, so switching pattern sets never changes the geometry.
    """

    def __init__(self, config: GameConfig, field_height: float, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.config = config
        self.field_height = float(field_height)
        self.seed = seed
        self.rng = random.Random(seed)
        self.pattern_rng = random.Random(f"{seed}-patterns")

    def gap_height_range(self) -> tuple[float, float]:
        """Inclusive (low, high) bounds for the gap height under the current policy."""
        cfg = self.config
        if cfg.generation_policy is GenerationPolicy.SAFE:
            lo = cfg.min_safe_gap
            hi = min(cfg.max_gap, self.field_height - 2 * cfg.min_obstacle_height)
            return lo, max(lo, hi)
        return float(LOOSE_MIN_GAP), float(LOOSE_MIN_GAP + LOOSE_GAP_RANGE)

    def _pick_gap(self) -> tuple[float, float]:
        cfg = self.config
        h = self.field_height
        if cfg.generation_policy is GenerationPolicy.SAFE:
            lo, hi = self.gap_height_range()
            gap_h = self.rng.uniform(lo, hi)
            top_room = cfg.min_obstacle_height
            bottom_room = h - cfg.min_obstacle_height - gap_h
            gap_y = self.rng.uniform(top_room, max(top_room, bottom_room))
        else:
            gap_h = self.rng.random() * LOOSE_GAP_RANGE + LOOSE_MIN_GAP
            gap_y = self.rng.random() * (h - gap_h - 2 * LOOSE_EDGE_MARGIN) + LOOSE_EDGE_MARGIN
        return gap_y, gap_h

    def generate(self, x: float) -> ObstacleGroup:
        cfg = self.config
        h = self.field_height
        gap_y, gap_h = self._pick_gap()
        pattern = self.pattern_rng.choice(PATTERNS)

        group = ObstacleGroup(x=x, gap=Gap(x=x, y=gap_y, width=cfg.obstacle_width, height=gap_h))
        if gap_y > 0:
            group.obstacles.append(
                Obstacle(x, 0.0, cfg.obstacle_width, gap_y, BLOCKING, pattern)
            )
        if gap_y + gap_h < h:
            group.obstacles.append(
                Obstacle(x, gap_y + gap_h, cfg.obstacle_width, h - (gap_y + gap_h), BLOCKING, pattern)
            )

        if self.rng.random() < cfg.floating_chance:
            fy = self.rng.random() * (h - 2 * FLOATING_MARGIN) + FLOATING_MARGIN
            group.obstacles.append(
                Obstacle(
                    x + FLOATING_OFFSET_X,
                    fy,
                    FLOATING_WIDTH,
                    FLOATING_HEIGHT,
                    FLOATING,
                    self.pattern_rng.choice(PATTERNS),
                )
            )

        logger.debug("group at x=%.1f gap y=%.1f h=%.1f (%d obstacles)", x, gap_y, gap_h, len(group.obstacles))
        return group
