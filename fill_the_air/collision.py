"""Terminal outcomes and the per-tick bubble collision checks."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from .config import GameConfig
from .entities import Bubble, Gap, Obstacle
from .utils import square_rect_overlap, strictly_between


class Outcome(Enum):
    """Every way a session can end, with the message shown to the player."""

    POPPED_ON_OBSTACLE = "Bubble popped on obstacle!"
    TOO_SMALL_FOR_GAP = "Bubble too small - fell through gap!"
    TOO_BIG_FOR_GAP = "Bubble too big for gap!"
    FELL_OFF_BOTTOM = "Bubble fell off the screen!"
    BUBBLE_DISAPPEARED = "Bubble disappeared - too small!"

    @property
    def reason(self) -> str:
        return self.value


def hits_obstacle(bubble: Bubble, obstacle: Obstacle, scroll_offset: float) -> bool:
    return square_rect_overlap(
        bubble.x,
        bubble.y,
        bubble.radius,
        obstacle.screen_x(scroll_offset),
        obstacle.y,
        obstacle.width,
        obstacle.height,
    )


def inside_gap(bubble: Bubble, gap: Gap, scroll_offset: float) -> bool:
    """True if the bubble's center is strictly inside the gap on both axes."""
    gx = gap.screen_x(scroll_offset)
    return strictly_between(bubble.x, gx, gx + gap.width) and strictly_between(
        bubble.y, gap.y, gap.bottom
    )


def gap_fit(bubble: Bubble, gap: Gap, config: GameConfig) -> Outcome | None:
    """Size rules for a bubble already known to be inside ``gap``."""
    if bubble.radius < config.too_small_radius:
        return Outcome.TOO_SMALL_FOR_GAP
    if bubble.radius * 2 > gap.height - config.gap_clearance:
        return Outcome.TOO_BIG_FOR_GAP
    return None


class CollisionDetector:
    """Runs obstacle overlap, then gap fit; the first failing check wins."""

    def __init__(self, config: GameConfig) -> None:
        self.config = config

    def check(
        self,
        bubble: Bubble,
        obstacles: Iterable[Obstacle],
        gaps: Iterable[Gap],
        scroll_offset: float,
    ) -> Outcome | None:
        for obstacle in obstacles:
            if hits_obstacle(bubble, obstacle, scroll_offset):
                return Outcome.POPPED_ON_OBSTACLE

        for gap in gaps:
            if inside_gap(bubble, gap, scroll_offset):
                outcome = gap_fit(bubble, gap, self.config)
                if outcome is not None:
                    return outcome
        return None
