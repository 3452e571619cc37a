"""Game entities: the player-controlled bubble, obstacles, and gaps.

Everything here is plain simulation state; drawing lives in ``render.py``.
Obstacles and gaps keep their world-space x forever; subtract the scroll
offset to get screen-space.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import GameConfig, SmallBubblePolicy
from .utils import clamp

BLOCKING = "blocking"
FLOATING = "floating"


@dataclass(frozen=True)
class Obstacle:
    x: float
    y: float
    width: float
    height: float
    kind: str = BLOCKING
    pattern: str = "plain"

    def screen_x(self, scroll_offset: float) -> float:
        return self.x - scroll_offset


@dataclass
class Gap:
    x: float
    y: float
    width: float
    height: float
    passed: bool = False

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0

    def screen_x(self, scroll_offset: float) -> float:
        return self.x - scroll_offset


class Bubble:
    """The inflatable bubble. Stays at a fixed screen x; only y, size and vy change."""

    def __init__(self, config: GameConfig, y: float | None = None) -> None:
        self.config = config
        self.reset(y)

    def reset(self, y: float | None = None) -> None:
        cfg = self.config
        self.x = float(cfg.bubble_x)
        self.y = float(cfg.field_height / 2.0 if y is None else y)
        self.radius = float(clamp(cfg.initial_radius, cfg.min_radius, cfg.max_radius))
        self.vy = 0.0
        self.is_growing = False
        self.disappeared = False

    def update(self) -> None:
        """Advance one fixed tick of size change and vertical motion."""
        if self.disappeared:
            return
        cfg = self.config
        if self.is_growing:
            self.radius = min(self.radius + cfg.growth_rate, cfg.max_radius)
            lift = 1.0 + cfg.size_lift * (self.radius / cfg.max_radius)
            self.vy -= cfg.buoyancy * lift
        else:
            self.radius = max(self.radius - cfg.shrink_rate, cfg.min_radius)
            span = cfg.max_radius - cfg.min_radius
            closeness = (cfg.max_radius - self.radius) / span if span > 0 else 1.0
            self.vy += cfg.gravity * (1.0 + cfg.size_weight * closeness)

        if cfg.small_bubble_policy is SmallBubblePolicy.POP and self.radius <= cfg.min_radius:
            # Gone before it moves this tick
            self.disappeared = True
            return

        self.vy = clamp(self.vy, -cfg.max_vertical_speed, cfg.max_vertical_speed)
        self.y += self.vy
        self.vy *= cfg.drag

        # Ceiling: keep downward motion, drop any upward push
        if self.y - self.radius < 0:
            self.y = self.radius
            self.vy = max(0.0, self.vy)

    def below(self, field_height: float) -> bool:
        """True once the whole bubble has dropped past the bottom edge."""
        return self.y - self.radius > field_height

    def copy(self) -> "Bubble":
        twin = Bubble.__new__(Bubble)
        twin.__dict__.update(self.__dict__)
        return twin
