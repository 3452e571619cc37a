from __future__ import annotations

"""Game configuration constants and tuning presets for Fill the Air."""

from dataclasses import dataclass
from enum import Enum

# Game configuration
WINDOW_WIDTH = 400
WINDOW_HEIGHT = 600
FPS = 60
MIN_FIELD_WIDTH = 200

# Bubble
BUBBLE_X = 100
INITIAL_RADIUS = 25.0
MIN_RADIUS = 8.0
MAX_RADIUS = 80.0
GROWTH_RATE = 0.8  # px/tick while inflating
SHRINK_RATE = 0.4  # px/tick while deflating

# Physics (per tick, fixed timestep)
BUOYANCY = 0.15  # upward push while growing
GRAVITY = 0.12  # downward pull while shrinking
MAX_VERTICAL_SPEED = 8.0
DRAG = 0.95  # velocity multiplier applied every tick
SIZE_LIFT = 0.0  # extra lift scaled by radius / max radius
SIZE_WEIGHT = 0.0  # extra weight scaled by closeness to min radius

# Obstacles
OBSTACLE_WIDTH = 30
OBSTACLE_SPACING = 200  # px between obstacle groups
MIN_OBSTACLE_HEIGHT = 50
SAFETY_MARGIN = 20  # slack above 2 * MAX_RADIUS for every safe gap
MAX_GAP = 300
LOOSE_MIN_GAP = 140
LOOSE_GAP_RANGE = 120
LOOSE_EDGE_MARGIN = 50  # room kept for each loose obstacle
FLOATING_CHANCE = 0.3
FLOATING_OFFSET_X = 100
FLOATING_WIDTH = 40
FLOATING_HEIGHT = 20
FLOATING_MARGIN = 20  # keeps floating obstacles off the field edges
PATTERNS = ("plain", "striped", "dotted", "banded")

# Gap fit
GAP_CLEARANCE = 5
TOO_SMALL_RADIUS = 12.0
CLASSIC_TOO_SMALL_RADIUS = 20.0

# World scrolling
INITIAL_SCROLL_SPEED = 2.0  # px/tick
MAX_SCROLL_SPEED = 2.5
SCROLL_SPEED_INCREMENT = 0.0005  # per tick difficulty ramp
SPAWN_LOOKAHEAD = 200
INITIAL_WORLD_SPAN = 1000
PRUNE_MARGIN = 100

# Scoring
POINTS_PER_GAP = 10
BEST_SCORE_KEY = "fillTheAirBest"

# Palette (flat sky)
COL_BG_TOP = (135, 206, 235)
COL_BG_BOTTOM = (224, 246, 255)
COL_OBSTACLE = (74, 74, 74)
COL_OBSTACLE_EDGE = (51, 51, 51)
COL_FLOATING = (255, 107, 107)
COL_GAP_MARK = (255, 255, 255)
COL_BUBBLE = (235, 240, 255)
COL_BUBBLE_RIM = (200, 200, 255)
COL_GROWTH_RING = (255, 215, 0)
COL_TEXT = (40, 40, 60)

# Audio
SAMPLE_RATE = 22050
INFLATE_LOOP_SECONDS = 0.2


class GenerationPolicy(Enum):
    """How gap sizes are drawn."""

    SAFE = "safe"  # gap always fits a bubble at MAX_RADIUS plus SAFETY_MARGIN
    LOOSE = "loose"  # wide random range, no fit guarantee


class SmallBubblePolicy(Enum):
    """What happens when the bubble shrinks down to MIN_RADIUS."""

    POP = "pop"  # reaching the floor ends the session
    FLOOR = "floor"  # the floor is only a clamp


@dataclass(frozen=True)
class GameConfig:
    """Every tunable of one session, defaulting to the revised tuning."""

    field_width: float = WINDOW_WIDTH
    field_height: float = WINDOW_HEIGHT

    bubble_x: float = BUBBLE_X
    initial_radius: float = INITIAL_RADIUS
    min_radius: float = MIN_RADIUS
    max_radius: float = MAX_RADIUS
    growth_rate: float = GROWTH_RATE
    shrink_rate: float = SHRINK_RATE
    buoyancy: float = BUOYANCY
    gravity: float = GRAVITY
    max_vertical_speed: float = MAX_VERTICAL_SPEED
    drag: float = DRAG
    size_lift: float = SIZE_LIFT
    size_weight: float = SIZE_WEIGHT
    small_bubble_policy: SmallBubblePolicy = SmallBubblePolicy.FLOOR

    generation_policy: GenerationPolicy = GenerationPolicy.SAFE
    obstacle_width: float = OBSTACLE_WIDTH
    obstacle_spacing: float = OBSTACLE_SPACING
    min_obstacle_height: float = MIN_OBSTACLE_HEIGHT
    safety_margin: float = SAFETY_MARGIN
    max_gap: float = MAX_GAP
    floating_chance: float = FLOATING_CHANCE

    gap_clearance: float = GAP_CLEARANCE
    too_small_radius: float = TOO_SMALL_RADIUS

    initial_scroll_speed: float = INITIAL_SCROLL_SPEED
    max_scroll_speed: float = MAX_SCROLL_SPEED
    scroll_speed_increment: float = SCROLL_SPEED_INCREMENT
    spawn_lookahead: float = SPAWN_LOOKAHEAD
    prune_margin: float = PRUNE_MARGIN

    points_per_gap: int = POINTS_PER_GAP

    @property
    def min_safe_gap(self) -> float:
        return 2 * self.max_radius + self.safety_margin

    @property
    def min_field_height(self) -> float:
        """Smallest field that keeps both obstacles of every group on screen.

        SAFE needs room for the smallest safe gap; LOOSE needs room for its
        largest gap plus both edge margins.
        """
        if self.generation_policy is GenerationPolicy.LOOSE:
            return LOOSE_MIN_GAP + LOOSE_GAP_RANGE + 2 * LOOSE_EDGE_MARGIN
        return self.min_safe_gap + 2 * self.min_obstacle_height

    @classmethod
    def revised(cls) -> "GameConfig":
        """Safe gaps, size floor, 12 px too-small threshold."""
        return cls()

    @classmethod
    def classic(cls) -> "GameConfig":
        """The first tuning: loose gaps, the bubble pops at its minimum size, 20 px threshold."""
        return cls(
            generation_policy=GenerationPolicy.LOOSE,
            small_bubble_policy=SmallBubblePolicy.POP,
            too_small_radius=CLASSIC_TOO_SMALL_RADIUS,
        )


PRESETS = {
    "revised": GameConfig.revised,
    "classic": GameConfig.classic,
}
