import random

from fill_the_air.config import FLOATING_MARGIN, GameConfig, GenerationPolicy
from fill_the_air.entities import BLOCKING, FLOATING
from fill_the_air.generator import ObstacleGenerator


def test_safe_gap_height_range_for_600_field() -> None:
    gen = ObstacleGenerator(GameConfig(max_radius=80), 600, seed=1)
    assert gen.gap_height_range() == (180, 300)
    for i in range(200):
        group = gen.generate(400 + i * 200)
        assert 180 <= group.gap.height <= 300


def test_safe_gaps_always_fit_a_full_bubble() -> None:
    cfg = GameConfig()
    for seed in range(300):
        gen = ObstacleGenerator(cfg, cfg.field_height, seed=seed)
        for i in range(10):
            gap = gen.generate(i * 200).gap
            assert gap.height >= 2 * cfg.max_radius + cfg.safety_margin


def test_safe_obstacles_fill_the_rest_of_the_column() -> None:
    cfg = GameConfig()
    gen = ObstacleGenerator(cfg, 600, seed=11)
    for i in range(100):
        group = gen.generate(i * 200.0)
        blocking = [o for o in group.obstacles if o.kind == BLOCKING]
        assert len(blocking) == 2
        top, bottom = blocking
        assert top.y == 0 and top.height == group.gap.y
        assert bottom.y == group.gap.bottom
        assert abs(bottom.y + bottom.height - 600) < 1e-9
        assert top.height >= cfg.min_obstacle_height
        assert bottom.height >= cfg.min_obstacle_height - 1e-9
        assert all(o.x == group.x for o in blocking)
        assert group.gap.x == group.x
        assert group.gap.width == cfg.obstacle_width


def test_floating_obstacle_offset_and_chance() -> None:
    always = ObstacleGenerator(GameConfig(floating_chance=1.0), 600, seed=3)
    never = ObstacleGenerator(GameConfig(floating_chance=0.0), 600, seed=3)
    for i in range(50):
        group = always.generate(i * 200.0)
        floating = [o for o in group.obstacles if o.kind == FLOATING]
        assert len(floating) == 1
        f = floating[0]
        assert f.x == group.x + 100
        assert (f.width, f.height) == (40, 20)
        assert FLOATING_MARGIN <= f.y < 600 - FLOATING_MARGIN
        assert not any(o.kind == FLOATING for o in never.generate(i * 200.0).obstacles)


def test_floating_shows_up_about_thirty_percent_of_the_time() -> None:
    gen = ObstacleGenerator(GameConfig(), 600, seed=5)
    hits = sum(
        any(o.kind == FLOATING for o in gen.generate(i * 200.0).obstacles) for i in range(2000)
    )
    assert 480 < hits < 720


def test_same_seed_same_world() -> None:
    a = ObstacleGenerator(GameConfig(), 600, seed=42)
    b = ObstacleGenerator(GameConfig(), 600, seed=42)
    for i in range(30):
        ga, gb = a.generate(i * 200.0), b.generate(i * 200.0)
        assert ga.gap == gb.gap
        assert ga.obstacles == gb.obstacles


def test_patterns_never_change_geometry() -> None:
    a = ObstacleGenerator(GameConfig(), 600, seed=42)
    b = ObstacleGenerator(GameConfig(), 600, seed=42)
    b.pattern_rng = random.Random(999)
    for i in range(30):
        ga, gb = a.generate(i * 200.0), b.generate(i * 200.0)
        assert ga.gap == gb.gap
        assert [(o.x, o.y, o.width, o.height, o.kind) for o in ga.obstacles] == [
            (o.x, o.y, o.width, o.height, o.kind) for o in gb.obstacles
        ]


def test_loose_policy_range_and_no_guarantee() -> None:
    cfg = GameConfig(generation_policy=GenerationPolicy.LOOSE)
    gen = ObstacleGenerator(cfg, 600, seed=8)
    heights = [gen.generate(i * 200.0).gap.height for i in range(300)]
    assert all(140 <= h < 260 for h in heights)
    # Some loose gaps are too tight for a fully inflated bubble
    assert any(h < cfg.min_safe_gap for h in heights)


def test_loose_policy_gap_position() -> None:
    cfg = GameConfig.classic()
    gen = ObstacleGenerator(cfg, 600, seed=9)
    for i in range(200):
        gap = gen.generate(i * 200.0).gap
        assert 50 <= gap.y
        assert gap.bottom <= 600 - 50
