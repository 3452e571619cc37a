"""Draws a session snapshot: background, obstacles, gap markers, bubble, and UI."""

from __future__ import annotations

import math

import pygame

from .config import (
    COL_BG_BOTTOM,
    COL_BG_TOP,
    COL_BUBBLE,
    COL_BUBBLE_RIM,
    COL_FLOATING,
    COL_GAP_MARK,
    COL_GROWTH_RING,
    COL_OBSTACLE,
    COL_OBSTACLE_EDGE,
    COL_TEXT,
)
from .entities import FLOATING, Gap, Obstacle
from .session import Phase, Snapshot
from .utils import lerp_color, scale_color


class Renderer:
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.font_big = pygame.font.SysFont(None, 56)
        self.font_small = pygame.font.SysFont(None, 26)
        self.bg_gradient = self._generate_gradient_surface()

    def _generate_gradient_surface(self) -> pygame.Surface:
        """Precompute vertical gradient as a surface for fast blitting."""
        surf = pygame.Surface((self.width, self.height))
        for y in range(self.height):
            color = lerp_color(COL_BG_TOP, COL_BG_BOTTOM, y / self.height)
            pygame.draw.line(surf, color, (0, y), (self.width, y))
        return surf

    def draw(self, surf: pygame.Surface, snap: Snapshot, time_s: float) -> None:
        self.draw_background(surf, snap.scroll_offset)
        for obstacle in snap.obstacles:
            sx = obstacle.screen_x(snap.scroll_offset)
            if -obstacle.width < sx < self.width + obstacle.width:
                self.draw_obstacle(surf, obstacle, sx)
        for gap in snap.gaps:
            sx = gap.screen_x(snap.scroll_offset)
            if -gap.width < sx < self.width + gap.width:
                self.draw_gap(surf, gap, sx)
        if not snap.bubble.disappeared:
            self.draw_bubble(surf, snap, time_s)
        self._draw_ui(surf, snap)

    def draw_background(self, surf: pygame.Surface, scroll_offset: float) -> None:
        surf.blit(self.bg_gradient, (0, 0))
        # Drifting background dots
        dots = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        for i in range(8):
            x = (scroll_offset * 0.5 + i * 50) % (self.width + 100) - 50
            y = 50 + math.sin(scroll_offset * 0.01 + i) * 20
            r = 3 + math.sin(scroll_offset * 0.02 + i) * 2
            pygame.draw.circle(dots, (255, 255, 255, 80), (int(x), int(y)), max(1, int(r)))
        surf.blit(dots, (0, 0))

    def draw_obstacle(self, surf: pygame.Surface, obstacle: Obstacle, sx: float) -> None:
        base = COL_FLOATING if obstacle.kind == FLOATING else COL_OBSTACLE
        rect = pygame.Rect(int(sx), int(obstacle.y), int(obstacle.width), int(obstacle.height))
        pygame.draw.rect(surf, base, rect)
        # Lighter right half for a cheap horizontal shading
        right = rect.copy()
        right.width = rect.width // 2
        right.x = rect.x + rect.width - right.width
        pygame.draw.rect(surf, scale_color(base, 1.25), right)

        accent = scale_color(base, 0.8)
        if obstacle.pattern == "striped":
            for y in range(rect.top + 6, rect.bottom, 12):
                pygame.draw.line(surf, accent, (rect.left, y), (rect.right - 1, y), 2)
        elif obstacle.pattern == "dotted":
            for y in range(rect.top + 8, rect.bottom - 4, 16):
                pygame.draw.circle(surf, accent, (rect.centerx, y), 3)
        elif obstacle.pattern == "banded" and rect.height > 16:
            band = pygame.Rect(rect.left, rect.top + rect.height // 2 - 4, rect.width, 8)
            pygame.draw.rect(surf, accent, band)
        pygame.draw.rect(surf, COL_OBSTACLE_EDGE, rect, 1)

    def draw_gap(self, surf: pygame.Surface, gap: Gap, sx: float) -> None:
        for y in (gap.y, gap.bottom):
            x = sx
            while x < sx + gap.width:
                end = min(x + 5, sx + gap.width)
                pygame.draw.line(surf, COL_GAP_MARK, (int(x), int(y)), (int(end), int(y)), 2)
                x += 10

    def draw_bubble(self, surf: pygame.Surface, snap: Snapshot, time_s: float) -> None:
        b = snap.bubble
        cx, cy, r = int(b.x), int(b.y), max(1, int(b.radius))

        size = r * 2 + 8
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        c = size // 2
        pygame.draw.circle(layer, (0, 0, 0, 50), (c + 2, c + 2), r)
        pygame.draw.circle(layer, (*COL_BUBBLE, 200), (c, c), r)
        pygame.draw.circle(
            layer, (255, 255, 255, 160), (c - int(r * 0.4), c - int(r * 0.4)), max(1, int(r * 0.3))
        )
        pygame.draw.circle(layer, (*COL_BUBBLE_RIM, 220), (c, c), r, 2)
        surf.blit(layer, (cx - c, cy - c))

        if b.is_growing and snap.phase is Phase.PLAYING:
            pulse = 0.5 + math.sin(time_s * 10.0) * 0.2
            ring = pygame.Surface((size + 12, size + 12), pygame.SRCALPHA)
            rc = (size + 12) // 2
            pygame.draw.circle(ring, (*COL_GROWTH_RING, int(255 * pulse)), (rc, rc), r + 5, 3)
            surf.blit(ring, (cx - rc, cy - rc))

    def _draw_ui(self, surf: pygame.Surface, snap: Snapshot) -> None:
        score = self.font_small.render(f"Score: {snap.score}", True, COL_TEXT)
        best = self.font_small.render(f"Best: {snap.best_score}", True, COL_TEXT)
        surf.blit(score, (12, 10))
        surf.blit(best, best.get_rect(topright=(self.width - 12, 10)))

        if snap.phase is Phase.START:
            self._overlay(surf, "Fill the Air", ["Hold mouse or Space to inflate", "Click or Enter to start"])
        elif snap.phase is Phase.GAME_OVER:
            self._overlay(
                surf,
                "Game Over",
                [snap.reason or "", f"Score: {snap.score}", "Click or Enter to play again"],
            )

    def _overlay(self, surf: pygame.Surface, title: str, lines: list[str]) -> None:
        shade = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        shade.fill((255, 255, 255, 150))
        surf.blit(shade, (0, 0))
        mid = self.height // 2
        t = self.font_big.render(title, True, COL_TEXT)
        surf.blit(t, t.get_rect(center=(self.width // 2, mid - 60)))
        for i, line in enumerate(lines):
            s = self.font_small.render(line, True, COL_TEXT)
            surf.blit(s, s.get_rect(center=(self.width // 2, mid + i * 32)))
