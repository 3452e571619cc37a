"""Pygame frontend: window, input, fixed-step loop, and command-line entry."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Sequence

import pygame

from .audio import SoundBank
from .config import FPS, PRESETS, WINDOW_HEIGHT, WINDOW_WIDTH, GameConfig
from .render import Renderer
from .scoring import JsonScoreStore, MemoryScoreStore, ScoreStore
from .session import GameSession, Phase

logger = logging.getLogger(__name__)

STEP = 1.0 / FPS
MAX_STEPS_PER_FRAME = 5
DEFAULT_SCORE_FILE = Path.home() / ".fill_the_air" / "best.json"


class Game:
    """Top-level app: feeds input to the session, ticks it, and draws snapshots."""

    def __init__(
        self,
        config: GameConfig | None = None,
        store: ScoreStore | None = None,
        seed: int | None = None,
        sound: bool = True,
    ) -> None:
        pygame.init()
        self.sounds = SoundBank(enabled=sound)
        self.session = GameSession(config, store=store, seed=seed, listeners=[self.sounds])
        cfg = self.session.config
        self.width, self.height = int(cfg.field_width), int(cfg.field_height)
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.DOUBLEBUF)
        pygame.display.set_caption("Fill the Air")
        self.clock = pygame.time.Clock()
        self.renderer = Renderer(self.width, self.height)
        self.time_accum = 0.0
        self.step_accum = 0.0

    def press(self) -> None:
        """Primary control went down: start, restart, or begin inflating."""
        phase = self.session.phase
        if phase is Phase.START:
            self.session.start()
        elif phase is Phase.GAME_OVER:
            self.session.restart()
        else:
            self.session.set_growing(True)

    def release(self) -> None:
        self.session.set_growing(False)

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_SPACE, pygame.K_UP, pygame.K_w):
                self.press()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if self.session.phase is Phase.START:
                    self.session.start()
                elif self.session.phase is Phase.GAME_OVER:
                    self.session.restart()
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.type == pygame.KEYUP:
            if event.key in (pygame.K_SPACE, pygame.K_UP, pygame.K_w):
                self.release()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.press()
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.release()
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.release()

    def update(self, dt: float) -> int:
        """Advance the session by whole fixed steps covered by dt. Returns steps run."""
        self.time_accum += dt
        self.step_accum += dt
        steps = int(self.step_accum / STEP)
        if steps >= MAX_STEPS_PER_FRAME:
            # Long stall: drop the backlog rather than fast-forward
            steps = MAX_STEPS_PER_FRAME
            self.step_accum = 0.0
        else:
            self.step_accum -= steps * STEP
        for _ in range(steps):
            self.session.tick()
        return steps

    def draw(self) -> None:
        self.renderer.draw(self.screen, self.session.snapshot(), self.time_accum)
        pygame.display.flip()

    def run(self) -> None:
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.sounds.close()
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            self.update(dt)
            self.draw()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fill-the-air", description="Inflate the bubble, mind the gaps.")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="revised", help="tuning preset")
    parser.add_argument("--seed", type=int, default=None, help="seed for obstacle generation")
    parser.add_argument("--width", type=int, default=WINDOW_WIDTH)
    parser.add_argument("--height", type=int, default=WINDOW_HEIGHT)
    parser.add_argument("--score-file", type=Path, default=DEFAULT_SCORE_FILE, help="where the best score is kept")
    parser.add_argument("--no-save", action="store_true", help="keep the best score in memory only")
    parser.add_argument("--mute", action="store_true", help="disable sound")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = PRESETS[args.preset]()
    config = dataclasses.replace(config, field_width=args.width, field_height=args.height)
    store: ScoreStore = MemoryScoreStore() if args.no_save else JsonScoreStore(args.score_file)
    logger.info("preset=%s seed=%s", args.preset, args.seed)
    Game(config, store=store, seed=args.seed, sound=not args.mute).run()
