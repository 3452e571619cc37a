"""Synthesized sound effects driven by session events."""

from __future__ import annotations

import logging

import numpy as np
import pygame

from .config import INFLATE_LOOP_SECONDS, SAMPLE_RATE
from .utils import tone

logger = logging.getLogger(__name__)


def make_sound(samples: np.ndarray) -> pygame.mixer.Sound:
    """Wrap mono int16 samples in a Sound matching the mixer's channel count."""
    init = pygame.mixer.get_init()
    channels = init[2] if init else 1
    if channels > 1:
        samples = np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))
    return pygame.sndarray.make_sound(samples)


class InflateLoop:
    """Owned handle for the looping inflate hum; start/stop are idempotent."""

    def __init__(self, sound: pygame.mixer.Sound) -> None:
        self.sound = sound
        self.channel: pygame.mixer.Channel | None = None

    @property
    def active(self) -> bool:
        return self.channel is not None

    def start(self) -> None:
        if self.channel is None:
            self.channel = self.sound.play(loops=-1, fade_ms=50)

    def stop(self) -> None:
        if self.channel is not None:
            self.channel.fadeout(100)
            self.channel = None


class SoundBank:
    """
    Session listener that plays a tap and hum while inflating and a pop on game over.

    If the mixer cannot be opened the bank stays silent; every handler is
    then a no-op.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = False
        self.inflate: InflateLoop | None = None
        if not enabled:
            return
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            rate = pygame.mixer.get_init()[0]
            self.tap = make_sound(tone(800, 400, 0.1, rate, volume=0.2))
            self.pop = make_sound(tone(300, 50, 0.2, rate, volume=0.3, wave="square"))
            self.inflate = InflateLoop(
                make_sound(tone(170, 170, INFLATE_LOOP_SECONDS, rate, volume=0.1, decay=0.0))
            )
        except pygame.error as exc:
            logger.warning("audio disabled: %s", exc)
            return
        self.enabled = True

    def on_grow_start(self) -> None:
        if not self.enabled:
            return
        self.tap.play()
        self.inflate.start()

    def on_grow_stop(self) -> None:
        if self.enabled:
            self.inflate.stop()

    def on_terminal(self, reason: str) -> None:
        if not self.enabled:
            return
        self.inflate.stop()
        self.pop.play()

    def close(self) -> None:
        if self.inflate is not None:
            self.inflate.stop()
