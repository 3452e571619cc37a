"""Geometry and color utility functions used across the game."""

from __future__ import annotations

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def rects_overlap(
    ax: float,
    ay: float,
    aw: float,
    ah: float,
    bx: float,
    by: float,
    bw: float,
    bh: float,
) -> bool:
    """True if rectangles A and B overlap with positive area (touching edges do not count)."""
    return ax + aw > bx and ax < bx + bw and ay + ah > by and ay < by + bh


def square_rect_overlap(
    cx: float,
    cy: float,
    r: float,
    rx: float,
    ry: float,
    rw: float,
    rh: float,
) -> bool:
    """Overlap test between the bounding square of a circle and a rectangle."""
    return rects_overlap(cx - r, cy - r, 2 * r, 2 * r, rx, ry, rw, rh)


def strictly_between(value: float, lo: float, hi: float) -> bool:
    """True if lo < value < hi."""
    return lo < value < hi


def lerp_color(
    a: tuple[int, int, int], b: tuple[int, int, int], t: float
) -> tuple[int, int, int]:
    """Linear blend between two RGB colors, t in [0,1]."""
    t = clamp(t, 0.0, 1.0)
    return (
        int(a[0] * (1 - t) + b[0] * t),
        int(a[1] * (1 - t) + b[1] * t),
        int(a[2] * (1 - t) + b[2] * t),
    )


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def tone(
    freq_start: float,
    freq_end: float,
    duration: float,
    sample_rate: int,
    volume: float = 0.3,
    wave: str = "sine",
    decay: float = 4.0,
) -> np.ndarray:
    """Synthesize a mono int16 sweep from freq_start to freq_end with an exponential fade.

    Args:
        freq_start, freq_end: Sweep endpoints in Hz (exponential glide).
        duration: Length in seconds.
        sample_rate: Samples per second.
        volume: Peak amplitude in [0,1].
        wave: "sine" or "square".
        decay: Fade rate over the whole clip; 0 keeps a flat level for looping.

    Returns:
        int16 array suitable for pygame.sndarray / pygame.mixer.Sound.
    """
    n = max(1, int(sample_rate * duration))
    t = np.linspace(0.0, duration, n, endpoint=False, dtype=np.float64)
    ratio = freq_end / freq_start
    # Instantaneous frequency f(t) = f0 * ratio ** (t / duration); integrate for phase
    if abs(ratio - 1.0) < 1e-9:
        phase = 2 * np.pi * freq_start * t
    else:
        k = np.log(ratio) / duration
        phase = 2 * np.pi * freq_start * (np.exp(k * t) - 1.0) / k
    wave_data = np.sin(phase)
    if wave == "square":
        wave_data = np.sign(wave_data)
    envelope = np.exp(-decay * t / duration)
    samples = volume * wave_data * envelope
    return np.int16(np.clip(samples, -1.0, 1.0) * 32767)
