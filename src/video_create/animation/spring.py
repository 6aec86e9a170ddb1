"""Critically damped spring easing evaluated in closed form.

Every value is a pure function of its arguments, so a frame reached by
seeking backwards renders exactly like the same frame reached by playing
forwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

SETTLE_THRESHOLD = 0.005


@dataclass(slots=True, frozen=True)
class SpringConfig:
    stiffness: float = 100.0
    mass: float = 1.0

    @property
    def omega(self) -> float:
        return math.sqrt(self.stiffness / self.mass)


DEFAULT_SPRING = SpringConfig()


def _response(t: float, omega: float) -> float:
    # unit step response of a critically damped oscillator
    return 1.0 - (1.0 + omega * t) * math.exp(-omega * t)


@lru_cache(maxsize=128)
def natural_duration_in_frames(fps: float, config: SpringConfig = DEFAULT_SPRING) -> int:
    """Frames the spring needs to come within SETTLE_THRESHOLD of its target."""
    if fps <= 0:
        raise ValueError("fps must be positive")
    omega = config.omega
    low, high = 0.0, 100.0 / omega
    for _ in range(80):
        mid = (low + high) / 2.0
        if 1.0 - _response(mid, omega) < SETTLE_THRESHOLD:
            high = mid
        else:
            low = mid
    return max(1, math.ceil(high * fps))


def spring(
    frame: float,
    fps: float,
    from_value: float = 0.0,
    to_value: float = 1.0,
    duration_in_frames: int | None = None,
    config: SpringConfig = DEFAULT_SPRING,
) -> float:
    """Ease from ``from_value`` to ``to_value``.

    When ``duration_in_frames`` is given the spring's natural settle time is
    stretched onto that window and normalized, so the window's last frame
    lands exactly on ``to_value``.
    """
    if fps <= 0:
        raise ValueError("fps must be positive")
    if duration_in_frames is not None and duration_in_frames <= 0:
        raise ValueError("duration_in_frames must be positive")
    if config.stiffness <= 0 or config.mass <= 0:
        raise ValueError("spring stiffness and mass must be positive")

    natural = natural_duration_in_frames(fps, config)
    window = natural if duration_in_frames is None else duration_in_frames
    if frame <= 0:
        return from_value
    if frame >= window:
        return to_value

    omega = config.omega
    seconds = (frame * natural / window) / fps
    progress = _response(seconds, omega) / _response(natural / fps, omega)
    return from_value + (to_value - from_value) * progress
