"""Easing functions and time-based value ramps for cross-fades."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - (-2 * t + 2) ** 2 / 2


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
}


@dataclass
class Fade:
    """Ramp from ``start_val`` to ``end_val`` over ``duration`` seconds.

    A zero duration completes on the first ``advance``.
    """

    start_val: float
    end_val: float
    duration: float
    elapsed: float = 0.0
    easing: str = "linear"

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if self.easing not in EASINGS:
            raise KeyError(f"Unknown easing: '{self.easing}'")

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    @property
    def value(self) -> float:
        if self.duration == 0 or self.done:
            return self.end_val
        t = self.elapsed / self.duration
        eased_t = EASINGS[self.easing](t)
        return self.start_val + (self.end_val - self.start_val) * eased_t

    def advance(self, dt: float) -> float:
        """Move the ramp forward by ``dt`` and return the new value."""
        self.elapsed = min(self.elapsed + dt, self.duration)
        return self.value
