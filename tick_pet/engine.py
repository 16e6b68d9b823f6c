"""Engine - frame loop, pacing, and lifecycle hooks."""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: random.Random


System = Callable[[TickContext], None]


class Clock:
    """Counts frames and accumulated simulated time.

    ``dt`` is the fixed step used when a frame does not supply its own.
    """

    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._tick_number = 0
        self._elapsed = 0.0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, dt: float | None = None) -> float:
        step = self._dt if dt is None else dt
        if step < 0:
            raise ValueError(f"dt must be >= 0, got {step}")
        self._tick_number += 1
        self._elapsed += step
        return step

    def context(self, dt: float, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=dt,
            elapsed=self._elapsed,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self) -> None:
        self._tick_number = 0
        self._elapsed = 0.0


class Engine:
    def __init__(self, tps: int = 60, seed: int | None = None, max_frame_dt: float = 0.1) -> None:
        self._clock = Clock(tps)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[TickContext], None]] = []
        self._stop_hooks: list[Callable[[TickContext], None]] = []
        self._stop_requested: bool = False
        self._max_frame_dt = max_frame_dt

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self, dt: float | None) -> None:
        step = self._clock.advance(dt)
        ctx = self._clock.context(step, self.request_stop, self._rng)
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def _hook_context(self) -> TickContext:
        return self._clock.context(0.0, self.request_stop, self._rng)

    def step(self, dt: float | None = None) -> None:
        """Run one frame. ``dt`` defaults to the clock's fixed step."""
        self._stop_requested = False
        self._tick(dt)

    def run(self, n: int) -> None:
        self._stop_requested = False
        ctx = self._hook_context()
        for hook in self._start_hooks:
            hook(ctx)

        for _ in range(n):
            self._tick(None)
            if self._stop_requested:
                break

        ctx = self._hook_context()
        for hook in self._stop_hooks:
            hook(ctx)

    def run_for(self, seconds: float) -> None:
        """Run fixed steps until ``seconds`` of simulated time have passed."""
        self.run(round(seconds * self._clock.tps))

    def run_forever(self) -> None:
        """Real-time loop: each frame's dt is the measured wall time, capped."""
        self._stop_requested = False
        ctx = self._hook_context()
        for hook in self._start_hooks:
            hook(ctx)

        target = self._clock.dt
        last = time.monotonic()
        while not self._stop_requested:
            start = time.monotonic()
            self._tick(min(start - last, self._max_frame_dt))
            last = start
            if self._stop_requested:
                break
            sleep_time = target - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        ctx = self._hook_context()
        for hook in self._stop_hooks:
            hook(ctx)
