"""Scheduler - cooperative one-shot and periodic timers on simulated time."""
from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_pet.engine import TickContext

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TaskHandle:
    """A scheduled callback. Periodic when ``interval`` is set."""

    name: str
    due: float
    callback: Callable[[], None] = field(repr=False)
    interval: float | None = None
    cancelled: bool = False
    fired: int = 0

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    @property
    def pending(self) -> bool:
        """True while the task can still fire."""
        if self.cancelled:
            return False
        return self.periodic or self.fired == 0

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Single queue of deferred work, advanced by the frame loop.

    Callbacks run to completion, in due-time order, inside ``advance``.
    Ties fire in scheduling order.
    """

    def __init__(self) -> None:
        self._now: float = 0.0
        self._seq: int = 0
        self._heap: list[tuple[float, int, TaskHandle]] = []

    @property
    def now(self) -> float:
        return self._now

    def after(self, delay: float, callback: Callable[[], None], name: str = "timer") -> TaskHandle:
        """Run ``callback`` once, ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        handle = TaskHandle(name=name, due=self._now + delay, callback=callback)
        self._push(handle)
        return handle

    def every(self, interval: float, callback: Callable[[], None], name: str = "periodic") -> TaskHandle:
        """Run ``callback`` every ``interval`` seconds, first after one interval."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TaskHandle(
            name=name, due=self._now + interval, callback=callback, interval=interval,
        )
        self._push(handle)
        return handle

    def cancel(self, handle: TaskHandle | None) -> None:
        """Cancel ``handle`` if given. Safe to call repeatedly."""
        if handle is not None:
            handle.cancel()

    def pending(self) -> list[TaskHandle]:
        """Live tasks in due order."""
        return [h for _, _, h in sorted(self._heap) if h.pending]

    def advance(self, dt: float) -> int:
        """Move time forward by ``dt`` and fire everything now due.

        Returns the number of callbacks invoked.
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._now += dt
        fired = 0
        while self._heap and self._heap[0][0] <= self._now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired += 1
            fired += 1
            logger.debug("firing %s at t=%.3f", handle.name, self._now)
            handle.callback()
            if handle.periodic and not handle.cancelled:
                handle.due += handle.interval
                self._push(handle)
        return fired

    def clear(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()

    def _push(self, handle: TaskHandle) -> None:
        self._seq += 1
        heapq.heappush(self._heap, (handle.due, self._seq, handle))


def make_scheduler_system(scheduler: Scheduler) -> Callable[[TickContext], None]:
    """Return a system that advances ``scheduler`` by the frame delta."""

    def scheduler_system(ctx: TickContext) -> None:
        scheduler.advance(ctx.dt)

    return scheduler_system
