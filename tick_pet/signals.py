"""In-memory pub/sub signal bus with per-tick flush semantics."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from tick_pet.engine import TickContext

_Handler = Callable[[str, dict[str, Any]], None]


class HatchSignal(str, Enum):
    """Events published by the hatch sequencer."""

    HATCHING = "hatching"
    HATCHED = "hatched"


SignalName = Union[str, HatchSignal]


def _key(signal_name: SignalName) -> str:
    if isinstance(signal_name, Enum):
        return signal_name.value
    return signal_name


class SignalBus:
    """Publishers queue signals; subscribers see them on ``flush()``.

    Handlers receive ``(signal_name, data)``. Signals published while a
    flush is running are delivered on the next flush.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: SignalName, handler: _Handler) -> None:
        self._subscribers.setdefault(_key(signal_name), []).append(handler)

    def unsubscribe(self, signal_name: SignalName, handler: _Handler) -> None:
        handlers = self._subscribers.get(_key(signal_name))
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: SignalName, **data: Any) -> None:
        self._queue.append((_key(signal_name), data))

    def pending(self) -> list[str]:
        return [name for name, _ in self._queue]

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()


def make_signal_system(bus: SignalBus) -> Callable[[TickContext], None]:
    def signal_system(ctx: TickContext) -> None:
        bus.flush()

    return signal_system
