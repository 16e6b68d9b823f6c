"""Presentation sink protocol and a headless status board."""
from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class PresentationSink(Protocol):
    """Capabilities the core calls on the UI. The core never reads back."""

    def on_mode_change(self, mode: str) -> None: ...

    def update_battery(self, percent: float) -> None: ...

    def set_status_message(self, text: str) -> None: ...

    def show_hatching_overlay(self, visible: bool) -> None: ...

    def log_event(self, text: str) -> None: ...

    def enable_reset(self, enabled: bool) -> None: ...


def format_mode(mode: str | Enum) -> str:
    name = mode.value if isinstance(mode, Enum) else mode
    return name[:1].upper() + name[1:]


class StatusBoard:
    """Headless control-panel state: what a screen would show right now.

    ``events`` holds the newest ``log_size`` entries, newest first, each
    prefixed with an ``HH:MM`` stamp.
    """

    LOW_BATTERY = 30

    def __init__(self, log_size: int = 5, now: Callable[[], datetime] = datetime.now) -> None:
        self._now = now
        self.events: deque[str] = deque(maxlen=log_size)
        self.mode_label = "Feed"
        self.battery = 100.0
        self.status = ""
        self.overlay_visible = False
        self.reset_enabled = False
        self.set_status_message("Tap deploy to wake your bot.", log=False)

    @property
    def battery_text(self) -> str:
        return f"{round(self.battery)}%"

    @property
    def battery_low(self) -> bool:
        return self.battery < self.LOW_BATTERY

    def on_mode_change(self, mode: str) -> None:
        self.mode_label = format_mode(mode)
        self.log_event(f"{self.mode_label} mode armed")

    def update_battery(self, percent: float) -> None:
        self.battery = max(0.0, min(100.0, percent))

    def set_status_message(self, text: str, log: bool = True) -> None:
        self.status = text
        if log:
            self.log_event(text)

    def show_hatching_overlay(self, visible: bool) -> None:
        self.overlay_visible = visible

    def log_event(self, text: str) -> None:
        if not text:
            return
        logger.debug("event: %s", text)
        self.events.appendleft(f"{self._now():%H:%M} - {text}")

    def enable_reset(self, enabled: bool) -> None:
        self.reset_enabled = enabled
