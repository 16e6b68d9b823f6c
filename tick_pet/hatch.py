"""Hatch sequencer - the gift box's one-shot incubate/reveal/hatch sequence."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from tick_pet.animation import BlendEngine
from tick_pet.signals import HatchSignal

if TYPE_CHECKING:
    from tick_pet.assets import AssetLoadError, LoadedAsset
    from tick_pet.context import PetContext
    from tick_pet.scene import Node
    from tick_pet.scheduler import TaskHandle

logger = logging.getLogger(__name__)

HATCHING_MESSAGE = "Egg wobbling... almost ready!"
HATCHING_EVENT = "Incubation sequence started"
HATCHED_MESSAGE = "Your buddy just hatched! Give them something to do"


class HatchState(Enum):
    IDLE = "idle"
    HATCHING = "hatching"
    HATCHED = "hatched"


@dataclass
class Affordance:
    """A control the user can press, e.g. the box's "Hatch" button."""

    label: str
    enabled: bool = True
    destroyed: bool = False

    def enable(self) -> None:
        if not self.destroyed:
            self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def destroy(self) -> None:
        self.enabled = False
        self.destroyed = True


class HatchSequencer:
    """IDLE -> HATCHING on ``trigger()``; HATCHING -> HATCHED when the
    reveal clip finishes. HATCHED is terminal.

    If the reveal cannot start once incubation ends, the sequencer falls
    back to IDLE and can be triggered again.
    """

    def __init__(self, ctx: PetContext) -> None:
        self._ctx = ctx
        self._cfg = ctx.config
        self.state = HatchState.IDLE
        self.model: Node | None = None
        self.animation: BlendEngine | None = None
        self.affordance: Affordance | None = None
        self.load_failed = False
        self._hatch_timer: TaskHandle | None = None
        self._sound_timer: TaskHandle | None = None

        ctx.assets.load(self._cfg.box_asset, self._on_load, self._on_load_error)

    # --- Loading ---

    def _on_load(self, asset: LoadedAsset) -> None:
        aliases = self._cfg.box_clip_aliases
        for clip in asset.clips:
            if clip.name in aliases:
                clip.name = aliases[clip.name]
        self.model = asset.model
        self._ctx.scene.add(self.model)
        self.animation = BlendEngine(asset.clips)
        self.affordance = Affordance("Hatch")
        logger.info("gift box ready (%d clips)", len(asset.clips))

    def _on_load_error(self, error: AssetLoadError) -> None:
        self.load_failed = True
        logger.error("Failed to load gift box model: %s", error)

    # --- Queries ---

    @property
    def loaded(self) -> bool:
        return self.model is not None and self.animation is not None

    def can_trigger(self) -> bool:
        return self.loaded and self.state is HatchState.IDLE

    # --- Sequence ---

    def trigger(self) -> bool:
        if not self.can_trigger():
            return False

        self.state = HatchState.HATCHING
        ui = self._ctx.ui
        ui.show_hatching_overlay(True)
        ui.set_status_message(HATCHING_MESSAGE)
        ui.log_event(HATCHING_EVENT)
        self._ctx.bus.publish(HatchSignal.HATCHING)
        if self.affordance is not None:
            self.affordance.disable()

        self._ctx.scheduler.cancel(self._hatch_timer)
        self._hatch_timer = self._ctx.scheduler.after(
            self._cfg.hatch_delay, self._on_incubated, name="hatch",
        )
        logger.info("hatching, reveal in %.1fs", self._cfg.hatch_delay)
        return True

    def _on_incubated(self) -> None:
        self._hatch_timer = None
        if self._start_reveal():
            return
        logger.warning("reveal animation could not start; box back to idle")
        self.state = HatchState.IDLE
        self._ctx.ui.show_hatching_overlay(False)
        if self.affordance is not None:
            self.affordance.enable()

    def _start_reveal(self) -> bool:
        if self.animation is None or self.model is None:
            return False
        if not self.animation.play_once(self._cfg.hatch_clip, on_finished=self._on_hatched):
            return False
        self._ctx.scheduler.cancel(self._sound_timer)
        self._sound_timer = self._ctx.scheduler.after(
            self._cfg.hatch_sound_offset, self._play_sound, name="hatch-sound",
        )
        return True

    def _play_sound(self) -> None:
        self._sound_timer = None
        if self._ctx.sound is not None:
            self._ctx.sound()

    def _on_hatched(self) -> None:
        self.state = HatchState.HATCHED
        self._cancel_timers()
        self._release_model()
        if self.affordance is not None:
            self.affordance.destroy()
            self.affordance = None

        ui = self._ctx.ui
        ui.show_hatching_overlay(False)
        ui.set_status_message(HATCHED_MESSAGE)
        self._ctx.bus.publish(HatchSignal.HATCHED)
        logger.info("box hatched")

    # --- Frame update / teardown ---

    def update(self, dt: float) -> None:
        if self.animation is not None:
            self.animation.advance(dt)

    def dispose(self) -> None:
        self._cancel_timers()
        self._release_model()
        if self.affordance is not None:
            self.affordance.destroy()
            self.affordance = None

    def _cancel_timers(self) -> None:
        self._ctx.scheduler.cancel(self._hatch_timer)
        self._ctx.scheduler.cancel(self._sound_timer)
        self._hatch_timer = None
        self._sound_timer = None

    def _release_model(self) -> None:
        if self.model is None:
            return
        self._ctx.scene.remove(self.model)
        self.model.dispose()
        self.model = None
        self.animation = None
