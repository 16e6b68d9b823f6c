"""Pet lifecycle controller - battery economy, modes, actions and death."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from tick_pet.animation import BlendEngine
from tick_pet.expression import ExpressionBridge
from tick_pet.waste import WasteSpawner

if TYPE_CHECKING:
    from tick_pet.assets import AnimationClip
    from tick_pet.context import PetContext
    from tick_pet.scene import Node

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    FEED = "feed"
    PLAY = "play"
    CLEAN = "clean"


ACTION_CLIPS: dict[Mode, str] = {
    Mode.FEED: "Jump",
    Mode.PLAY: "Dance",
    Mode.CLEAN: "ThumbsUp",
}

ACTION_MESSAGES: dict[Mode, str] = {
    Mode.FEED: "Battery topped up!",
    Mode.PLAY: "Playtime! Mini dance unlocked",
    Mode.CLEAN: "All tidy again",
}

LOW_POWER_MESSAGE = "Battery getting low - snack time?"
DEATH_MESSAGE = "Oh no! Your buddy powered down. Reset to revive"
RESET_MESSAGE = "All better! Choose a mode to keep playing"


@dataclass
class PetState:
    battery_level: float = 100.0
    is_alive: bool = True
    mode: Mode = Mode.FEED
    low_power_notified: bool = False


class PetController:
    """Owns ``PetState`` and drives animation, expression and waste from it.

    ``update`` must run once per frame; state changes made there (drain,
    death) are applied before the blend engine advances, so a pose change
    shows up in the same frame.
    """

    def __init__(self, ctx: PetContext, model: Node, clips: Iterable[AnimationClip]) -> None:
        self._ctx = ctx
        self._cfg = ctx.config
        self.model = model
        self.state = PetState(battery_level=self._cfg.battery_max)

        self.animation = BlendEngine(
            clips,
            one_shot=self._cfg.one_shot_clips,
            is_alive=lambda: self.state.is_alive,
            death_clip=self._cfg.death_clip,
        )
        self.expression = ExpressionBridge(
            model,
            ctx.lights,
            face_node=self._cfg.face_node,
            sad_target=self._cfg.sad_target,
            battery_max=self._cfg.battery_max,
        )
        self.waste = WasteSpawner(
            ctx.scheduler, ctx.scene, model,
            is_alive=lambda: self.state.is_alive,
            rng=ctx.rng,
            config=self._cfg,
        )

        self.animation.fade_to_action(self._cfg.default_clip, self._cfg.resume_fade)
        self.waste.start()
        self._sync_ui(with_mode=True)

    # --- Queries ---

    @property
    def battery_level(self) -> float:
        return self.state.battery_level

    @property
    def is_alive(self) -> bool:
        return self.state.is_alive

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def low_power_notified(self) -> bool:
        return self.state.low_power_notified

    # --- User intents ---

    def set_mode(self, mode: Mode | str) -> None:
        self.state.mode = Mode(mode)
        self._sync_ui(with_mode=True)

    def perform_action(self) -> bool:
        """Run the current mode's action. False while dead."""
        if not self.state.is_alive:
            return False

        mode = self.state.mode
        if mode is Mode.FEED:
            self._feed()
        elif mode is Mode.CLEAN:
            cleared = self.waste.clear_all()
            logger.debug("cleaned %d waste markers", cleared)
        self._play_one_shot(ACTION_CLIPS[mode])
        self._ctx.ui.set_status_message(ACTION_MESSAGES[mode])
        return True

    def reset(self) -> None:
        cfg = self._cfg
        self.waste.stop()
        self.waste.clear_all()

        self.state.battery_level = cfg.battery_max
        self.state.is_alive = True
        self.state.mode = Mode.FEED
        self.state.low_power_notified = False
        self.expression.apply(self.state.battery_level)
        self.animation.fade_to_action(cfg.default_clip, cfg.resume_fade)
        self._sync_ui(with_mode=True)

        self._ctx.ui.enable_reset(False)
        self._ctx.ui.set_status_message(RESET_MESSAGE)
        logger.info("companion reset")

        self.waste.start()

    # --- Frame update ---

    def update(self, dt: float) -> None:
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        if self.state.is_alive:
            level = max(0.0, self.state.battery_level - self._cfg.drain_rate * dt)
            self.state.battery_level = level
            self._sync_ui()
            self.expression.apply(level)
            self._check_low_power()
            if level <= 0.0:
                self._die()

        self.animation.advance(dt)

    def dispose(self) -> None:
        self.waste.stop()
        self.waste.clear_all()

    # --- Internal ---

    def _feed(self) -> None:
        self.state.battery_level = self._cfg.battery_max
        self.expression.update_expression(self.state.battery_level)
        self._check_low_power()
        self._sync_ui()

    def _play_one_shot(self, name: str) -> None:
        self.animation.fade_to_action(name, self._cfg.action_fade, on_finished=self._resume_default)

    def _resume_default(self) -> None:
        if self.state.is_alive:
            self.animation.fade_to_action(self._cfg.default_clip, self._cfg.resume_fade)

    def _check_low_power(self) -> None:
        state = self.state
        if (
            state.battery_level <= self._cfg.low_power_threshold
            and state.is_alive
            and not state.low_power_notified
        ):
            state.low_power_notified = True
            self._ctx.ui.set_status_message(LOW_POWER_MESSAGE)
        elif state.battery_level > self._cfg.low_power_rearm and state.low_power_notified:
            state.low_power_notified = False

    def _die(self) -> None:
        self.state.battery_level = 0.0
        self.state.is_alive = False
        self.state.low_power_notified = False
        self.waste.clear_all()
        self.animation.fade_to_action(self._cfg.death_clip, self._cfg.action_fade)
        self._ctx.ui.set_status_message(DEATH_MESSAGE)
        self._ctx.ui.enable_reset(True)
        logger.info("companion powered down")

    def _sync_ui(self, with_mode: bool = False) -> None:
        self._ctx.ui.update_battery(self.state.battery_level)
        if with_mode:
            self._ctx.ui.on_mode_change(self.state.mode.value)
