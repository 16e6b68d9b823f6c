"""World - composition root wiring the box, the companion and user intents."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from tick_pet.controller import Mode, PetController
from tick_pet.hatch import HatchSequencer
from tick_pet.signals import HatchSignal

if TYPE_CHECKING:
    from tick_pet.assets import AssetLoadError, LoadedAsset
    from tick_pet.context import PetContext
    from tick_pet.engine import TickContext
    from tick_pet.scene import Node

logger = logging.getLogger(__name__)

GREETING_MESSAGE = "Hi! I'm awake and ready to play."
GREETING_EVENT = "Your robot friend just said hello"
ACTION_EVENT = "Action sent to your buddy"
REBOOT_MESSAGE = "Quick reboot complete. Keep caring!"


class World:
    """Owns the scene's components for one session.

    The companion and its controller are created once, after the box
    publishes ``HatchSignal.HATCHED``.
    """

    def __init__(self, ctx: PetContext) -> None:
        self.ctx = ctx
        self.box = HatchSequencer(ctx)
        self.companion: Node | None = None
        self.controller: PetController | None = None
        self._companion_loading = False
        ctx.bus.subscribe(HatchSignal.HATCHED, self._on_box_hatched)

    # --- Companion creation ---

    def _on_box_hatched(self, signal_name: str, data: dict[str, Any]) -> None:
        self.load_companion()

    def load_companion(self) -> bool:
        """Request the companion asset. False if loaded or already loading."""
        if self.controller is not None or self._companion_loading:
            return False
        self._companion_loading = True
        self.ctx.assets.load(
            self.ctx.config.companion_asset,
            self._on_companion_loaded,
            self._on_companion_error,
        )
        return True

    def _on_companion_loaded(self, asset: LoadedAsset) -> None:
        self._companion_loading = False
        if self.controller is not None:
            return
        self.companion = asset.model
        self.ctx.scene.add(asset.model)
        self.controller = PetController(self.ctx, asset.model, asset.clips)
        self.ctx.ui.set_status_message(GREETING_MESSAGE)
        self.ctx.ui.log_event(GREETING_EVENT)
        logger.info("companion online with clips %s", self.controller.animation.names())

    def _on_companion_error(self, error: AssetLoadError) -> None:
        self._companion_loading = False
        logger.error("Failed to load companion model: %s", error)

    # --- User intents ---

    def deploy(self) -> bool:
        return self.box.trigger()

    def select_mode(self, mode: Mode | str) -> bool:
        if self.controller is None:
            return False
        self.controller.set_mode(mode)
        return True

    def perform_action(self) -> bool:
        if self.controller is None:
            return False
        performed = self.controller.perform_action()
        self.ctx.ui.log_event(ACTION_EVENT)
        return performed

    def request_reset(self) -> bool:
        if self.controller is None:
            return False
        self.controller.reset()
        self.ctx.ui.set_status_message(REBOOT_MESSAGE)
        return True

    # --- Frame update / teardown ---

    def update(self, dt: float) -> None:
        self.box.update(dt)
        if self.controller is not None:
            self.controller.update(dt)

    def dispose(self) -> None:
        self.ctx.bus.unsubscribe(HatchSignal.HATCHED, self._on_box_hatched)
        self.box.dispose()
        if self.controller is not None:
            self.controller.dispose()


def make_world_system(world: World) -> Callable[[TickContext], None]:
    def world_system(ctx: TickContext) -> None:
        world.update(ctx.dt)

    return world_system
