"""Shared fixtures: a fully wired PetContext with a recording UI."""
from __future__ import annotations

import random

import pytest

from tick_pet import (
    AssetLibrary, LightRig, PetConfig, PetContext, Scene, Scheduler, SignalBus,
)
from tick_pet.assets import register_builtin_assets


class RecordingSink:
    """Presentation sink that remembers every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def on_mode_change(self, mode: str) -> None:
        self.calls.append(("mode", mode))

    def update_battery(self, percent: float) -> None:
        self.calls.append(("battery", percent))

    def set_status_message(self, text: str) -> None:
        self.calls.append(("status", text))

    def show_hatching_overlay(self, visible: bool) -> None:
        self.calls.append(("overlay", visible))

    def log_event(self, text: str) -> None:
        self.calls.append(("log", text))

    def enable_reset(self, enabled: bool) -> None:
        self.calls.append(("reset", enabled))

    def of(self, kind: str) -> list[object]:
        return [value for k, value in self.calls if k == kind]

    def last(self, kind: str) -> object:
        values = self.of(kind)
        return values[-1] if values else None


def make_ctx(config: PetConfig | None = None, seed: int = 7, builtin: bool = True) -> PetContext:
    cfg = config if config is not None else PetConfig()
    scene = Scene()
    scheduler = Scheduler()
    library = AssetLibrary(scheduler)
    if builtin:
        register_builtin_assets(library, cfg.box_asset, cfg.companion_asset)
    sounds: list[float] = []
    ctx = PetContext(
        scene=scene,
        scheduler=scheduler,
        bus=SignalBus(),
        assets=library,
        ui=RecordingSink(),
        lights=LightRig(scene, floor=cfg.light_floor),
        rng=random.Random(seed),
        config=cfg,
        sound=lambda: sounds.append(scheduler.now),
    )
    ctx.sounds = sounds  # type: ignore[attr-defined]
    return ctx


@pytest.fixture
def ctx() -> PetContext:
    return make_ctx()


@pytest.fixture
def make_context():
    return make_ctx
