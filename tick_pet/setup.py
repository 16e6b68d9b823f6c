"""Build the complete pet experience."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tick_pet.assets import AssetLibrary, AssetProvider, register_builtin_assets
from tick_pet.config import PetConfig
from tick_pet.context import PetContext
from tick_pet.engine import Engine
from tick_pet.lights import LightRig
from tick_pet.scene import Scene
from tick_pet.scheduler import Scheduler, make_scheduler_system
from tick_pet.signals import SignalBus, make_signal_system
from tick_pet.ui import PresentationSink, StatusBoard
from tick_pet.world import World, make_world_system


@dataclass
class Experience:
    """Holds the engine, the world and the shared context."""

    engine: Engine
    world: World
    ctx: PetContext
    lights: LightRig

    @property
    def scene(self) -> Scene:
        return self.ctx.scene

    @property
    def ui(self) -> PresentationSink:
        return self.ctx.ui


def build_experience(
    config: PetConfig | None = None,
    seed: int | None = None,
    ui: PresentationSink | None = None,
    assets: AssetProvider | None = None,
    sound: Callable[[], None] | None = None,
    asset_latency: float = 0.0,
) -> Experience:
    """Wire up scene, timers, signals, world and the frame loop.

    Without ``assets`` the built-in procedural box and robot are used.
    """
    cfg = config if config is not None else PetConfig()
    engine = Engine(tps=cfg.tps, seed=seed, max_frame_dt=cfg.max_frame_dt)

    scene = Scene()
    scheduler = Scheduler()
    bus = SignalBus()
    lights = LightRig(scene, floor=cfg.light_floor)
    if ui is None:
        ui = StatusBoard(log_size=cfg.event_log_size)
    if assets is None:
        library = AssetLibrary(scheduler, latency=asset_latency)
        register_builtin_assets(library, cfg.box_asset, cfg.companion_asset)
        assets = library

    ctx = PetContext(
        scene=scene,
        scheduler=scheduler,
        bus=bus,
        assets=assets,
        ui=ui,
        lights=lights,
        rng=engine.random,
        config=cfg,
        sound=sound,
    )
    world = World(ctx)

    # Systems (order matters: timers, then state + animation, then signals)
    engine.add_system(make_scheduler_system(scheduler))   # 1
    engine.add_system(make_world_system(world))           # 2
    engine.add_system(make_signal_system(bus))            # 3

    return Experience(engine=engine, world=world, ctx=ctx, lights=lights)
