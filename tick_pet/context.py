"""PetContext - the shared collaborators handed to every component."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from tick_pet.config import PetConfig

if TYPE_CHECKING:
    from tick_pet.assets import AssetProvider
    from tick_pet.expression import LightSink
    from tick_pet.scene import Scene
    from tick_pet.scheduler import Scheduler
    from tick_pet.signals import SignalBus
    from tick_pet.ui import PresentationSink


@dataclass
class PetContext:
    """Built once per session and passed into constructors."""

    scene: Scene
    scheduler: Scheduler
    bus: SignalBus
    assets: AssetProvider
    ui: PresentationSink
    lights: LightSink | None = None
    rng: random.Random = field(default_factory=random.Random)
    config: PetConfig = field(default_factory=PetConfig)
    sound: Callable[[], None] | None = None  # hatch "pop" cue
