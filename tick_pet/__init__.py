"""tick-pet - Hatch-and-care virtual pet engine on a cooperative frame loop."""
from __future__ import annotations

from tick_pet.animation import AnimationAction, BlendEngine, LoopPolicy
from tick_pet.assets import AnimationClip, AssetLibrary, AssetLoadError, LoadedAsset
from tick_pet.config import PetConfig
from tick_pet.context import PetContext
from tick_pet.controller import Mode, PetController, PetState
from tick_pet.engine import Clock, Engine, TickContext
from tick_pet.expression import ExpressionBridge
from tick_pet.hatch import Affordance, HatchSequencer, HatchState
from tick_pet.lights import LightRig
from tick_pet.scene import Geometry, Material, Node, Scene, Vec3
from tick_pet.scheduler import Scheduler, TaskHandle, make_scheduler_system
from tick_pet.setup import Experience, build_experience
from tick_pet.signals import HatchSignal, SignalBus, make_signal_system
from tick_pet.tween import EASINGS, Fade
from tick_pet.ui import PresentationSink, StatusBoard
from tick_pet.waste import WasteMarker, WasteSpawner
from tick_pet.world import World, make_world_system

__all__ = [
    # Loop
    "Engine", "Clock", "TickContext",
    "Scheduler", "TaskHandle", "make_scheduler_system",
    "SignalBus", "HatchSignal", "make_signal_system",
    # Composition
    "PetConfig", "PetContext", "World", "make_world_system",
    "Experience", "build_experience",
    # Components
    "HatchSequencer", "HatchState", "Affordance",
    "PetController", "PetState", "Mode",
    "BlendEngine", "AnimationAction", "LoopPolicy",
    "WasteSpawner", "WasteMarker",
    "ExpressionBridge", "LightRig",
    # Collaborators
    "Scene", "Node", "Vec3", "Geometry", "Material",
    "AssetLibrary", "AnimationClip", "LoadedAsset", "AssetLoadError",
    "PresentationSink", "StatusBoard",
    "Fade", "EASINGS",
]
