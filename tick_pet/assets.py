"""Asset provider - resolves asset paths to models with animation clips."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Protocol

from tick_pet.scene import Geometry, Material, Node, Vec3

if TYPE_CHECKING:
    from tick_pet.scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class AnimationClip:
    """A named, timed pose sequence. Only its length matters here."""

    name: str
    duration: float

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"Clip '{self.name}' needs a positive duration, got {self.duration}")


@dataclass
class LoadedAsset:
    path: str
    model: Node
    clips: list[AnimationClip] = field(default_factory=list)

    def clip(self, name: str) -> AnimationClip | None:
        for clip in self.clips:
            if clip.name == name:
                return clip
        return None


class AssetLoadError(Exception):
    """Raised (and handed to ``on_error``) when an asset cannot be resolved."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


OnLoad = Callable[[LoadedAsset], None]
OnError = Callable[[AssetLoadError], None]


class AssetProvider(Protocol):
    def load(self, path: str, on_load: OnLoad, on_error: OnError) -> None: ...


class AssetLibrary:
    """In-memory asset provider backed by registered factories.

    ``load`` never answers synchronously: the result is delivered through
    the scheduler ``latency`` seconds later, so callers observe the same
    ordering as with a real asynchronous loader.
    """

    def __init__(self, scheduler: Scheduler, latency: float = 0.0) -> None:
        self._scheduler = scheduler
        self._latency = latency
        self._factories: dict[str, Callable[[], LoadedAsset]] = {}
        self.requests: list[str] = []

    def register(self, path: str, factory: Callable[[], LoadedAsset]) -> None:
        """Register a factory. Overwrites if already registered."""
        self._factories[path] = factory

    def has(self, path: str) -> bool:
        return path in self._factories

    def load(self, path: str, on_load: OnLoad, on_error: OnError) -> None:
        self.requests.append(path)

        def _resolve() -> None:
            factory = self._factories.get(path)
            if factory is None:
                on_error(AssetLoadError(path, f"Unknown asset: '{path}'"))
                return
            try:
                asset = factory()
            except Exception as exc:
                on_error(AssetLoadError(path, f"Failed to build '{path}': {exc}"))
                return
            on_load(asset)

        self._scheduler.after(self._latency, _resolve, name=f"load:{path}")


# --- Built-in procedural assets ---

ROBOT_CLIPS: dict[str, float] = {
    "Idle": 2.0,
    "Walking": 1.2,
    "Running": 0.8,
    "Dance": 3.2,
    "Death": 1.6,
    "Sitting": 1.0,
    "Standing": 1.0,
    "Jump": 1.1,
    "Yes": 1.4,
    "No": 1.4,
    "Wave": 1.8,
    "Punch": 0.9,
    "ThumbsUp": 1.5,
}

BOX_PALETTE = ["#f9b4a5", "#ffcfd8", "#fbe4cf", "#8cd3c4", "#c9b5ff"]
ROBOT_PALETTE = ["#ffb4a2", "#ffc6a5", "#ffd97d", "#9adbc5", "#a5b4ff", "#ffcad4"]


def make_gift_box(path: str = "gift_box") -> LoadedAsset:
    root = Node("GiftBox", scale=0.52)
    for i, part in enumerate(("Base", "Lid", "Ribbon")):
        root.add(Node(
            part,
            position=Vec3(0.0, 0.4 * i, 0.0),
            geometry=Geometry("box", radius=0.8),
            materials=[Material(color=BOX_PALETTE[i % len(BOX_PALETTE)], roughness=0.66)],
        ))
    # Exported reveal clip keeps its authoring-tool name.
    return LoadedAsset(path=path, model=root, clips=[AnimationClip("Take 001", 2.4)])


def make_robot(path: str = "robot") -> LoadedAsset:
    root = Node("RobotArmature")
    body = root.add(Node(
        "Body",
        position=Vec3(0.0, 1.0, 0.0),
        geometry=Geometry("capsule", radius=0.45),
        materials=[Material(color=ROBOT_PALETTE[0], roughness=0.6, metalness=0.35)],
    ))
    body.add(Node(
        "Head_4",
        position=Vec3(0.0, 0.9, 0.0),
        geometry=Geometry("sphere", radius=0.4),
        materials=[Material(color=ROBOT_PALETTE[1], roughness=0.6, metalness=0.35)],
        morph_targets={"Angry": 0.0, "Surprised": 0.0, "Sad": 0.0},
    ))
    clips = [AnimationClip(name, duration) for name, duration in ROBOT_CLIPS.items()]
    return LoadedAsset(path=path, model=root, clips=clips)


def register_builtin_assets(library: AssetLibrary, box_path: str, companion_path: str) -> None:
    library.register(box_path, lambda: make_gift_box(box_path))
    library.register(companion_path, lambda: make_robot(companion_path))
