"""Waste spawner - periodic marker placement trailing the companion."""
from __future__ import annotations

import colorsys
import logging
import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_pet.config import PetConfig
from tick_pet.scene import Geometry, Material, Node, Scene, Vec3

if TYPE_CHECKING:
    from tick_pet.scheduler import Scheduler, TaskHandle

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class WasteMarker:
    node: Node
    color: str

    @property
    def position(self) -> Vec3:
        return self.node.position

    @property
    def material(self) -> Material:
        return self.node.materials[0]


def vary_color(hex_color: str, rng: random.Random) -> str:
    """Jitter hue, saturation and lightness of ``hex_color`` slightly."""
    r, g, b = (int(hex_color[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    h = min(max(h + (rng.random() - 0.5) * 0.06, 0.0), 1.0)
    s = min(max(s + (rng.random() - 0.5) * 0.1, 0.0), 1.0)
    l = min(max(l + (rng.random() - 0.5) * 0.08, 0.0), 1.0)
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


class WasteSpawner:
    """Drops markers behind ``anchor`` every ``config.waste_interval`` seconds.

    Placement is rejection-sampled: a candidate closer than
    ``waste_min_separation`` to a live marker is redrawn, up to
    ``waste_max_attempts`` times, after which the tick is skipped.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        scene: Scene,
        anchor: Node,
        is_alive: Callable[[], bool],
        rng: random.Random,
        config: PetConfig | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._scene = scene
        self._anchor = anchor
        self._is_alive = is_alive
        self._rng = rng
        self._config = config if config is not None else PetConfig()
        self._handle: TaskHandle | None = None
        self._markers: list[WasteMarker] = []
        self._geometry = Geometry("icosahedron", radius=0.35)
        self._base_material = Material(
            color=self._config.waste_color, roughness=0.68, metalness=0.08,
        )
        self.skipped = 0

    @property
    def markers(self) -> list[WasteMarker]:
        return list(self._markers)

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.pending

    def start(self) -> None:
        self.stop()
        self._handle = self._scheduler.every(
            self._config.waste_interval, self._on_tick, name="waste",
        )

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_tick(self) -> None:
        if self._is_alive():
            self.spawn()

    def propose(self) -> Vec3:
        """One candidate position behind the anchor, with ground jitter."""
        cfg = self._config
        origin = self._anchor.position
        behind = origin - self._anchor.forward().scaled(cfg.waste_trail_distance)
        return Vec3(
            behind.x + self._rng.uniform(-cfg.waste_jitter, cfg.waste_jitter),
            cfg.waste_height,
            behind.z + self._rng.uniform(-cfg.waste_jitter, cfg.waste_jitter),
        )

    def _collides(self, position: Vec3) -> bool:
        limit = self._config.waste_min_separation
        return any(m.position.distance_to(position) < limit for m in self._markers)

    def spawn(self) -> WasteMarker | None:
        """Place one marker, or return None when every attempt collides."""
        position = None
        for attempt in range(1, self._config.waste_max_attempts + 1):
            candidate = self.propose()
            if not self._collides(candidate):
                position = candidate
                break
            logger.debug("waste candidate %d rejected at %s", attempt, candidate)
        if position is None:
            self.skipped += 1
            logger.debug("no free spot for waste after %d attempts", self._config.waste_max_attempts)
            return None

        material = self._base_material.clone()
        material.color = vary_color(self._base_material.color, self._rng)
        node = Node(
            "Waste",
            position=position,
            rotation_y=self._rng.random() * math.pi * 2,
            geometry=self._geometry,
            materials=[material],
        )
        self._scene.add(node)
        marker = WasteMarker(node=node, color=material.color)
        self._markers.append(marker)
        return marker

    def clear_all(self) -> int:
        """Remove every live marker. Returns how many were cleared."""
        cleared = len(self._markers)
        for marker in self._markers:
            self._scene.remove(marker.node)
            marker.material.dispose()
        self._markers = []
        return cleared
