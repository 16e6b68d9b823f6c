"""Expression bridge - battery level to facial blend and light signal."""
from __future__ import annotations

import logging
from typing import Protocol

from tick_pet.scene import Node

logger = logging.getLogger(__name__)


class LightSink(Protocol):
    def set_intensity(self, intensity: float) -> float: ...


class ExpressionBridge:
    """Maps a 0..max battery level onto the face and the lights.

    The ``sad_target`` influence is ``1 - level / max``. The lighting
    collaborator receives ``level / max`` and owns any clamping.
    """

    def __init__(
        self,
        model: Node,
        lights: LightSink | None = None,
        face_node: str = "Head_4",
        sad_target: str = "Sad",
        battery_max: float = 100.0,
    ) -> None:
        self._face = model.find(face_node)
        self._lights = lights
        self._sad_target = sad_target
        self._max = battery_max
        if self._face is not None and self._face.morph_targets:
            logger.info("Available morph targets: %s", sorted(self._face.morph_targets))
        else:
            logger.warning("No morph targets found for the face")

    @property
    def sadness(self) -> float | None:
        if self._face is None:
            return None
        return self._face.morph_targets.get(self._sad_target)

    def update_expression(self, level: float) -> None:
        if self._face is None or self._sad_target not in self._face.morph_targets:
            return
        self._face.morph_targets[self._sad_target] = 1.0 - level / self._max

    def update_light(self, level: float) -> None:
        if self._lights is not None:
            self._lights.set_intensity(level / self._max)

    def apply(self, level: float) -> None:
        self.update_expression(level)
        self.update_light(level)
