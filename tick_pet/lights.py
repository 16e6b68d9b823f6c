"""Light rig - scene lighting that dims with the companion's battery."""
from __future__ import annotations

from dataclasses import dataclass

from tick_pet.scene import Scene


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(a: str, b: str, t: float) -> str:
    ca = [int(a[i:i + 2], 16) for i in (1, 3, 5)]
    cb = [int(b[i:i + 2], 16) for i in (1, 3, 5)]
    return "#" + "".join(f"{round(lerp(x, y, t)):02x}" for x, y in zip(ca, cb))


@dataclass
class Light:
    name: str
    color: str
    intensity: float


class LightRig:
    """Five-light rig. ``set_intensity`` never goes below ``floor``."""

    BACKGROUND_WARM = "#fff5ea"
    BACKGROUND_DUSK = "#f7e6d4"

    def __init__(self, scene: Scene, floor: float = 0.35) -> None:
        self._scene = scene
        self._floor = floor
        self.ambient = Light("ambient", "#ffeedd", 0.6)
        self.sun = Light("sun", "#ffd1a1", 1.8)
        self.fill = Light("fill", "#e6f0ff", 0.7)
        self.rim = Light("rim", "#ffd4d9", 1.1)
        self.glow = Light("glow", "#ffe8d1", 0.5)
        self._base = {light.name: light.intensity for light in self.lights()}
        self.level = 1.0

    def lights(self) -> list[Light]:
        return [self.ambient, self.sun, self.fill, self.rim, self.glow]

    def set_intensity(self, intensity: float) -> float:
        """Apply a 0..1 brightness signal. Returns the clamped level used."""
        safe = min(max(intensity, self._floor), 1.0)
        self.level = safe
        base = self._base
        self.ambient.intensity = lerp(0.35, base["ambient"], safe)
        self.sun.intensity = base["sun"] * safe
        self.fill.intensity = lerp(0.25, base["fill"], safe)
        self.rim.intensity = base["rim"] * lerp(0.6, 1.0, safe)
        self.glow.intensity = base["glow"] * lerp(0.7, 1.0, safe)

        if self._scene.fog_density is not None:
            self._scene.fog_density = lerp(0.022, 0.0125, safe)
        self._scene.background = lerp_color(self.BACKGROUND_WARM, self.BACKGROUND_DUSK, 1.0 - safe)
        return safe
