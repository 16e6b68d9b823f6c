"""Scene - headless render surface holding nodes in 3-D space."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def distance_to(self, other: Vec3) -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))


@dataclass(eq=False)
class Geometry:
    kind: str
    radius: float = 1.0
    disposed: bool = False

    def dispose(self) -> None:
        self.disposed = True


@dataclass(eq=False)
class Material:
    color: str = "#ffffff"
    roughness: float = 0.5
    metalness: float = 0.0
    disposed: bool = False

    def clone(self) -> Material:
        return Material(color=self.color, roughness=self.roughness, metalness=self.metalness)

    def dispose(self) -> None:
        self.disposed = True


@dataclass(eq=False)
class Node:
    """A scene-graph node. Meshes carry geometry and materials.

    ``morph_targets`` maps blend-shape names to their current influence.
    """

    name: str
    position: Vec3 = field(default_factory=Vec3)
    rotation_y: float = 0.0
    scale: float = 1.0
    geometry: Geometry | None = None
    materials: list[Material] = field(default_factory=list)
    morph_targets: dict[str, float] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    parent: Node | None = field(default=None, repr=False)

    @property
    def is_mesh(self) -> bool:
        return self.geometry is not None

    def add(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    def traverse(self) -> Iterator[Node]:
        yield self
        for child in self.children:
            yield from child.traverse()

    def find(self, name: str) -> Node | None:
        for node in self.traverse():
            if node.name == name:
                return node
        return None

    def forward(self) -> Vec3:
        """Unit facing direction on the ground plane (+z at zero yaw)."""
        return Vec3(math.sin(self.rotation_y), 0.0, math.cos(self.rotation_y))

    def dispose(self) -> None:
        """Release geometry and materials of every mesh in the subtree."""
        for node in self.traverse():
            if node.geometry is not None:
                node.geometry.dispose()
            for material in node.materials:
                material.dispose()


class Scene:
    """Spatial container that owns the visible top-level nodes."""

    def __init__(self, background: str = "#fdf6ef", fog_density: float | None = 0.01) -> None:
        self._nodes: list[Node] = []
        self.background = background
        self.fog_density = fog_density

    def add(self, node: Node) -> None:
        if node not in self._nodes:
            self._nodes.append(node)

    def remove(self, node: Node) -> None:
        try:
            self._nodes.remove(node)
        except ValueError:
            pass

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def find(self, name: str) -> Node | None:
        for root in self._nodes:
            found = root.find(name)
            if found is not None:
                return found
        return None
