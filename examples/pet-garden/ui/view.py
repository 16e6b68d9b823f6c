"""Top-down view of the scene graph."""
from __future__ import annotations

import math

import pygame

from tick_pet import Node, Scene
from ui.constants import (
    COLOR_DEAD, COLOR_FACING, PIXELS_PER_UNIT, VIEW_H, VIEW_W, hex_to_rgb,
)


def to_screen(x: float, z: float) -> tuple[int, int]:
    return int(VIEW_W / 2 + x * PIXELS_PER_UNIT), int(VIEW_H / 2 + z * PIXELS_PER_UNIT)


def _mesh_color(node: Node) -> tuple[int, int, int]:
    for mesh in node.traverse():
        if mesh.materials:
            return hex_to_rgb(mesh.materials[0].color)
    return (200, 200, 200)


def draw_scene(surface: pygame.Surface, scene: Scene, companion: Node | None,
               alive: bool, flash: float) -> None:
    """Draw every top-level node; the companion gets a facing tick."""
    view = pygame.Rect(0, 0, VIEW_W, VIEW_H)
    surface.fill(hex_to_rgb(scene.background), view)

    for node in scene:
        sx, sz = to_screen(node.position.x, node.position.z)
        if node is companion:
            color = _mesh_color(node) if alive else COLOR_DEAD
            pygame.draw.circle(surface, color, (sx, sz), 22)
            fwd = node.forward()
            tip = (sx + int(fwd.x * 30), sz + int(fwd.z * 30))
            pygame.draw.line(surface, COLOR_FACING, (sx, sz), tip, 3)
        elif node.name == "Waste":
            radius = max(4, int(node.geometry.radius * PIXELS_PER_UNIT / 2)) if node.geometry else 6
            pygame.draw.circle(surface, _mesh_color(node), (sx, sz), radius)
        else:
            size = int(1.6 * node.scale * PIXELS_PER_UNIT)
            rect = pygame.Rect(0, 0, size, size)
            rect.center = (sx, sz)
            pygame.draw.rect(surface, _mesh_color(node), rect, border_radius=6)

    if flash > 0:
        overlay = pygame.Surface((VIEW_W, VIEW_H), pygame.SRCALPHA)
        overlay.fill((255, 255, 255, int(120 * min(flash, 1.0))))
        surface.blit(overlay, (0, 0))


def draw_hatching_overlay(surface: pygame.Surface, font: pygame.font.Font, t: float) -> None:
    overlay = pygame.Surface((VIEW_W, VIEW_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 60))
    surface.blit(overlay, (0, 0))
    wobble = int(6 * math.sin(t * 12))
    text = font.render("Hatching...", True, (255, 255, 255))
    surface.blit(text, text.get_rect(center=(VIEW_W // 2 + wobble, VIEW_H // 2 - 70)))
