"""Side panel and event log, drawn from the StatusBoard."""
from __future__ import annotations

import pygame

from tick_pet import StatusBoard
from ui.constants import (
    COLOR_BATTERY_BG, COLOR_BATTERY_LOW, COLOR_BATTERY_OK, COLOR_LOG_BG,
    COLOR_MODE_ACTIVE, COLOR_PANEL_BG, COLOR_TEXT, COLOR_TEXT_DIM,
    LOG_H, PANEL_W, SCREEN_W, VIEW_H, VIEW_W,
)

MODES = ("Feed", "Play", "Clean")
CONTROLS = [
    "D      Deploy (hatch)",
    "1/2/3  Feed / Play / Clean",
    "Space  Perform action",
    "R      Reset",
    "Esc    Quit",
]


def draw_panel(surface: pygame.Surface, font: pygame.font.Font, board: StatusBoard,
               hatch_ready: bool) -> None:
    x = VIEW_W
    pygame.draw.rect(surface, COLOR_PANEL_BG, (x, 0, PANEL_W, VIEW_H))

    y = 12
    surface.blit(font.render("MODE", True, COLOR_TEXT_DIM), (x + 12, y))
    y += 18
    for i, mode in enumerate(MODES):
        color = COLOR_MODE_ACTIVE if board.mode_label == mode else COLOR_TEXT_DIM
        surface.blit(font.render(f"{i + 1} {mode}", True, color), (x + 12 + i * 72, y))

    y += 32
    surface.blit(font.render(f"BATTERY {board.battery_text}", True, COLOR_TEXT_DIM), (x + 12, y))
    y += 18
    bar_w = PANEL_W - 24
    pygame.draw.rect(surface, COLOR_BATTERY_BG, (x + 12, y, bar_w, 12), border_radius=4)
    fill = int(bar_w * board.battery / 100.0)
    color = COLOR_BATTERY_LOW if board.battery_low else COLOR_BATTERY_OK
    if fill > 0:
        pygame.draw.rect(surface, color, (x + 12, y, fill, 12), border_radius=4)

    y += 32
    deploy = "ready" if hatch_ready else "locked"
    reset = "ready" if board.reset_enabled else "locked"
    surface.blit(font.render(f"deploy: {deploy}  reset: {reset}", True, COLOR_TEXT_DIM), (x + 12, y))

    y += 32
    for line in CONTROLS:
        surface.blit(font.render(line, True, COLOR_TEXT_DIM), (x + 12, y))
        y += 16


def draw_log(surface: pygame.Surface, font: pygame.font.Font, board: StatusBoard) -> None:
    pygame.draw.rect(surface, COLOR_LOG_BG, (0, VIEW_H, SCREEN_W, LOG_H))
    surface.blit(font.render(board.status, True, COLOR_TEXT), (8, VIEW_H + 6))
    ty = VIEW_H + 24
    for entry in board.events:
        surface.blit(font.render(entry, True, COLOR_TEXT_DIM), (8, ty))
        ty += 14
