"""Layout, color, and rendering constants."""
from __future__ import annotations

# Layout
VIEW_W = 560
VIEW_H = 420
PANEL_W = 240
LOG_H = 96
SCREEN_W = VIEW_W + PANEL_W
SCREEN_H = VIEW_H + LOG_H
FPS = 60

# World units -> pixels (top-down, x right, z down)
PIXELS_PER_UNIT = 48

# Colors
COLOR_PANEL_BG = (40, 34, 38)
COLOR_LOG_BG = (30, 26, 30)
COLOR_TEXT = (235, 225, 215)
COLOR_TEXT_DIM = (150, 140, 140)
COLOR_BATTERY_OK = (126, 217, 87)
COLOR_BATTERY_LOW = (255, 159, 166)
COLOR_BATTERY_BG = (70, 60, 64)
COLOR_FACING = (60, 50, 55)
COLOR_DEAD = (120, 120, 130)
COLOR_MODE_ACTIVE = (255, 217, 125)


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)
