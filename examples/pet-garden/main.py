"""Pet Garden - hatch a robot buddy and keep its battery up.

A pygame frontend over tick-pet. The engine runs headless; this file only
routes keys to the World and draws the scene and the StatusBoard.

Controls:
  D       Deploy: start the gift box hatch sequence
  1-3     Select mode (Feed / Play / Clean)
  Space   Perform the current mode's action
  R       Reset after the battery runs out
  Escape  Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from tick_pet import Mode, PetConfig, StatusBoard, build_experience
from ui.constants import FPS, SCREEN_H, SCREEN_W
from ui.panel import draw_log, draw_panel
from ui.view import draw_hatching_overlay, draw_scene

MODE_KEYS = {
    pygame.K_1: Mode.FEED,
    pygame.K_2: Mode.PLAY,
    pygame.K_3: Mode.CLEAN,
}

TURN_SPEED = 0.35  # radians per second while walking


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pet Garden - tick-pet visual demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--tps", type=int, default=60, help="Fixed frame rate (default: 60)")
    p.add_argument("--drain", type=float, default=300.0,
                   help="Seconds for a full battery to drain (default: 300)")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    flash = {"t": 0.0}

    def pop() -> None:
        flash["t"] = 1.0
        board.log_event("Pop!")

    config = PetConfig(tps=args.tps, battery_drain_seconds=args.drain)
    board = StatusBoard(log_size=config.event_log_size)
    exp = build_experience(config=config, seed=args.seed, ui=board, sound=pop,
                           asset_latency=0.3)
    world = exp.world

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Pet Garden - tick-pet demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 12)
    big_font = pygame.font.SysFont("monospace", 24, bold=True)

    tick_interval = 1.0 / config.tps
    accumulator = 0.0
    t = 0.0
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += min(dt, config.max_frame_dt)
        t += dt

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_d:
                    world.deploy()
                elif event.key in MODE_KEYS:
                    if not world.select_mode(MODE_KEYS[event.key]):
                        board.on_mode_change(MODE_KEYS[event.key])
                elif event.key == pygame.K_SPACE:
                    world.perform_action()
                elif event.key == pygame.K_r:
                    if board.reset_enabled:
                        world.request_reset()

        # --- Tick engine at fixed rate ---
        while accumulator >= tick_interval:
            exp.engine.step()
            accumulator -= tick_interval
            controller = world.controller
            if controller is not None and controller.is_alive and world.companion is not None:
                if controller.animation.dominant() == config.default_clip:
                    world.companion.rotation_y += TURN_SPEED * tick_interval

        flash["t"] = max(0.0, flash["t"] - dt * 3)

        # --- Render ---
        alive = world.controller.is_alive if world.controller is not None else True
        draw_scene(screen, exp.scene, world.companion, alive, flash["t"])
        if board.overlay_visible:
            draw_hatching_overlay(screen, big_font, t)
        draw_panel(screen, font, board, world.box.can_trigger())
        draw_log(screen, font, board)

        pygame.display.flip()

    world.dispose()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
