"""End-to-end tests: box hatches, companion arrives, user intents flow through."""
import logging
from datetime import datetime

import pytest

from tick_pet import HatchState, Mode, PetConfig, StatusBoard, World, build_experience
from tick_pet.assets import make_gift_box, make_robot
from tick_pet.controller import DEATH_MESSAGE
from tick_pet.world import ACTION_EVENT, GREETING_EVENT, GREETING_MESSAGE, REBOOT_MESSAGE


def fixed_now():
    return datetime(2024, 5, 1, 9, 30)


def hatched_experience(config=None, sound=None):
    board = StatusBoard(now=fixed_now)
    exp = build_experience(config=config, seed=4, ui=board, sound=sound)
    exp.engine.step()
    assert exp.world.deploy()
    exp.engine.run_for(11.0)
    return exp, board


class TestHatchFlow:
    def test_box_is_in_scene_after_first_frame(self):
        exp = build_experience(seed=1)
        assert not exp.world.box.loaded
        exp.engine.step()
        assert exp.world.box.loaded
        assert exp.world.box.model in exp.scene

    def test_full_flow_brings_companion_online(self):
        sounds = []
        exp, board = hatched_experience(sound=lambda: sounds.append(True))
        world = exp.world
        assert world.box.state is HatchState.HATCHED
        assert world.box.model is None
        assert world.controller is not None
        assert world.companion in exp.scene
        assert board.status == GREETING_MESSAGE
        assert board.events[0] == f"09:30 - {GREETING_EVENT}"
        assert not board.overlay_visible
        assert sounds == [True]

    def test_companion_loaded_once(self):
        exp, _ = hatched_experience()
        controller = exp.world.controller
        assert exp.world.load_companion() is False
        exp.engine.run(5)
        assert exp.world.controller is controller
        assert [n.name for n in exp.scene].count("RobotArmature") == 1

    def test_deploy_twice_is_ignored(self):
        exp = build_experience(seed=1)
        exp.engine.step()
        assert exp.world.deploy() is True
        assert exp.world.deploy() is False

    def test_same_seed_same_waste(self):
        def positions():
            exp, _ = hatched_experience()
            exp.engine.run_for(31.0)
            return [m.position for m in exp.world.controller.waste.markers]

        first = positions()
        assert len(first) >= 1
        assert first == positions()


class TestIntents:
    def test_intents_before_companion_are_rejected(self):
        exp = build_experience(seed=1)
        exp.engine.step()
        world = exp.world
        assert world.select_mode("play") is False
        assert world.perform_action() is False
        assert world.request_reset() is False

    def test_mode_and_action(self):
        exp, board = hatched_experience()
        world = exp.world
        assert world.select_mode(Mode.PLAY) is True
        assert board.mode_label == "Play"
        assert world.perform_action() is True
        assert board.events[0] == f"09:30 - {ACTION_EVENT}"
        assert world.controller.animation.active.name == "Dance"

    def test_bad_mode_raises(self):
        exp, _ = hatched_experience()
        with pytest.raises(ValueError):
            exp.world.select_mode("nap")

    def test_death_then_reset(self):
        exp, board = hatched_experience(config=PetConfig(battery_drain_seconds=5.0))
        exp.engine.run_for(6.0)
        world = exp.world
        assert not world.controller.is_alive
        assert board.status == DEATH_MESSAGE
        assert board.reset_enabled
        assert board.battery_text == "0%"
        assert world.perform_action() is False

        assert world.request_reset() is True
        assert world.controller.is_alive
        assert board.status == REBOOT_MESSAGE
        assert not board.reset_enabled
        assert board.battery_text == "100%"

    def test_lights_dim_with_battery(self):
        exp, _ = hatched_experience()
        exp.engine.run_for(150.0)
        assert exp.lights.level < 0.6
        assert exp.lights.level >= 0.35


class TestCompanionLoadFailure:
    def test_failure_is_logged_and_retryable(self, make_context, caplog):
        ctx = make_context(builtin=False)
        ctx.assets.register(ctx.config.box_asset, make_gift_box)
        world = World(ctx)
        ctx.scheduler.advance(0.0)
        world.deploy()
        ctx.scheduler.advance(8.0)
        world.update(2.5)

        with caplog.at_level(logging.ERROR):
            ctx.bus.flush()
            ctx.scheduler.advance(0.0)
        assert world.controller is None
        assert "Failed to load companion model" in caplog.text

        ctx.assets.register(ctx.config.companion_asset, make_robot)
        assert world.load_companion() is True
        assert world.load_companion() is False
        ctx.scheduler.advance(0.0)
        assert world.controller is not None


def test_dispose_tears_down(make_context):
    ctx = make_context()
    world = World(ctx)
    ctx.scheduler.advance(0.0)
    model = world.box.model
    world.dispose()
    assert model not in ctx.scene
    ctx.bus.publish("hatched")
    ctx.bus.flush()
    assert ctx.assets.requests == [ctx.config.box_asset]
