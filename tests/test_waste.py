"""Tests for periodic waste placement."""
import itertools
import random

import pytest

from tick_pet import Node, PetConfig, Scene, Scheduler, WasteSpawner
from tick_pet.waste import vary_color


class PinnedRandom(random.Random):
    """Always proposes the same spot."""

    def __init__(self):
        super().__init__(0)
        self.uniform_calls = 0

    def uniform(self, a, b):
        self.uniform_calls += 1
        return 0.0

    def random(self):
        return 0.5


def make_spawner(rng=None, alive=True, config=None):
    scheduler = Scheduler()
    scene = Scene()
    anchor = Node("robot")
    state = {"alive": alive}
    spawner = WasteSpawner(
        scheduler, scene, anchor,
        is_alive=lambda: state["alive"],
        rng=rng if rng is not None else random.Random(3),
        config=config,
    )
    return spawner, scheduler, scene, anchor, state


class TestPlacement:
    def test_proposal_trails_behind_anchor(self):
        spawner, *_ = make_spawner()
        for _ in range(20):
            pos = spawner.propose()
            assert -1.0 <= pos.x <= 1.0
            assert -3.0 <= pos.z <= -1.0
            assert pos.y == 0.25

    def test_proposal_follows_anchor_heading(self):
        spawner, _, _, anchor, _ = make_spawner(rng=PinnedRandom())
        anchor.position = anchor.position + anchor.forward().scaled(5)
        anchor.rotation_y = 3.141592653589793
        pos = spawner.propose()
        assert pos.x == pytest.approx(0.0, abs=1e-9)
        assert pos.z == pytest.approx(7.0)

    def test_spawn_adds_marker_to_scene(self):
        spawner, _, scene, _, _ = make_spawner()
        marker = spawner.spawn()
        assert marker is not None
        assert marker.node in scene
        assert marker.node.name == "Waste"
        assert spawner.markers == [marker]

    def test_markers_keep_minimum_separation(self):
        spawner, *_ = make_spawner(rng=random.Random(11))
        for _ in range(50):
            spawner.spawn()
        markers = spawner.markers
        assert len(markers) >= 2
        for a, b in itertools.combinations(markers, 2):
            assert a.position.distance_to(b.position) >= 0.8

    def test_exhausted_attempts_skip_the_tick(self):
        rng = PinnedRandom()
        spawner, _, scene, _, _ = make_spawner(rng=rng)
        assert spawner.spawn() is not None
        assert spawner.spawn() is None
        assert spawner.skipped == 1
        assert len(spawner.markers) == 1
        assert len(scene) == 1
        assert rng.uniform_calls == 2 + 8 * 2

    def test_markers_get_their_own_tinted_material(self):
        spawner, *_ = make_spawner()
        first = spawner.spawn()
        second = spawner.spawn()
        assert first.material is not second.material
        assert first.node.geometry is second.node.geometry
        assert first.color.startswith("#") and len(first.color) == 7


class TestSchedule:
    def test_spawns_every_interval(self):
        spawner, scheduler, *_ = make_spawner()
        spawner.start()
        scheduler.advance(14.9)
        assert spawner.markers == []
        scheduler.advance(0.1)
        assert len(spawner.markers) == 1
        scheduler.advance(15.0)
        assert len(spawner.markers) == 2

    def test_start_twice_keeps_single_task(self):
        spawner, scheduler, *_ = make_spawner()
        spawner.start()
        spawner.start()
        assert [h.name for h in scheduler.pending()] == ["waste"]
        scheduler.advance(15.0)
        assert len(spawner.markers) == 1

    def test_stop_is_idempotent(self):
        spawner, scheduler, *_ = make_spawner()
        spawner.start()
        assert spawner.running
        spawner.stop()
        spawner.stop()
        assert not spawner.running
        scheduler.advance(60.0)
        assert spawner.markers == []

    def test_dead_companion_spawns_nothing(self):
        spawner, scheduler, _, _, state = make_spawner(alive=False)
        spawner.start()
        scheduler.advance(45.0)
        assert spawner.markers == []
        state["alive"] = True
        scheduler.advance(15.0)
        assert len(spawner.markers) == 1

    def test_custom_interval(self):
        spawner, scheduler, *_ = make_spawner(config=PetConfig(waste_interval=2.0))
        spawner.start()
        scheduler.advance(6.0)
        assert len(spawner.markers) == 3


class TestClear:
    def test_clear_all_removes_and_disposes(self):
        spawner, _, scene, _, _ = make_spawner()
        markers = [spawner.spawn() for _ in range(3)]
        assert spawner.clear_all() == 3
        assert spawner.markers == []
        assert len(scene) == 0
        assert all(m.material.disposed for m in markers)
        assert not markers[0].node.geometry.disposed

    def test_clear_all_when_empty(self):
        spawner, *_ = make_spawner()
        assert spawner.clear_all() == 0


def test_vary_color_stays_close_to_base():
    rng = random.Random(5)
    base = int("b8", 16), int("96", 16), int("82", 16)
    for _ in range(20):
        color = vary_color("#b89682", rng)
        rgb = tuple(int(color[i:i + 2], 16) for i in (1, 3, 5))
        assert all(abs(c - b) <= 40 for c, b in zip(rgb, base))
