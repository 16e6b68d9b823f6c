"""Tests for the expression bridge and the light rig."""
import logging

import pytest

from tick_pet import ExpressionBridge, LightRig, Node, Scene
from tick_pet.assets import make_robot
from tick_pet.lights import lerp, lerp_color


class RecordingLights:
    def __init__(self):
        self.values = []

    def set_intensity(self, intensity):
        self.values.append(intensity)
        return intensity


class TestExpressionBridge:
    def test_sadness_tracks_battery(self):
        bridge = ExpressionBridge(make_robot().model)
        bridge.update_expression(100.0)
        assert bridge.sadness == pytest.approx(0.0)
        bridge.update_expression(25.0)
        assert bridge.sadness == pytest.approx(0.75)
        bridge.update_expression(0.0)
        assert bridge.sadness == pytest.approx(1.0)

    def test_light_signal_is_normalised(self):
        lights = RecordingLights()
        bridge = ExpressionBridge(make_robot().model, lights)
        bridge.apply(40.0)
        assert lights.values == [pytest.approx(0.4)]

    def test_custom_battery_max(self):
        lights = RecordingLights()
        bridge = ExpressionBridge(make_robot().model, lights, battery_max=50.0)
        bridge.apply(25.0)
        assert bridge.sadness == pytest.approx(0.5)
        assert lights.values == [pytest.approx(0.5)]

    def test_reports_available_targets(self, caplog):
        with caplog.at_level(logging.INFO):
            ExpressionBridge(make_robot().model)
        assert "Sad" in caplog.text

    def test_missing_face_warns_and_skips(self, caplog):
        with caplog.at_level(logging.WARNING):
            bridge = ExpressionBridge(Node("Blob"))
        assert "No morph targets found" in caplog.text
        bridge.apply(10.0)
        assert bridge.sadness is None

    def test_face_without_sad_target_is_left_alone(self):
        model = Node("Bot")
        face = model.add(Node("Head_4", morph_targets={"Angry": 0.2}))
        bridge = ExpressionBridge(model)
        bridge.update_expression(0.0)
        assert face.morph_targets == {"Angry": 0.2}


class TestLightRig:
    def test_full_brightness_keeps_base_levels(self):
        rig = LightRig(Scene())
        assert rig.set_intensity(1.0) == 1.0
        assert rig.sun.intensity == pytest.approx(1.8)
        assert rig.ambient.intensity == pytest.approx(0.6)
        assert rig.fill.intensity == pytest.approx(0.7)

    def test_input_is_clamped(self):
        rig = LightRig(Scene(), floor=0.35)
        assert rig.set_intensity(0.0) == 0.35
        assert rig.set_intensity(-2.0) == 0.35
        assert rig.set_intensity(3.0) == 1.0
        assert rig.level == 1.0

    def test_dims_sun_proportionally(self):
        rig = LightRig(Scene())
        rig.set_intensity(0.5)
        assert rig.sun.intensity == pytest.approx(0.9)
        assert rig.ambient.intensity == pytest.approx(0.475)
        assert rig.rim.intensity == pytest.approx(1.1 * 0.8)

    def test_fog_and_background_follow_level(self):
        scene = Scene()
        rig = LightRig(scene)
        rig.set_intensity(1.0)
        assert scene.fog_density == pytest.approx(0.0125)
        assert scene.background == "#fff5ea"
        rig.set_intensity(0.35)
        assert scene.fog_density > 0.0125
        assert scene.background != "#fff5ea"

    def test_scene_without_fog(self):
        scene = Scene(fog_density=None)
        LightRig(scene).set_intensity(0.5)
        assert scene.fog_density is None


def test_lerp_helpers():
    assert lerp(0.0, 10.0, 0.25) == 2.5
    assert lerp_color("#000000", "#ffffff", 0.5) == "#808080"
    assert lerp_color("#123456", "#abcdef", 0.0) == "#123456"
