"""Pet configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PetConfig:
    """Immutable tunables for the hatch, lifecycle and waste subsystems.

    All durations are in simulated seconds.

    Attributes:
        tps: Fixed frame rate used by ``Engine.step()`` without an explicit dt.
        max_frame_dt: Upper bound on a single real-time frame delta.
        hatch_delay: Incubation wait between trigger and reveal animation.
        hatch_sound_offset: Delay from reveal start to the sound cue.
        hatch_clip: Name of the box reveal clip.
        box_clip_aliases: Clip renames applied when the box asset loads.
        battery_drain_seconds: Time for a full charge to drain to zero.
        low_power_threshold: Battery level at or below which the low-power
            notice fires.
        low_power_rearm: Battery level above which the notice re-arms.
        one_shot_clips: Clips that play once and hold their last pose.
        waste_min_separation: Minimum distance between two live markers.
        waste_max_attempts: Placement proposals per spawn tick.
        light_floor: Lowest intensity the light rig will accept.
    """

    tps: int = 60
    max_frame_dt: float = 0.1

    box_asset: str = "models/GiftBox/gift_loot_box_thing_wip.glb"
    companion_asset: str = "models/RobotExpressive/RobotExpressive.glb"

    hatch_delay: float = 8.0
    hatch_sound_offset: float = 0.42
    hatch_clip: str = "Hatch"
    box_clip_aliases: dict[str, str] = field(
        default_factory=lambda: {"Take 001": "Hatch"}
    )

    battery_max: float = 100.0
    battery_drain_seconds: float = 300.0
    low_power_threshold: float = 30.0
    low_power_rearm: float = 35.0

    default_clip: str = "Walking"
    death_clip: str = "Death"
    one_shot_clips: frozenset[str] = frozenset({"Death", "Dance", "ThumbsUp", "Jump"})
    face_node: str = "Head_4"
    sad_target: str = "Sad"
    action_fade: float = 0.5
    resume_fade: float = 0.4

    waste_interval: float = 15.0
    waste_trail_distance: float = 2.0
    waste_jitter: float = 1.0
    waste_height: float = 0.25
    waste_min_separation: float = 0.8
    waste_max_attempts: int = 8
    waste_color: str = "#b89682"

    light_floor: float = 0.35
    event_log_size: int = 5

    def __post_init__(self) -> None:
        if self.tps <= 0:
            raise ValueError("tps must be positive")
        if self.battery_max <= 0:
            raise ValueError("battery_max must be positive")
        if self.battery_drain_seconds <= 0:
            raise ValueError("battery_drain_seconds must be positive")
        if self.low_power_rearm < self.low_power_threshold:
            raise ValueError(
                f"low_power_rearm ({self.low_power_rearm}) must be >= "
                f"low_power_threshold ({self.low_power_threshold})"
            )
        if self.waste_interval <= 0:
            raise ValueError("waste_interval must be positive")
        if self.waste_max_attempts < 1:
            raise ValueError(f"waste_max_attempts must be >= 1, got {self.waste_max_attempts}")
        if not 0.0 <= self.light_floor <= 1.0:
            raise ValueError(f"light_floor must be within [0, 1], got {self.light_floor}")

    @property
    def drain_rate(self) -> float:
        """Battery points lost per simulated second."""
        return self.battery_max / self.battery_drain_seconds
