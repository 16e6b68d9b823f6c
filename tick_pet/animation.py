"""Animation blend engine - named clip playback with cross-fades."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from tick_pet.assets import AnimationClip
from tick_pet.tween import Fade

logger = logging.getLogger(__name__)


class LoopPolicy(Enum):
    LOOP = "loop"
    ONCE_THEN_HOLD = "once_then_hold"


@dataclass(eq=False)
class AnimationAction:
    """Playback state for one clip.

    ``weight`` is the base influence; the running fade scales it, so the
    pose contribution is ``effective_weight``.
    """

    clip: AnimationClip
    loop_policy: LoopPolicy = LoopPolicy.LOOP
    time: float = 0.0
    weight: float = 1.0
    time_scale: float = 1.0
    running: bool = False
    finished: bool = False
    fade: Fade | None = field(default=None, repr=False)
    fade_factor: float = 1.0

    @property
    def name(self) -> str:
        return self.clip.name

    @property
    def effective_weight(self) -> float:
        if not self.running:
            return 0.0
        return self.weight * self.fade_factor

    def reset(self) -> AnimationAction:
        self.time = 0.0
        self.finished = False
        self.fade = None
        self.fade_factor = 1.0
        return self

    def play(self) -> AnimationAction:
        self.running = True
        return self

    def stop(self) -> AnimationAction:
        self.running = False
        self.fade = None
        return self

    def fade_in(self, duration: float) -> AnimationAction:
        self.fade_factor = 0.0
        self.fade = Fade(0.0, 1.0, duration)
        return self

    def fade_out(self, duration: float) -> AnimationAction:
        self.fade = Fade(self.fade_factor, 0.0, duration)
        return self

    def advance(self, dt: float) -> bool:
        """Step fade and clip clock. Returns True when a one-shot just ended."""
        if not self.running:
            return False
        if self.fade is not None:
            self.fade_factor = self.fade.advance(dt)
            if self.fade.done:
                faded_out = self.fade.end_val == 0.0
                self.fade = None
                if faded_out:
                    self.running = False
                    return False
        if self.finished:
            return False
        self.time += dt * self.time_scale
        duration = self.clip.duration
        if self.loop_policy is LoopPolicy.LOOP:
            if self.time >= duration:
                self.time %= duration
            return False
        if self.time >= duration:
            self.time = duration
            self.finished = True
            return True
        return False


FinishedListener = Callable[[AnimationAction], None]


class BlendEngine:
    """Wraps a model's clips; exactly one action is active at a time.

    ``is_alive`` gates ``fade_to_action``: while it returns False only
    ``death_clip`` may start.
    """

    def __init__(
        self,
        clips: Iterable[AnimationClip],
        one_shot: Iterable[str] = (),
        is_alive: Callable[[], bool] | None = None,
        death_clip: str = "Death",
    ) -> None:
        once = set(one_shot)
        self._actions: dict[str, AnimationAction] = {}
        for clip in clips:
            policy = LoopPolicy.ONCE_THEN_HOLD if clip.name in once else LoopPolicy.LOOP
            self._actions[clip.name] = AnimationAction(clip=clip, loop_policy=policy)
        self._is_alive = is_alive if is_alive is not None else (lambda: True)
        self._death_clip = death_clip
        self._active: AnimationAction | None = None
        self._previous: AnimationAction | None = None
        self._listeners: list[FinishedListener] = []
        self._continuation: tuple[AnimationAction, Callable[[], None]] | None = None

    # --- Queries ---

    @property
    def active(self) -> AnimationAction | None:
        return self._active

    @property
    def previous(self) -> AnimationAction | None:
        return self._previous

    def names(self) -> list[str]:
        return list(self._actions)

    def has(self, name: str) -> bool:
        return name in self._actions

    def action(self, name: str) -> AnimationAction | None:
        return self._actions.get(name)

    def weights(self) -> dict[str, float]:
        """Effective weight of every running action."""
        return {
            name: action.effective_weight
            for name, action in self._actions.items()
            if action.running
        }

    def dominant(self) -> str | None:
        """Name of the running action with the highest effective weight."""
        weights = self.weights()
        if not weights:
            return None
        return max(weights, key=lambda name: weights[name])

    # --- Finished channel ---

    def add_finished_listener(self, listener: FinishedListener) -> None:
        self._listeners.append(listener)

    def remove_finished_listener(self, listener: FinishedListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # --- Playback ---

    def stop_all(self) -> None:
        for action in self._actions.values():
            action.stop()

    def play_once(self, name: str, on_finished: Callable[[], None] | None = None) -> bool:
        """Hard-start ``name`` as a one-shot, stopping everything else."""
        action = self._actions.get(name)
        if action is None:
            logger.warning("Animation %s not found", name)
            return False
        self.stop_all()
        action.loop_policy = LoopPolicy.ONCE_THEN_HOLD
        action.reset().play()
        self._previous = self._active
        self._active = action
        self._arm(action, on_finished)
        return True

    def fade_to_action(
        self,
        name: str,
        duration: float,
        on_finished: Callable[[], None] | None = None,
    ) -> bool:
        """Cross-fade from the active action to ``name`` over ``duration``."""
        if not self._is_alive() and name != self._death_clip:
            return False
        target = self._actions.get(name)
        if target is None:
            logger.warning("Animation %s not found", name)
            return False

        previous = self._active
        self._previous = previous
        self._active = target

        if previous is not None and previous is not target:
            previous.fade_out(duration)

        target.reset()
        target.time_scale = 1.0
        target.weight = 1.0
        target.fade_in(duration).play()
        self._arm(target, on_finished)
        return True

    def advance(self, dt: float) -> None:
        """Advance every action's clock; then deliver finish notifications."""
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        finished = [action for action in self._actions.values() if action.advance(dt)]
        for action in finished:
            self._notify_finished(action)

    # --- Internal ---

    def _arm(self, action: AnimationAction, on_finished: Callable[[], None] | None) -> None:
        # Only the newest play owns a continuation.
        self._continuation = (action, on_finished) if on_finished is not None else None

    def _notify_finished(self, action: AnimationAction) -> None:
        continuation = self._continuation
        if continuation is not None and continuation[0] is action:
            self._continuation = None
            continuation[1]()
        for listener in list(self._listeners):
            listener(action)
