"""Scripted camera choreography: hold, glide, re-aim, glide, free look."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from .anchors import AnchorSet
from .config import DEFAULT_CONFIG, FlythroughConfig, LerpMode

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


class Phase(IntEnum):
    """Stages of the walk-through, in the only order they can occur."""

    HOLD = 0
    APPROACH_MIDDLE = 1
    AIM_END = 2
    APPROACH_END = 3
    FREE_LOOK = 4


@dataclass
class PhaseState:
    phase: Phase
    entered_at: float


@dataclass(frozen=True)
class FrameResult:
    """What one ``step`` decided for the camera.

    ``position`` and ``look_at`` are ``None`` once free look owns the pose.
    ``entered`` is the phase that became active on this frame, if any.
    """

    phase: Phase
    position: Optional[Vec3]
    look_at: Optional[Vec3]
    entered: Optional[Phase] = None

    @property
    def writes_pose(self) -> bool:
        return self.position is not None


def lerp_toward(position: Vec3, target: Vec3, factor: float) -> Vec3:
    """Move ``position`` the fraction ``factor`` of the way to ``target``."""

    return (
        position[0] + (target[0] - position[0]) * factor,
        position[1] + (target[1] - position[1]) * factor,
        position[2] + (target[2] - position[2]) * factor,
    )


def distance(a: Vec3, b: Vec3) -> float:
    return math.dist(a, b)


class PhaseStateMachine:
    """Advances the flythrough one frame at a time.

    Hold and aim phases are timed against ``entered_at``; the two approach
    phases end on the first frame whose post-step distance to the target is
    below ``arrival_epsilon``. At most one transition happens per frame and
    the phase never goes backwards until :meth:`reset`.
    """

    def __init__(self, anchors: AnchorSet, config: FlythroughConfig = DEFAULT_CONFIG) -> None:
        self.anchors = anchors
        self.config = config
        self._state = PhaseState(Phase.HOLD, 0.0)
        self._last_step_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Public API
    @property
    def state(self) -> PhaseState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def is_terminal(self) -> bool:
        return self._state.phase is Phase.FREE_LOOK

    def reset(self, now: float) -> None:
        self._state = PhaseState(Phase.HOLD, now)
        self._last_step_at = None

    def step(self, now: float, position: Vec3) -> FrameResult:
        dt = 0.0 if self._last_step_at is None else max(0.0, now - self._last_step_at)
        self._last_step_at = now

        phase = self._state.phase
        start = self.anchors.start.position
        middle = self.anchors.middle.position
        end = self.anchors.end.position

        if phase is Phase.HOLD:
            entered = None
            if now - self._state.entered_at >= self.config.hold_duration_ms:
                entered = self._enter(Phase.APPROACH_MIDDLE, now)
            return FrameResult(self.phase, start, middle, entered)

        if phase is Phase.APPROACH_MIDDLE:
            return self._approach(now, dt, position, middle, Phase.AIM_END)

        if phase is Phase.AIM_END:
            entered = None
            if now - self._state.entered_at >= self.config.aim_pause_ms:
                entered = self._enter(Phase.APPROACH_END, now)
            return FrameResult(self.phase, position, end, entered)

        if phase is Phase.APPROACH_END:
            return self._approach(now, dt, position, end, Phase.FREE_LOOK)

        return FrameResult(Phase.FREE_LOOK, None, None)

    # ------------------------------------------------------------------
    # Helpers
    def approach_factor(self, remaining: float, dt: float) -> float:
        speed = self.config.approach_speed
        mode = self.config.lerp_mode
        if mode is LerpMode.TIME_NORMALIZED:
            return 1.0 - (1.0 - speed) ** (dt / self.config.reference_frame_ms)
        if mode is LerpMode.DISTANCE_SCALED:
            return min(speed * remaining, 1.0)
        return speed

    def _approach(
        self, now: float, dt: float, position: Vec3, target: Vec3, next_phase: Phase
    ) -> FrameResult:
        factor = self.approach_factor(distance(position, target), dt)
        moved = lerp_toward(position, target, factor)
        entered = None
        if distance(moved, target) < self.config.arrival_epsilon:
            entered = self._enter(next_phase, now)
        return FrameResult(self.phase, moved, target, entered)

    def _enter(self, phase: Phase, now: float) -> Phase:
        previous = self._state.phase
        self._state = PhaseState(phase, now)
        logger.debug(f"Phase {previous.name} -> {phase.name} at {now:.1f} ms")
        return phase
