"""Pointer-driven look-around once the scripted flythrough has finished."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .camera import CameraPose, Vec3
from .phases import Phase

logger = logging.getLogger(__name__)


@dataclass
class FreeLookAngles:
    """Accumulated yaw/pitch offsets in radians. Unbounded on purpose."""

    yaw: float = 0.0
    pitch: float = 0.0

    def reset(self) -> None:
        self.yaw = 0.0
        self.pitch = 0.0


class FreeLookController:
    """Turns drag deltas into orientation offsets from the resting pose.

    Drags are ignored until ``phase_source`` reports ``Phase.FREE_LOOK``.
    """

    def __init__(self, phase_source: Callable[[], Phase], sensitivity: float = 0.005) -> None:
        self._phase_source = phase_source
        self.sensitivity = sensitivity
        self.angles = FreeLookAngles()
        self._base: Optional[Tuple[float, float]] = None

    @property
    def active(self) -> bool:
        return self._phase_source() is Phase.FREE_LOOK

    def on_drag(self, delta_x: float, delta_y: float) -> bool:
        if not self.active:
            return False
        self.angles.yaw -= delta_x * self.sensitivity
        self.angles.pitch -= delta_y * self.sensitivity
        return True

    def engage(self, pose: CameraPose, rest_position: Optional[Vec3] = None) -> None:
        """Capture the pose's current aim as the zero point for drag offsets.

        When ``rest_position`` is given the camera is parked there first, so
        free look orbits from that fixed point.
        """

        if rest_position is not None:
            pose.move_to(rest_position)
        self._base = pose.yaw_pitch()
        logger.info("Free look enabled")

    def apply(self, pose: CameraPose) -> None:
        if self._base is None:
            self.engage(pose)
        base_yaw, base_pitch = self._base
        pose.set_orientation(base_yaw + self.angles.yaw, base_pitch + self.angles.pitch)

    def reset(self) -> None:
        self.angles.reset()
        self._base = None
