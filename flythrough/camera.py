"""Camera pose for the corridor flythrough."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)
_MIN_LOOK_DISTANCE = 1e-9


def _normalize(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if norm == 0:
        return vec
    return vec / norm


def _look_at_matrix(position: Vec3, forward: Vec3, up: Vec3) -> np.ndarray:
    pos = np.array(position, dtype=np.float64)
    fwd = _normalize(np.array(forward, dtype=np.float64))
    up_vec = np.array(up, dtype=np.float64)

    side = _normalize(np.cross(fwd, up_vec))
    true_up = np.cross(side, fwd)

    view = np.identity(4, dtype=np.float32)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -fwd
    view[0, 3] = -np.dot(side, pos)
    view[1, 3] = -np.dot(true_up, pos)
    view[2, 3] = np.dot(fwd, pos)
    return view


def _perspective_matrix(fov_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    perspective = np.zeros((4, 4), dtype=np.float32)
    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)
    perspective[0, 0] = f / aspect
    perspective[1, 1] = f
    perspective[2, 2] = (far + near) / (near - far)
    perspective[2, 3] = (2 * far * near) / (near - far)
    perspective[3, 2] = -1.0
    return perspective


def direction_from_angles(yaw: float, pitch: float) -> Tuple[Vec3, Vec3]:
    """Return ``(forward, up)`` for spherical yaw/pitch in radians.

    Yaw turns about the world Y axis, zero looking down -Z. ``up`` is the
    derivative of ``forward`` with respect to pitch, so it stays orthogonal
    even straight up or down and past the poles.
    """

    cos_p = math.cos(pitch)
    sin_p = math.sin(pitch)
    sin_y = math.sin(yaw)
    cos_y = math.cos(yaw)
    forward = (-sin_y * cos_p, sin_p, -cos_y * cos_p)
    up = (sin_y * sin_p, cos_p, cos_y * sin_p)
    return forward, up


def angles_from_direction(forward: Vec3) -> Vec2:
    """Inverse of :func:`direction_from_angles` for a non-zero ``forward``."""

    x, y, z = forward
    horizontal = math.hypot(x, z)
    yaw = math.atan2(-x, -z)
    pitch = math.atan2(y, horizontal)
    return (yaw, pitch)


@dataclass
class CameraPose:
    """Position plus look orientation, rewritten once per frame.

    Orientation is kept as a unit ``forward`` vector and a matching ``up``;
    both come from a look-at target or from yaw/pitch angles.
    """

    position: Vec3
    viewport_size: Tuple[int, int]
    forward: Vec3 = (0.0, 0.0, -1.0)
    up: Vec3 = WORLD_UP
    fov: float = 75.0
    near_clip: float = 0.1
    far_clip: float = 1000.0

    def move_to(self, position: Vec3) -> None:
        self.position = (float(position[0]), float(position[1]), float(position[2]))

    def look_at(self, target: Vec3) -> None:
        """Aim at ``target``; keeps the previous orientation if already there."""

        dx = target[0] - self.position[0]
        dy = target[1] - self.position[1]
        dz = target[2] - self.position[2]
        length = math.sqrt(dx * dx + dy * dy + dz * dz)
        if length < _MIN_LOOK_DISTANCE:
            return
        forward = (dx / length, dy / length, dz / length)
        yaw, pitch = angles_from_direction(forward)
        _, up = direction_from_angles(yaw, pitch)
        self.forward = forward
        self.up = up

    def set_orientation(self, yaw: float, pitch: float) -> None:
        self.forward, self.up = direction_from_angles(yaw, pitch)

    def yaw_pitch(self) -> Vec2:
        return angles_from_direction(self.forward)

    def reset(self, position: Vec3, look_target: Vec3) -> None:
        """Put the camera at ``position`` aiming at ``look_target`` in one go."""

        self.forward = (0.0, 0.0, -1.0)
        self.up = WORLD_UP
        self.move_to(position)
        self.look_at(look_target)

    def update_viewport(self, size: Tuple[int, int]) -> None:
        self.viewport_size = size

    def view_matrix(self) -> np.ndarray:
        return _look_at_matrix(self.position, self.forward, self.up)

    def projection_matrix(self) -> np.ndarray:
        width, height = self.viewport_size
        aspect = width / height if height > 0 else 1.0
        return _perspective_matrix(self.fov, aspect, self.near_clip, self.far_clip)

    def view_projection_matrix(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    def world_to_screen(self, world_pos: Vec3) -> Optional[Vec2]:
        """Project a world point to top-left-origin screen coordinates."""

        point = np.array([world_pos[0], world_pos[1], world_pos[2], 1.0], dtype=np.float32)
        clip = self.view_projection_matrix() @ point
        w = clip[3]
        if w <= 0:
            return None
        ndc = clip[:3] / w
        if ndc[2] < -1 or ndc[2] > 1:
            return None
        width, height = self.viewport_size
        screen_x = float((ndc[0] + 1.0) * 0.5 * width)
        screen_y = float((1.0 - ndc[1]) * 0.5 * height)
        return (screen_x, screen_y)
