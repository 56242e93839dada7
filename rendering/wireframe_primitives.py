"""Static wireframe meshes for the corridor scene."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple


Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ColoredSegment:
    start: int
    end: int
    color: Color


@dataclass(frozen=True)
class WireframeMesh:
    """Simple container for line segments connecting vertex indices."""

    vertices: Sequence[Vec3]
    segments: Sequence[Tuple[int, int]]
    colored_segments: Sequence[ColoredSegment] = field(default_factory=tuple)

    def transformed(
        self,
        offset: Vec3 = (0.0, 0.0, 0.0),
        scale: float = 1.0,
    ) -> "WireframeMesh":
        """Return a new mesh with vertices offset/scaled for drawing."""

        ox, oy, oz = offset
        transformed_vertices = [
            ((x * scale) + ox, (y * scale) + oy, (z * scale) + oz)
            for x, y, z in self.vertices
        ]
        return WireframeMesh(transformed_vertices, self.segments, self.colored_segments)


def create_box_mesh(size: Vec3) -> WireframeMesh:
    """Twelve edges of an axis-aligned box centred on the origin."""

    hx, hy, hz = size[0] * 0.5, size[1] * 0.5, size[2] * 0.5
    vertices: List[Vec3] = [
        (-hx, -hy, -hz),
        (hx, -hy, -hz),
        (hx, -hy, hz),
        (-hx, -hy, hz),
        (-hx, hy, -hz),
        (hx, hy, -hz),
        (hx, hy, hz),
        (-hx, hy, hz),
    ]
    segments = [
        (0, 1), (1, 2), (2, 3), (3, 0),
        (4, 5), (5, 6), (6, 7), (7, 4),
        (0, 4), (1, 5), (2, 6), (3, 7),
    ]
    return WireframeMesh(vertices, segments)


def create_grid_mesh(size: float = 10.0, divisions: int = 10) -> WireframeMesh:
    """Square grid on the XZ plane, like a floor helper."""

    half = size * 0.5
    step = size / max(1, divisions)
    vertices: List[Vec3] = []
    segments: List[Tuple[int, int]] = []
    for i in range(divisions + 1):
        offset = -half + i * step
        base = len(vertices)
        vertices.extend(
            [(-half, 0.0, offset), (half, 0.0, offset), (offset, 0.0, -half), (offset, 0.0, half)]
        )
        segments.append((base, base + 1))
        segments.append((base + 2, base + 3))
    return WireframeMesh(vertices, segments)


def create_axes_mesh(length: float = 2.0) -> WireframeMesh:
    """Red/green/blue X/Y/Z axis lines from the origin."""

    vertices: List[Vec3] = [
        (0.0, 0.0, 0.0),
        (length, 0.0, 0.0),
        (0.0, length, 0.0),
        (0.0, 0.0, length),
    ]
    colored = (
        ColoredSegment(0, 1, (1.0, 0.2, 0.2, 1.0)),
        ColoredSegment(0, 2, (0.2, 1.0, 0.2, 1.0)),
        ColoredSegment(0, 3, (0.3, 0.5, 1.0, 1.0)),
    )
    return WireframeMesh(vertices, (), colored)


def create_marker_mesh(radius: float = 0.15) -> WireframeMesh:
    """Small octahedron used to mark camera anchors."""

    vertices: List[Vec3] = [
        (radius, 0.0, 0.0),
        (-radius, 0.0, 0.0),
        (0.0, radius, 0.0),
        (0.0, -radius, 0.0),
        (0.0, 0.0, radius),
        (0.0, 0.0, -radius),
    ]
    segments = [
        (0, 2), (0, 3), (0, 4), (0, 5),
        (1, 2), (1, 3), (1, 4), (1, 5),
        (2, 4), (4, 3), (3, 5), (5, 2),
    ]
    return WireframeMesh(vertices, segments)
