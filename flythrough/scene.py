"""Minimal scene graph standing in for a loaded building model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Tuple

Vec3 = Tuple[float, float, float]

START_NODE = "startingpoint"
MIDDLE_NODE = "middlepoint"
END_NODE = "endpoint"


class SceneNodeLike(Protocol):
    name: str
    position: Vec3


class SceneProvider(Protocol):
    """Anything that can look up a named node, e.g. a loaded model's root."""

    def get_object_by_name(self, name: str) -> Optional[SceneNodeLike]:
        ...


@dataclass(frozen=True)
class BoxShape:
    """Axis-aligned box, used for corridor walls and floors."""

    size: Vec3


@dataclass(frozen=True)
class GridShape:
    size: float
    divisions: int


@dataclass(frozen=True)
class AxesShape:
    length: float


@dataclass
class SceneNode:
    """Named node with a local position and optional child nodes."""

    name: str
    position: Vec3 = (0.0, 0.0, 0.0)
    children: List["SceneNode"] = field(default_factory=list)
    shape: Optional[object] = None

    def add(self, *nodes: "SceneNode") -> "SceneNode":
        self.children.extend(nodes)
        return self

    def traverse(self) -> Iterator["SceneNode"]:
        """Yield this node and every descendant, depth first."""

        yield self
        for child in self.children:
            yield from child.traverse()

    def get_object_by_name(self, name: str) -> Optional["SceneNode"]:
        for node in self.traverse():
            if node.name == name:
                return node
        return None


def _wall(name: str, center: Vec3, size: Vec3) -> SceneNode:
    return SceneNode(name=name, position=center, shape=BoxShape(size))


def create_corridor_scene() -> SceneNode:
    """Build an L-shaped corridor with the three camera anchor nodes.

    The camera enters along the -Z leg, reaches the corner at the origin and
    turns down the +X leg.
    """

    height = 2.4
    half_width = 1.2
    leg = 8.0
    wall_thickness = 0.1
    eye = 1.6

    building = SceneNode(name="building")
    building.add(
        _wall("floor_z", (0.0, 0.0, leg * 0.5), (half_width * 2, wall_thickness, leg + half_width * 2)),
        _wall("floor_x", (leg * 0.5 + half_width, 0.0, 0.0), (leg, wall_thickness, half_width * 2)),
        _wall("wall_z_west", (-half_width, height * 0.5, leg * 0.5), (wall_thickness, height, leg + half_width * 2)),
        _wall("wall_z_east", (half_width, height * 0.5, leg * 0.5 + half_width), (wall_thickness, height, leg)),
        _wall("wall_corner_north", (leg * 0.5, height * 0.5, -half_width), (leg + half_width * 2, height, wall_thickness)),
        _wall("wall_x_south", (leg * 0.5 + half_width, height * 0.5, half_width), (leg, height, wall_thickness)),
    )
    building.add(
        SceneNode(name=START_NODE, position=(0.0, eye, leg)),
        SceneNode(name=MIDDLE_NODE, position=(0.0, eye, 0.0)),
        SceneNode(name=END_NODE, position=(leg, eye, 0.0)),
    )

    root = SceneNode(name="scene")
    root.add(
        SceneNode(name="grid_helper", shape=GridShape(size=10.0, divisions=10)),
        SceneNode(name="axes_helper", shape=AxesShape(length=2.0)),
        building,
    )
    return root
