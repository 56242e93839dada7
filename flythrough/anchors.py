"""Camera anchor resolution for the corridor flythrough."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from .scene import END_NODE, MIDDLE_NODE, START_NODE, SceneProvider

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

ANCHOR_NODE_NAMES: Mapping[str, str] = {
    "start": START_NODE,
    "middle": MIDDLE_NODE,
    "end": END_NODE,
}


class AnchorMissing(LookupError):
    """A required camera anchor node is absent from the scene."""

    def __init__(self, name: str, missing: Sequence[str] = ()) -> None:
        self.name = name
        self.missing: Tuple[str, ...] = tuple(missing) or (name,)
        super().__init__(f"Camera anchor not found in scene: {', '.join(self.missing)}")


@dataclass(frozen=True)
class Anchor:
    """Fixed waypoint copied out of the scene graph."""

    name: str
    position: Vec3


@dataclass(frozen=True)
class AnchorSet:
    start: Anchor
    middle: Anchor
    end: Anchor


def resolve_anchors(
    scene: SceneProvider, names: Mapping[str, str] = ANCHOR_NODE_NAMES
) -> AnchorSet:
    """Look up the start/middle/end nodes and snapshot their positions.

    Raises ``AnchorMissing`` naming the first absent node; the scene is only
    read, never modified.
    """

    resolved: Dict[str, Anchor] = {}
    missing = []
    for role in ("start", "middle", "end"):
        node_name = names[role]
        node = scene.get_object_by_name(node_name)
        if node is None:
            missing.append(node_name)
            continue
        x, y, z = node.position
        resolved[role] = Anchor(name=node_name, position=(float(x), float(y), float(z)))

    if missing:
        logger.error(f"One or more camera anchors not found: {', '.join(missing)}")
        raise AnchorMissing(missing[0], missing)

    anchors = AnchorSet(**resolved)
    logger.debug(
        f"Resolved anchors start={anchors.start.position} "
        f"middle={anchors.middle.position} end={anchors.end.position}"
    )
    return anchors
