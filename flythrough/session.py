"""Wires a resolved scene into a running flythrough."""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Tuple

from .anchors import ANCHOR_NODE_NAMES, AnchorSet, resolve_anchors
from .animation_loop import AnimationLoop, FrameClock
from .camera import CameraPose
from .config import DEFAULT_CONFIG, FlythroughConfig
from .free_look import FreeLookController
from .phases import Phase, PhaseStateMachine
from .scene import SceneProvider

logger = logging.getLogger(__name__)


class FlythroughSession:
    """Owns one camera, its choreography and the loop that drives them."""

    def __init__(
        self,
        anchors: AnchorSet,
        clock: FrameClock,
        config: FlythroughConfig = DEFAULT_CONFIG,
        present: Optional[Callable[[CameraPose], None]] = None,
        viewport_size: Tuple[int, int] = (1280, 720),
    ) -> None:
        self.anchors = anchors
        self.config = config
        self.pose = CameraPose(position=anchors.start.position, viewport_size=viewport_size)
        self.pose.look_at(anchors.middle.position)
        self.machine = PhaseStateMachine(anchors, config)
        self.free_look = FreeLookController(
            lambda: self.machine.phase, config.free_look_sensitivity
        )
        self.loop = AnimationLoop(clock, self.machine, self.pose, self.free_look, present)

    @classmethod
    def from_scene(
        cls,
        scene: SceneProvider,
        clock: FrameClock,
        config: FlythroughConfig = DEFAULT_CONFIG,
        present: Optional[Callable[[CameraPose], None]] = None,
        viewport_size: Tuple[int, int] = (1280, 720),
        anchor_names: Mapping[str, str] = ANCHOR_NODE_NAMES,
    ) -> "FlythroughSession":
        """Resolve anchors from a loaded scene, then build the session.

        ``AnchorMissing`` propagates before any camera state exists.
        """

        anchors = resolve_anchors(scene, anchor_names)
        return cls(anchors, clock, config, present, viewport_size)

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    @property
    def running(self) -> bool:
        return self.loop.running

    def start(self) -> None:
        self.loop.start()

    def restart(self) -> None:
        logger.info("Restarting flythrough")
        self.loop.start()

    def stop(self) -> None:
        self.loop.stop()

    def on_drag(self, delta_x: float, delta_y: float) -> bool:
        return self.free_look.on_drag(delta_x, delta_y)
