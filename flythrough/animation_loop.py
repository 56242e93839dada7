"""Frame-driven loop tying the clock, state machine and camera together."""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from .camera import CameraPose
from .free_look import FreeLookController
from .phases import Phase, PhaseStateMachine

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameClock(Protocol):
    """Monotonic millisecond time plus one-shot next-frame callbacks."""

    def now(self) -> float:
        ...

    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class PendingFrameQueue:
    """Next-frame callbacks held until the owner pumps ``run_pending``.

    Subclasses supply ``now``.
    """

    def __init__(self) -> None:
        self._next_handle = 1
        self._pending: Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run callbacks queued before this call; returns how many ran."""

        batch: List[Tuple[int, FrameCallback]] = list(self._pending.items())
        self._pending.clear()
        for _, callback in batch:
            callback()
        return len(batch)


class ManualFrameClock(PendingFrameQueue):
    """Frame clock driven by hand, for tests and headless playback."""

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms


class AnimationLoop:
    """Steps the choreography once per frame and hands the pose to a surface.

    Each run gets a generation number; a frame callback scheduled by an older
    run does nothing, so a stop or restart can never be followed by a stale
    pose write.
    """

    def __init__(
        self,
        clock: FrameClock,
        machine: PhaseStateMachine,
        pose: CameraPose,
        free_look: FreeLookController,
        present: Optional[Callable[[CameraPose], None]] = None,
    ) -> None:
        self.clock = clock
        self.machine = machine
        self.pose = pose
        self.free_look = free_look
        self.present = present
        self._generation = 0
        self._handle: Optional[int] = None
        self._running = False
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin a fresh run, discarding any run already in flight."""

        self._cancel_pending()
        self._generation += 1
        now = self.clock.now()
        anchors = self.machine.anchors
        self.machine.reset(now)
        self.pose.reset(anchors.start.position, anchors.middle.position)
        self.free_look.reset()
        self.frame_count = 0
        self._running = True
        logger.info(f"Flythrough run {self._generation} started at {now:.1f} ms")
        self._schedule()

    def stop(self) -> None:
        if not self._running:
            return
        self._cancel_pending()
        self._generation += 1
        self._running = False
        logger.info("Flythrough stopped")

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self.clock.cancel_frame(self._handle)
            self._handle = None

    def _schedule(self) -> None:
        generation = self._generation
        self._handle = self.clock.request_frame(lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if generation != self._generation or not self._running:
            return
        self._handle = None

        result = self.machine.step(self.clock.now(), self.pose.position)
        if result.writes_pose:
            self.pose.move_to(result.position)
            self.pose.look_at(result.look_at)
        else:
            self.free_look.apply(self.pose)
        if result.entered is Phase.FREE_LOOK:
            self.free_look.engage(self.pose, self.machine.anchors.end.position)
        self.frame_count += 1

        # A failing surface must not end the run; the error still propagates.
        try:
            if self.present is not None:
                self.present(self.pose)
        finally:
            if generation == self._generation and self._running:
                self._schedule()
