"""Pytest configuration and shared fixtures for all tests."""

import sys
from pathlib import Path
from typing import Callable, List, Tuple

import pytest


# Ensure the project root is importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from flythrough.anchors import Anchor, AnchorSet  # noqa: E402
from flythrough.animation_loop import ManualFrameClock  # noqa: E402
from flythrough.config import FlythroughConfig  # noqa: E402
from flythrough.phases import Phase, PhaseStateMachine  # noqa: E402


FRAME_MS = 16.0


@pytest.fixture
def line_anchors() -> AnchorSet:
    """Start on +Z, middle at the origin, end on +X."""
    return AnchorSet(
        start=Anchor("startingpoint", (0.0, 0.0, 5.0)),
        middle=Anchor("middlepoint", (0.0, 0.0, 0.0)),
        end=Anchor("endpoint", (5.0, 0.0, 0.0)),
    )


@pytest.fixture
def fast_config() -> FlythroughConfig:
    """Halve the remaining distance every frame and skip the hold."""
    return FlythroughConfig(
        hold_duration_ms=0.0,
        approach_speed=0.5,
        arrival_epsilon=0.05,
        aim_pause_ms=0.0,
    )


@pytest.fixture
def manual_clock() -> ManualFrameClock:
    return ManualFrameClock()


@pytest.fixture
def run_frames() -> Callable[[ManualFrameClock, int], None]:
    """Advance a manual clock one frame at a time, running queued callbacks."""

    def _run(clock: ManualFrameClock, count: int) -> None:
        for _ in range(count):
            clock.advance(FRAME_MS)
            clock.run_pending()

    return _run


@pytest.fixture
def drive_machine() -> Callable[..., List[Phase]]:
    """Step a machine over timestamps, feeding back each written position."""

    def _drive(
        machine: PhaseStateMachine,
        position: Tuple[float, float, float],
        timestamps: List[float],
    ) -> List[Phase]:
        phases = []
        for now in timestamps:
            result = machine.step(now, position)
            if result.position is not None:
                position = result.position
            phases.append(machine.phase)
        return phases

    return _drive
