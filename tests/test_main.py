"""Unit tests for the main module."""

import argparse

import pytest

from flythrough.animation_loop import PendingFrameQueue
from main import PygameFrameClock, _parse_size, parse_args


class TestPygameFrameClock:
    """Tests for the pygame-backed frame clock."""

    def test_is_a_pending_queue_without_manual_time(self) -> None:
        """Test the clock cannot be advanced by hand."""
        clock = PygameFrameClock()

        assert isinstance(clock, PendingFrameQueue)
        assert not hasattr(clock, "advance")

    def test_runs_requested_frames_once(self) -> None:
        """Test queued frames run on the next pump and cancelled ones do not."""
        clock = PygameFrameClock()
        calls = []
        clock.request_frame(lambda: calls.append("kept"))
        dropped = clock.request_frame(lambda: calls.append("dropped"))

        clock.cancel_frame(dropped)

        assert clock.run_pending() == 1
        assert clock.run_pending() == 0
        assert calls == ["kept"]


class TestParseArgs:
    """Tests for command line parsing."""

    def test_defaults(self) -> None:
        """Test the default window size and flags."""
        args = parse_args([])

        assert args.size == (1280, 720)
        assert not args.windowed
        assert not args.verbose

    def test_size_and_flags(self) -> None:
        """Test a windowed verbose run at a custom size."""
        args = parse_args(["--windowed", "--size", "640X480", "-v"])

        assert args.size == (640, 480)
        assert args.windowed
        assert args.verbose

    @pytest.mark.parametrize("value", ["640", "axb", "1x2x3"])
    def test_bad_size_is_rejected(self, value: str) -> None:
        """Test malformed sizes raise an argparse type error."""
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_size(value)
