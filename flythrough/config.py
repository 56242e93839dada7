"""Tunable constants for the corridor flythrough."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLYTHROUGH_"


class ConfigError(ValueError):
    """Raised when a flythrough setting is missing a sane value."""


class LerpMode(str, Enum):
    """How the per-frame approach factor is derived."""

    FIXED = "fixed"
    TIME_NORMALIZED = "time_normalized"
    DISTANCE_SCALED = "distance_scaled"


@dataclass(frozen=True)
class FlythroughConfig:
    """Named timing and motion constants for one walk-through run.

    Durations are milliseconds, distances are scene units. ``approach_speed``
    is the fraction of the remaining distance covered per frame.
    """

    hold_duration_ms: float = 500.0
    approach_speed: float = 0.005
    arrival_epsilon: float = 0.05
    aim_pause_ms: float = 0.0
    free_look_sensitivity: float = 0.005
    lerp_mode: LerpMode = LerpMode.FIXED
    reference_frame_ms: float = 1000.0 / 60.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not 0.0 < self.approach_speed < 1.0:
            raise ConfigError(
                f"approach_speed must be in (0, 1), got {self.approach_speed}"
            )
        if self.arrival_epsilon <= 0.0:
            raise ConfigError(
                f"arrival_epsilon must be positive, got {self.arrival_epsilon}"
            )
        if self.hold_duration_ms < 0.0:
            raise ConfigError(
                f"hold_duration_ms must not be negative, got {self.hold_duration_ms}"
            )
        if self.aim_pause_ms < 0.0:
            raise ConfigError(f"aim_pause_ms must not be negative, got {self.aim_pause_ms}")
        if self.reference_frame_ms <= 0.0:
            raise ConfigError(
                f"reference_frame_ms must be positive, got {self.reference_frame_ms}"
            )

    @classmethod
    def from_env(cls, base: Optional["FlythroughConfig"] = None) -> "FlythroughConfig":
        """Build a config from ``FLYTHROUGH_*`` variables, loading ``.env`` first."""

        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.info(f"Flythrough configuration loaded from {dotenv_path}")

        preset_name = os.getenv(f"{ENV_PREFIX}PRESET")
        if base is None:
            base = _preset(preset_name) if preset_name else DEFAULT_CONFIG

        overrides: Dict[str, object] = {}
        for field_name, parse in _ENV_FIELDS.items():
            env_name = f"{ENV_PREFIX}{field_name.upper()}"
            raw = os.getenv(env_name)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[field_name] = parse(raw.strip())
            except ValueError as exc:
                raise ConfigError(f"Invalid value for {env_name}: {raw!r}") from exc

        config = replace(base, **overrides)
        logger.debug(f"Flythrough config: {config}")
        return config


_ENV_FIELDS: Dict[str, Callable[[str], object]] = {
    "hold_duration_ms": float,
    "approach_speed": float,
    "arrival_epsilon": float,
    "aim_pause_ms": float,
    "free_look_sensitivity": float,
    "lerp_mode": LerpMode,
    "reference_frame_ms": float,
}

DEFAULT_CONFIG = FlythroughConfig()

# The slower variant: a long establishing hold and a short beat before the
# camera swings toward the end anchor.
CINEMATIC_CONFIG = FlythroughConfig(hold_duration_ms=5000.0, aim_pause_ms=100.0)

PRESETS: Tuple[Tuple[str, FlythroughConfig], ...] = (
    ("default", DEFAULT_CONFIG),
    ("cinematic", CINEMATIC_CONFIG),
)


def _preset(name: str) -> FlythroughConfig:
    for preset_name, config in PRESETS:
        if preset_name == name.strip().lower():
            return config
    known = ", ".join(preset_name for preset_name, _ in PRESETS)
    raise ConfigError(f"Unknown {ENV_PREFIX}PRESET {name!r} (expected one of: {known})")
