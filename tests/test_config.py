"""Unit tests for the config module."""

from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from flythrough.config import (
    CINEMATIC_CONFIG,
    DEFAULT_CONFIG,
    ConfigError,
    FlythroughConfig,
    LerpMode,
)

ENV_VARS = [
    "FLYTHROUGH_PRESET",
    "FLYTHROUGH_HOLD_DURATION_MS",
    "FLYTHROUGH_APPROACH_SPEED",
    "FLYTHROUGH_ARRIVAL_EPSILON",
    "FLYTHROUGH_AIM_PAUSE_MS",
    "FLYTHROUGH_FREE_LOOK_SENSITIVITY",
    "FLYTHROUGH_LERP_MODE",
    "FLYTHROUGH_REFERENCE_FRAME_MS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Provide an environment without flythrough variables or a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("flythrough.config.find_dotenv", return_value=""):
        yield


class TestDefaults:
    """Tests for the built-in constants."""

    def test_default_values(self) -> None:
        """Test defaults match the documented constants."""
        config = FlythroughConfig()

        assert config.hold_duration_ms == 500.0
        assert config.approach_speed == 0.005
        assert config.arrival_epsilon == 0.05
        assert config.aim_pause_ms == 0.0
        assert config.free_look_sensitivity == 0.005
        assert config.lerp_mode is LerpMode.FIXED
        assert config == DEFAULT_CONFIG

    def test_cinematic_preset(self) -> None:
        """Test the slower preset only changes the timings."""
        assert CINEMATIC_CONFIG.hold_duration_ms == 5000.0
        assert CINEMATIC_CONFIG.aim_pause_ms == 100.0
        assert CINEMATIC_CONFIG.approach_speed == DEFAULT_CONFIG.approach_speed

    def test_frozen(self) -> None:
        """Test a config cannot be modified in place."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.approach_speed = 0.5  # type: ignore[misc]


class TestValidation:
    """Tests for constructor validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"approach_speed": 0.0},
            {"approach_speed": 1.0},
            {"approach_speed": -0.1},
            {"arrival_epsilon": 0.0},
            {"hold_duration_ms": -1.0},
            {"aim_pause_ms": -5.0},
            {"reference_frame_ms": 0.0},
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict) -> None:
        """Test out-of-range settings raise ConfigError."""
        with pytest.raises(ConfigError):
            FlythroughConfig(**kwargs)

    def test_config_error_is_value_error(self) -> None:
        """Test ConfigError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            FlythroughConfig(approach_speed=2.0)


class TestFromEnv:
    """Tests for environment loading."""

    def test_no_variables_gives_defaults(self, clean_env: None) -> None:
        """Test an empty environment yields the default config."""
        assert FlythroughConfig.from_env() == DEFAULT_CONFIG

    def test_overrides(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test each variable overrides its field."""
        monkeypatch.setenv("FLYTHROUGH_HOLD_DURATION_MS", "0")
        monkeypatch.setenv("FLYTHROUGH_APPROACH_SPEED", "0.5")
        monkeypatch.setenv("FLYTHROUGH_ARRIVAL_EPSILON", "0.01")
        monkeypatch.setenv("FLYTHROUGH_LERP_MODE", "time_normalized")

        config = FlythroughConfig.from_env()

        assert config.hold_duration_ms == 0.0
        assert config.approach_speed == 0.5
        assert config.arrival_epsilon == 0.01
        assert config.lerp_mode is LerpMode.TIME_NORMALIZED

    def test_blank_values_are_ignored(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test empty variables fall back to the base value."""
        monkeypatch.setenv("FLYTHROUGH_APPROACH_SPEED", "  ")

        assert FlythroughConfig.from_env().approach_speed == 0.005

    def test_preset(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the preset variable selects the cinematic timings."""
        monkeypatch.setenv("FLYTHROUGH_PRESET", "Cinematic")
        monkeypatch.setenv("FLYTHROUGH_AIM_PAUSE_MS", "250")

        config = FlythroughConfig.from_env()

        assert config.hold_duration_ms == 5000.0
        assert config.aim_pause_ms == 250.0

    def test_explicit_base(self, clean_env: None) -> None:
        """Test overrides apply on top of a caller-supplied base."""
        base = FlythroughConfig(approach_speed=0.25)

        assert FlythroughConfig.from_env(base) == base

    @pytest.mark.parametrize(
        "name, value",
        [
            ("FLYTHROUGH_APPROACH_SPEED", "fast"),
            ("FLYTHROUGH_LERP_MODE", "cubic"),
            ("FLYTHROUGH_PRESET", "slowmo"),
        ],
    )
    def test_unparsable_values(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        """Test bad variables raise ConfigError naming the variable."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigError, match=name):
            FlythroughConfig.from_env()

    def test_out_of_range_value(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a parsable but invalid value is still rejected."""
        monkeypatch.setenv("FLYTHROUGH_APPROACH_SPEED", "1.5")

        with pytest.raises(ConfigError):
            FlythroughConfig.from_env()

    def test_loads_dotenv_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test values from a .env file in the working directory are used."""
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        # Registered with monkeypatch so teardown removes what load_dotenv sets.
        monkeypatch.setenv("FLYTHROUGH_APPROACH_SPEED", "0.1")
        (tmp_path / ".env").write_text("FLYTHROUGH_APPROACH_SPEED=0.25\n")
        monkeypatch.chdir(tmp_path)

        assert FlythroughConfig.from_env().approach_speed == 0.25
