"""Tests for configuration management."""

import dataclasses

import pytest

from rainfx.config import Controls, ControlValues, EffectConfig
from rainfx.config.controls import parse_color
from rainfx.config.settings import (
    AudioConfig,
    DisplayConfig,
    RainConfig,
    Settings,
    get_settings,
    reset_settings,
)
from rainfx.constants import Limits, Visuals


class TestDisplayConfig:
    """Test display configuration."""

    def test_defaults(self):
        config = DisplayConfig()
        assert config.width == 1280
        assert config.height == 720
        assert config.dpr == 1.0
        assert config.fps == 60

    @pytest.mark.parametrize("requested,expected", [(0.5, 1.0), (1.5, 1.5), (3.0, 2.0)])
    def test_dpr_clamped(self, requested, expected):
        assert DisplayConfig(dpr=requested).dpr == expected

    def test_validation(self):
        with pytest.raises(Exception):  # pydantic.ValidationError
            DisplayConfig(fps=0)

        with pytest.raises(Exception):
            DisplayConfig(background="not-a-color")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DISPLAY_WIDTH", "1920")
        assert DisplayConfig().width == 1920


class TestRainConfig:
    """Test rain defaults configuration."""

    def test_defaults(self):
        config = RainConfig()
        assert config.density == 900
        assert config.speed == 1.0
        assert config.splash is True
        assert config.lightning is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RAIN_DENSITY", "1500")
        monkeypatch.setenv("RAIN_LIGHTNING", "true")
        config = RainConfig()
        assert config.density == 1500
        assert config.lightning is True

    def test_bounds(self):
        with pytest.raises(Exception):
            RainConfig(density=Limits.DENSITY_MAX + 1)

        with pytest.raises(Exception):
            RainConfig(color="#zzzzzz")


class TestSettings:
    """Test global settings."""

    def setup_method(self):
        """Reset settings before each test."""
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_singleton(self):
        """Test that get_settings returns same instance."""
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_sub_configs(self):
        settings = Settings()
        assert isinstance(settings.display, DisplayConfig)
        assert isinstance(settings.rain, RainConfig)
        assert isinstance(settings.audio, AudioConfig)
        assert settings.audio.track is None
        assert settings.seed is None


class TestParseColor:
    """Test color validation."""

    @pytest.mark.parametrize("value", ["#9fb8d6", "white", "lightblue"])
    def test_valid(self, value):
        assert parse_color(value) == value

    @pytest.mark.parametrize("value", ["nope", "#12zz99"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_color(value)


class TestControls:
    """Test runtime controls."""

    @pytest.fixture
    def controls(self):
        return Controls()

    def test_parses_strings(self, controls):
        """Test numeric strings are accepted like slider values."""
        assert controls.set("speed", "1.5") is True
        assert controls.values.speed == 1.5

    def test_malformed_keeps_last_good(self, controls):
        """Test a non-numeric value keeps the previous one."""
        controls.set("speed", 2.0)
        assert controls.set("speed", "abc") is False
        assert controls.values.speed == 2.0

    def test_out_of_range_keeps_last_good(self, controls):
        assert controls.set("wind", 500) is False
        assert controls.values.wind == 0.0

    def test_nan_rejected(self, controls):
        assert controls.set("thickness", float("nan")) is False
        assert controls.values.thickness == 1.0

    def test_bad_color_rejected(self, controls):
        assert controls.set("color", "mauve-ish") is False
        assert controls.values.color == Visuals.COLOR_PRESETS[0]

    def test_unknown_control(self, controls):
        assert controls.set("gravity", 1) is False

    def test_update_per_field(self, controls):
        """Test one bad value does not block the others."""
        results = controls.update(speed="2", wind="x", splash=False)
        assert results == {"speed": True, "wind": False, "splash": True}
        assert controls.values.speed == 2.0
        assert controls.values.wind == 0.0
        assert controls.values.splash is False

    def test_nudge_stops_at_bounds(self, controls):
        controls.set("wind", Limits.WIND_MAX - 1)
        controls.nudge("wind", Limits.WIND_STEP)
        assert controls.values.wind == Limits.WIND_MAX

    def test_nudge_density(self, controls):
        controls.nudge("density", -Limits.DENSITY_STEP)
        assert controls.density == 800

    def test_toggle(self, controls):
        assert controls.toggle("lightning") is True
        assert controls.toggle("lightning") is False

    def test_cycle_color(self, controls):
        assert controls.cycle_color() == Visuals.COLOR_PRESETS[1]

    def test_cycle_from_custom_color(self, controls):
        controls.set("color", "red")
        assert controls.cycle_color() == Visuals.COLOR_PRESETS[0]

    def test_snapshot_is_immutable(self, controls):
        snapshot = controls.snapshot()
        assert isinstance(snapshot, EffectConfig)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.speed = 3.0

    def test_snapshot_tracks_changes(self, controls):
        first = controls.snapshot()
        assert controls.snapshot() is first
        controls.set("wind", 15)
        second = controls.snapshot()
        assert second is not first
        assert second.wind == 15.0
        assert first.wind == 0.0

    def test_from_settings(self):
        controls = Controls.from_settings(RainConfig(density=300, color="white"))
        assert controls.density == 300
        assert controls.values.color == "white"

    def test_values_frozen(self):
        values = ControlValues()
        with pytest.raises(Exception):
            values.speed = 2.0
