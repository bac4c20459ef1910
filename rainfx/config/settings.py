"""Application settings with validation."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rainfx.config.controls import parse_color
from rainfx.constants import Limits, Visuals


class DisplayConfig(BaseSettings):
    """Window and drawing surface configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DISPLAY_",
        extra="ignore",
    )

    width: int = Field(default=Visuals.DEFAULT_WIDTH, ge=160, description="Viewport width in logical pixels")
    height: int = Field(default=Visuals.DEFAULT_HEIGHT, ge=120, description="Viewport height in logical pixels")
    dpr: float = Field(default=1.0, gt=0, description="Device pixel ratio, clamped to [1, 2]")
    fps: int = Field(default=Visuals.DEFAULT_FPS, ge=1, le=240, description="Display refresh cap")
    background: str = Field(default=Visuals.DEFAULT_BACKGROUND, description="Clear color")

    @field_validator("dpr", mode="after")
    @classmethod
    def clamp_dpr(cls, v: float) -> float:
        """Clamp device pixel ratio into the supported range."""
        return max(Visuals.DPR_MIN, min(Visuals.DPR_MAX, v))

    @field_validator("background", mode="after")
    @classmethod
    def validate_background(cls, v: str) -> str:
        """Ensure background is a color pygame understands."""
        return parse_color(v)


class RainConfig(BaseSettings):
    """Initial values of the rain effect controls."""

    model_config = SettingsConfigDict(
        env_prefix="RAIN_",
        extra="ignore",
    )

    density: int = Field(default=900, ge=Limits.DENSITY_MIN, le=Limits.DENSITY_MAX)
    speed: float = Field(default=1.0, ge=Limits.SPEED_MIN, le=Limits.SPEED_MAX)
    wind: float = Field(default=0.0, ge=Limits.WIND_MIN, le=Limits.WIND_MAX)
    thickness: float = Field(default=1.0, ge=Limits.THICKNESS_MIN, le=Limits.THICKNESS_MAX)
    color: str = Field(default=Visuals.COLOR_PRESETS[0])
    splash: bool = Field(default=True)
    lightning: bool = Field(default=False)

    @field_validator("color", mode="after")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Ensure drop color is a color pygame understands."""
        return parse_color(v)


class AudioConfig(BaseSettings):
    """Background audio configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUDIO_",
        extra="ignore",
    )

    track: Path | None = Field(default=None, description="Looping background track")
    volume: float = Field(default=0.5, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Global application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["development", "test", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    seed: int | None = Field(default=None, description="Random seed for particle spawning")

    # Sub-configs
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    rain: RainConfig = Field(default_factory=RainConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
