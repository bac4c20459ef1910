"""Runtime effect controls and the per-frame configuration snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pygame
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rainfx.constants import Limits, Visuals

if TYPE_CHECKING:
    from rainfx.config.settings import RainConfig

logger = structlog.get_logger()


def parse_color(value: str) -> str:
    """Validate a color string, returning it unchanged."""
    try:
        pygame.Color(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"unrecognized color {value!r}") from e
    return value


class ControlValues(BaseModel):
    """Validated backing state of the effect controls."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    density: int = Field(default=900, ge=Limits.DENSITY_MIN, le=Limits.DENSITY_MAX)
    speed: float = Field(default=1.0, ge=Limits.SPEED_MIN, le=Limits.SPEED_MAX)
    wind: float = Field(default=0.0, ge=Limits.WIND_MIN, le=Limits.WIND_MAX)
    thickness: float = Field(default=1.0, ge=Limits.THICKNESS_MIN, le=Limits.THICKNESS_MAX)
    color: str = Field(default=Visuals.COLOR_PRESETS[0])
    splash: bool = True
    lightning: bool = False

    @field_validator("color", mode="after")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Reject colors pygame cannot parse."""
        return parse_color(v)


@dataclass(frozen=True, slots=True)
class EffectConfig:
    """Immutable per-frame read of the effect parameters."""

    speed: float = 1.0
    wind: float = 0.0  # degrees from vertical
    thickness: float = 1.0
    color: str = Visuals.COLOR_PRESETS[0]
    splash: bool = True
    lightning: bool = False


_NUMERIC_BOUNDS: dict[str, tuple[float, float]] = {
    "density": (Limits.DENSITY_MIN, Limits.DENSITY_MAX),
    "speed": (Limits.SPEED_MIN, Limits.SPEED_MAX),
    "wind": (Limits.WIND_MIN, Limits.WIND_MAX),
    "thickness": (Limits.THICKNESS_MIN, Limits.THICKNESS_MAX),
}


class Controls:
    """Mutable holder of the current control values.

    Every change is validated; a rejected value leaves the last-known-good
    value in place.
    """

    def __init__(self, values: ControlValues | None = None) -> None:
        self._values = values if values is not None else ControlValues()
        self._snapshot: EffectConfig | None = None

    @classmethod
    def from_settings(cls, rain: RainConfig) -> Controls:
        """Build controls seeded from the configured defaults."""
        return cls(ControlValues(**rain.model_dump()))

    @property
    def values(self) -> ControlValues:
        return self._values

    @property
    def density(self) -> int:
        return self._values.density

    def set(self, name: str, raw: Any) -> bool:
        """Set a single control from a raw (possibly string) value.

        Returns:
            True if the value was accepted
        """
        if name not in ControlValues.model_fields:
            logger.warning("unknown_control", control=name)
            return False

        data = self._values.model_dump()
        data[name] = raw
        try:
            values = ControlValues.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "control_rejected",
                control=name,
                value=repr(raw),
                kept=getattr(self._values, name),
                error=e.errors()[0]["msg"],
            )
            return False

        self._values = values
        self._snapshot = None
        logger.debug("control_changed", control=name, value=getattr(values, name))
        return True

    def update(self, **changes: Any) -> dict[str, bool]:
        """Apply several changes, each accepted or rejected on its own."""
        return {name: self.set(name, raw) for name, raw in changes.items()}

    def nudge(self, name: str, delta: float) -> bool:
        """Step a numeric control, stopping at its bounds."""
        low, high = _NUMERIC_BOUNDS[name]
        value = max(low, min(high, getattr(self._values, name) + delta))
        if name == "density":
            value = int(value)
        else:
            value = round(value, 4)
        return self.set(name, value)

    def toggle(self, name: str) -> bool:
        """Flip a boolean control and return its new state."""
        self.set(name, not getattr(self._values, name))
        return getattr(self._values, name)

    def cycle_color(self) -> str:
        """Advance to the next color preset."""
        presets = Visuals.COLOR_PRESETS
        try:
            idx = (presets.index(self._values.color) + 1) % len(presets)
        except ValueError:
            idx = 0
        self.set("color", presets[idx])
        return self._values.color

    def snapshot(self) -> EffectConfig:
        """Return the immutable configuration for this frame."""
        if self._snapshot is None:
            v = self._values
            self._snapshot = EffectConfig(
                speed=v.speed,
                wind=v.wind,
                thickness=v.thickness,
                color=v.color,
                splash=v.splash,
                lightning=v.lightning,
            )
        return self._snapshot
