"""Configuration management for rainfx."""

from rainfx.config.controls import Controls, ControlValues, EffectConfig
from rainfx.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "Controls",
    "ControlValues",
    "EffectConfig",
]
