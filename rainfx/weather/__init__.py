"""Lightning effects."""

from rainfx.weather.lightning import FlashPhase, LightningController, LightningFlash

__all__ = ["FlashPhase", "LightningController", "LightningFlash"]
