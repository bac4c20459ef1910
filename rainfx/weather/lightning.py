"""Lightning flash sequence and ambient trigger."""

from __future__ import annotations

from enum import Enum, auto

import numpy as np
import structlog

from rainfx.constants import Lightning

logger = structlog.get_logger()


class FlashPhase(Enum):
    """Phases of a lightning flash."""
    IDLE = auto()
    FLASH1 = auto()
    GAP = auto()
    FLASH2 = auto()
    FADE = auto()


# (phase, end time in seconds since trigger)
TIMELINE: list[tuple[FlashPhase, float]] = [
    (FlashPhase.FLASH1, Lightning.FLASH1_END),
    (FlashPhase.GAP, Lightning.GAP_END),
    (FlashPhase.FLASH2, Lightning.FLASH2_END),
    (FlashPhase.FADE, Lightning.FADE_END),
]


class LightningFlash:
    """Two quick flashes of a white overlay, advanced by elapsed time.

    Attributes:
        phase: Current phase
        elapsed: Seconds since the flash was triggered
    """

    def __init__(self) -> None:
        self.phase = FlashPhase.IDLE
        self.elapsed = 0.0

    @property
    def active(self) -> bool:
        return self.phase is not FlashPhase.IDLE

    def trigger(self) -> None:
        """Start (or restart) the flash sequence."""
        self.phase = FlashPhase.FLASH1
        self.elapsed = 0.0

    def update(self, elapsed: float) -> FlashPhase:
        """Advance the sequence by ``elapsed`` seconds of real time."""
        if self.phase is FlashPhase.IDLE:
            return self.phase

        self.elapsed += elapsed
        for phase, end in TIMELINE:
            if self.elapsed < end:
                self.phase = phase
                break
        else:
            self.phase = FlashPhase.IDLE
            self.elapsed = 0.0
        return self.phase

    @property
    def opacity(self) -> float:
        """Overlay opacity for the current phase."""
        if self.phase is FlashPhase.FLASH1:
            return Lightning.FLASH1_ALPHA
        if self.phase is FlashPhase.FLASH2:
            return Lightning.FLASH2_ALPHA
        if self.phase is FlashPhase.FADE:
            span = Lightning.FADE_END - Lightning.FLASH2_END
            remaining = (Lightning.FADE_END - self.elapsed) / span
            return Lightning.FLASH2_ALPHA * max(0.0, min(1.0, remaining))
        return 0.0

    def reset(self) -> None:
        self.phase = FlashPhase.IDLE
        self.elapsed = 0.0


class LightningController:
    """Owns the flash and decides when ambient lightning strikes.

    Attributes:
        flash: The overlay flash state machine
        cooldown: Seconds left before ambient lightning may fire again
        strikes: Total flashes triggered
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.flash = LightningFlash()
        self.cooldown = 0.0
        self.strikes = 0

    def trigger(self, source: str = "manual") -> None:
        """Fire a flash immediately."""
        self.flash.trigger()
        self.strikes += 1
        logger.info("lightning_triggered", source=source, strikes=self.strikes)

    def update(self, dt: float, elapsed: float, enabled: bool) -> bool:
        """Advance the flash and roll for ambient lightning.

        Args:
            dt: Clamped simulation step, drives the cooldown
            elapsed: Real time since the previous tick, drives the flash
            enabled: Whether ambient lightning is switched on

        Returns:
            True if ambient lightning fired this tick
        """
        self.flash.update(elapsed)
        if not enabled:
            return False

        self.cooldown -= dt
        if self.cooldown <= 0 and self.rng.random() < Lightning.AMBIENT_CHANCE:
            self.trigger(source="ambient")
            self.cooldown = float(self.rng.uniform(Lightning.COOLDOWN_MIN, Lightning.COOLDOWN_MAX))
            return True
        return False

    @property
    def opacity(self) -> float:
        return self.flash.opacity
