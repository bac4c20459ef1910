"""Simulation state shared by the scheduler, renderer and input handlers."""

from __future__ import annotations

import numpy as np
import structlog

from rainfx.config.controls import Controls
from rainfx.simulation.drops import DropPool
from rainfx.simulation.splashes import SplashEmitter
from rainfx.simulation.surface import SurfaceDimensions
from rainfx.weather.lightning import LightningController

logger = structlog.get_logger()


class SimulationContext:
    """Everything one rain scene owns.

    Input handlers only touch controls, the pause flag and the target count;
    particle arrays are mutated from the frame tick (and ``reset``).

    Attributes:
        surface: Current surface dimensions, replaced atomically on resize
        controls: Effect controls
        drops: Rain drop pool
        splashes: Live splash particles
        lightning: Flash state machine and ambient trigger
        paused: Freeze the simulation while set (the flash still runs out)
        target_count: Desired pool size for the current density and surface
        frame: Number of simulated frames
    """

    def __init__(
        self,
        surface: SurfaceDimensions,
        controls: Controls | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.surface = surface
        self.controls = controls if controls is not None else Controls()
        self.drops = DropPool(self.rng)
        self.splashes = SplashEmitter(self.rng)
        self.lightning = LightningController(self.rng)
        self.paused = False
        self.frame = 0
        self.target_count = surface.target_count(self.controls.density)

    @classmethod
    def create(
        cls,
        width: float,
        height: float,
        dpr: float = 1.0,
        controls: Controls | None = None,
        seed: int | None = None,
    ) -> SimulationContext:
        """Build a context for a logical viewport size."""
        return cls(
            SurfaceDimensions.from_viewport(width, height, dpr),
            controls=controls,
            rng=np.random.default_rng(seed),
        )

    def resize(self, width: float, height: float, dpr: float | None = None) -> SurfaceDimensions:
        """Recompute surface dimensions and target count for a new viewport."""
        dpr = self.surface.dpr if dpr is None else dpr
        self.surface = SurfaceDimensions.from_viewport(width, height, dpr)
        self.target_count = self.surface.target_count(self.controls.density)
        logger.info(
            "surface_resized",
            width=self.surface.width,
            height=self.surface.height,
            dpr=self.surface.dpr,
            target_count=self.target_count,
        )
        return self.surface

    def set_density(self, density) -> bool:
        """Change density; the pool follows on the next tick."""
        accepted = self.controls.set("density", density)
        if accepted:
            self.target_count = self.surface.target_count(self.controls.density)
        return accepted

    def nudge_density(self, delta: int) -> None:
        self.controls.nudge("density", delta)
        self.target_count = self.surface.target_count(self.controls.density)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        logger.info("pause_toggled", paused=self.paused)
        return self.paused

    def trigger_lightning(self) -> None:
        self.lightning.trigger(source="manual")

    def reset(self) -> None:
        """Clear all drops and splashes and refill the pool."""
        self.drops.clear()
        self.splashes.clear()
        self.drops.ensure_size(self.target_count, self.surface)
        logger.info("scene_reset", drops=len(self.drops))
