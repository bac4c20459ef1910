"""Particle simulation components."""

from rainfx.simulation.context import SimulationContext
from rainfx.simulation.drops import DropPool
from rainfx.simulation.scheduler import FrameScheduler, clamp_dt
from rainfx.simulation.splashes import SplashEmitter
from rainfx.simulation.surface import SurfaceDimensions

__all__ = [
    "DropPool",
    "FrameScheduler",
    "SimulationContext",
    "SplashEmitter",
    "SurfaceDimensions",
    "clamp_dt",
]
