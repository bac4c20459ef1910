"""Splash particles emitted when drops reach the ground."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from rainfx.constants import Splash

if TYPE_CHECKING:
    from rainfx.simulation.surface import SurfaceDimensions


class SplashEmitter:
    """Live list of splash particles stored as parallel arrays.

    Entries ``[0, len(self))`` are alive; dead entries are compacted out after
    every update, keeping emission order.

    Attributes:
        rng: Random generator used for launch angle, speed and lifetime
    """

    _FIELDS = ("_x", "_y", "_vx", "_vy", "_life")

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        capacity: int = Splash.INITIAL_CAPACITY,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self._count = 0
        for name in self._FIELDS:
            setattr(self, name, np.zeros(capacity, dtype=np.float64))

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._x.shape[0]

    @property
    def x(self) -> np.ndarray:
        return self._x[: self._count]

    @property
    def y(self) -> np.ndarray:
        return self._y[: self._count]

    @property
    def vx(self) -> np.ndarray:
        return self._vx[: self._count]

    @property
    def vy(self) -> np.ndarray:
        return self._vy[: self._count]

    @property
    def life(self) -> np.ndarray:
        return self._life[: self._count]

    @staticmethod
    def burst_size(power: float) -> int:
        """Particles in one burst: 5 + floor(power * 0.5)."""
        return Splash.BASE_COUNT + math.floor(power * Splash.COUNT_PER_POWER)

    def emit(self, x: float, y: float, power: float) -> int:
        """Emit one burst at (x, y).

        Returns:
            Number of particles spawned
        """
        return self.emit_many(np.array([x], dtype=np.float64), y, np.array([power], dtype=np.float64))

    def emit_many(self, xs: np.ndarray, y, powers: np.ndarray) -> int:
        """Emit one burst per origin, in origin order.

        Args:
            xs: Burst x positions
            y: Burst y position (scalar or per-origin array)
            powers: Burst strength per origin
        """
        xs = np.asarray(xs, dtype=np.float64)
        powers = np.asarray(powers, dtype=np.float64)
        if xs.size == 0:
            return 0

        counts = Splash.BASE_COUNT + np.floor(powers * Splash.COUNT_PER_POWER).astype(np.int64)
        total = int(counts.sum())
        self._reserve(self._count + total)

        ys = np.broadcast_to(np.asarray(y, dtype=np.float64), xs.shape)
        angle = self.rng.uniform(Splash.ANGLE_MIN, Splash.ANGLE_MAX, total)
        speed = self.rng.uniform(Splash.SPEED_MIN, Splash.SPEED_MAX, total)
        speed *= np.repeat(powers * Splash.SPEED_POWER_FACTOR, counts)

        s = slice(self._count, self._count + total)
        self._x[s] = np.repeat(xs, counts)
        self._y[s] = np.repeat(ys, counts)
        self._vx[s] = np.cos(angle) * speed
        self._vy[s] = np.sin(angle) * speed
        self._life[s] = self.rng.uniform(Splash.LIFE_MIN, Splash.LIFE_MAX, total)
        self._count += total
        return total

    def update(self, dt: float, surface: SurfaceDimensions) -> int:
        """Apply gravity, move, age, and drop dead particles.

        Returns:
            Number of particles removed
        """
        n = self._count
        if n == 0:
            return 0

        step = dt * surface.dpr
        vy = self._vy[:n]
        vy += Splash.GRAVITY * dt
        self._x[:n] += self._vx[:n] * step
        self._y[:n] += vy * step
        self._life[:n] -= dt

        alive = (self._life[:n] > 0) & (self._y[:n] <= surface.height)
        kept = int(np.count_nonzero(alive))
        if kept < n:
            for name in self._FIELDS:
                arr = getattr(self, name)
                arr[:kept] = arr[:n][alive]
            self._count = kept
        return n - kept

    def opacity(self) -> np.ndarray:
        """Per-particle opacity fading linearly over the last 0.25 s."""
        return np.clip(self.life / Splash.FADE_WINDOW, 0.0, 1.0) * Splash.MAX_OPACITY

    @staticmethod
    def particle_size(thickness: float, dpr: float) -> float:
        """Side of the square drawn for each particle."""
        return max(1.0, thickness * dpr * Splash.SIZE_FACTOR)

    def clear(self) -> None:
        """Remove all particles."""
        self._count = 0

    def _reserve(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        new_capacity = max(needed, self.capacity * 2)
        for name in self._FIELDS:
            old = getattr(self, name)
            grown = np.zeros(new_capacity, dtype=np.float64)
            grown[: self._count] = old[: self._count]
            setattr(self, name, grown)
