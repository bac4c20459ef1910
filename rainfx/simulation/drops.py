"""Fixed-capacity pool of falling rain drops."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import structlog

from rainfx.constants import Rain
from rainfx.simulation import kinematics

if TYPE_CHECKING:
    from rainfx.config.controls import EffectConfig
    from rainfx.simulation.splashes import SplashEmitter
    from rainfx.simulation.surface import SurfaceDimensions

logger = structlog.get_logger()


class DropPool:
    """Struct-of-arrays arena of rain drops.

    Slots ``[0, len(self))`` belong to the pool. Growing spawns drops into the
    next free slots; shrinking truncates. Existing slots are never moved.

    Attributes:
        rng: Random generator used for spawn position and base speed
        capacity: Maximum number of drops the arena holds
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        capacity: int = Rain.MAX_DROPS,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.capacity = capacity
        self._x = np.zeros(capacity, dtype=np.float64)
        self._y = np.zeros(capacity, dtype=np.float64)
        self._base = np.zeros(capacity, dtype=np.float64)
        self._active = np.zeros(capacity, dtype=bool)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def x(self) -> np.ndarray:
        return self._x[: self._count]

    @property
    def y(self) -> np.ndarray:
        return self._y[: self._count]

    @property
    def base(self) -> np.ndarray:
        return self._base[: self._count]

    @property
    def active(self) -> np.ndarray:
        return self._active[: self._count]

    def ensure_size(self, target: int, surface: SurfaceDimensions) -> int:
        """Grow or shrink the pool to ``target`` drops (capped at capacity).

        Returns:
            The resulting pool size
        """
        target = max(0, min(int(target), self.capacity))
        current = self._count
        if target == current:
            return current

        if target > current:
            self._count = target
            self.spawn(np.arange(current, target), surface, initial=True)
        else:
            self._active[target:current] = False
            self._count = target

        logger.debug("pool_resized", previous=current, size=target)
        return target

    def spawn(self, index: np.ndarray, surface: SurfaceDimensions, initial: bool) -> None:
        """(Re)spawn the drops at ``index`` above the screen.

        Args:
            index: Slot indices to spawn
            surface: Current surface dimensions
            initial: Scatter far above the screen (initial fill) instead of
                just above the top edge (recycle)
        """
        n = len(index)
        if n == 0:
            return
        w, h = surface.width, surface.height
        top = -h if initial else -h * Rain.RECYCLE_BAND

        self._x[index] = self.rng.uniform(-w * Rain.SPAWN_OVERSCAN, w * (1 + Rain.SPAWN_OVERSCAN), n)
        self._y[index] = self.rng.uniform(top, -Rain.SPAWN_TOP_GAP, n)
        self._base[index] = self.rng.uniform(Rain.BASE_SPEED_MIN, Rain.BASE_SPEED_MAX, n)
        self._active[index] = True

    def update(
        self,
        dt: float,
        config: EffectConfig,
        surface: SurfaceDimensions,
        splashes: SplashEmitter | None = None,
    ) -> int:
        """Advance every active drop by ``dt`` seconds.

        Drops falling past the bottom edge emit a splash at their pre-recycle
        position (when enabled) and are respawned above the top edge in the
        same call.

        Returns:
            Number of drops that hit the ground
        """
        n = self._count
        if n == 0:
            return 0

        active = self._active[:n]
        x = self._x[:n]
        y = self._y[:n]
        vx, vy = kinematics.velocity(self._base[:n], config.speed, config.wind)
        step = dt * surface.dpr
        x += np.where(active, vx, 0.0) * step
        y += np.where(active, vy, 0.0) * step

        hits = np.flatnonzero(active & (y > surface.height))
        if hits.size:
            active[hits] = False
            if config.splash and splashes is not None:
                magnitude = kinematics.fall_magnitude(self._base[hits], config.speed)
                splashes.emit_many(
                    x[hits],
                    surface.height - Rain.GROUND_OFFSET,
                    kinematics.splash_power(magnitude),
                )
            self.spawn(hits, surface, initial=False)

        w = surface.width
        x[x < -w * Rain.WRAP_MARGIN] += w * Rain.WRAP_SPAN
        x[x > w * (1 + Rain.WRAP_MARGIN)] -= w * Rain.WRAP_SPAN
        return int(hits.size)

    def streaks(self, config: EffectConfig, dpr: float) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Head and tail coordinates of each active drop's streak.

        Returns:
            (head_x, head_y, tail_x, tail_y) arrays
        """
        active = self.active
        x = self.x[active]
        y = self.y[active]
        magnitude = kinematics.fall_magnitude(self.base[active], config.speed)
        length = kinematics.streak_length(magnitude, dpr)
        tail_x, tail_y = kinematics.streak_tail(x, y, config.wind, length)
        return x, y, tail_x, tail_y

    @staticmethod
    def line_width(thickness: float, dpr: float) -> float:
        """Stroke width for drop streaks."""
        return max(Rain.MIN_LINE_WIDTH, thickness * dpr)

    def clear(self) -> None:
        """Empty the pool."""
        self._active[: self._count] = False
        self._count = 0
