"""Frame driver: one call per display refresh."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, Protocol

import structlog

from rainfx.constants import Timing
from rainfx.utils.error_recovery import TickGuard

if TYPE_CHECKING:
    from rainfx.config.controls import EffectConfig
    from rainfx.simulation.context import SimulationContext

logger = structlog.get_logger()


class FrameRenderer(Protocol):
    def draw(self, context: SimulationContext, config: EffectConfig) -> None: ...


def clamp_dt(raw: float) -> float:
    """Clamp a raw frame delta into (0, MAX_FRAME_DT]."""
    if not raw > Timing.MIN_FRAME_DT:  # also catches NaN
        return Timing.MIN_FRAME_DT
    return min(Timing.MAX_FRAME_DT, raw)


class FrameScheduler:
    """Advances the simulation and renders once per tick.

    Attributes:
        context: Simulation state being driven
        renderer: Optional render pass invoked after the update
        guard: Keeps a failing tick from stopping the loop
        drawn: Whether the last tick rendered a frame
        clock: Monotonic clock in seconds
    """

    def __init__(
        self,
        context: SimulationContext,
        renderer: FrameRenderer | None = None,
        guard: TickGuard | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.context = context
        self.renderer = renderer
        self.guard = guard if guard is not None else TickGuard()
        self.clock = clock
        self.drawn = False
        self._last: float | None = None
        self._redraw = False
        self._drawn_opacity = 0.0

    def start(self, now: float | None = None) -> None:
        """Set the reference time for the first tick."""
        self._last = self.clock() if now is None else now

    def request_redraw(self) -> None:
        """Ask for the scene to be drawn on the next tick even when paused."""
        self._redraw = True

    def tick(self, now: float | None = None) -> float:
        """Run one frame.

        While paused the simulation is frozen, but the lightning flash keeps
        running on real time and the frozen scene is redrawn whenever the
        overlay changes or a redraw was requested.

        Args:
            now: Timestamp in seconds, defaults to ``clock()``

        Returns:
            The clamped simulation step used (computed even while paused)
        """
        if now is None:
            now = self.clock()
        elapsed = 0.0 if self._last is None else now - self._last
        self._last = now
        dt = clamp_dt(elapsed)
        elapsed = elapsed if elapsed > 0 else 0.0

        if self.context.paused:
            self.drawn = self.guard.run(self.paused_step, elapsed, frame=self.context.frame) is True
            return dt

        self.drawn = self.renderer is not None
        self._redraw = False
        self.guard.run(self.step, dt, elapsed, frame=self.context.frame)
        self.context.frame += 1
        return dt

    def step(self, dt: float, elapsed: float) -> None:
        """Simulate and draw one frame of ``dt`` seconds."""
        ctx = self.context
        config = ctx.controls.snapshot()
        surface = ctx.surface

        ctx.drops.ensure_size(ctx.target_count, surface)
        ctx.drops.update(dt, config, surface, ctx.splashes)
        ctx.splashes.update(dt, surface)
        ctx.lightning.update(dt, elapsed, config.lightning)

        if self.renderer is not None:
            self.renderer.draw(ctx, config)
            self._drawn_opacity = ctx.lightning.opacity

    def paused_step(self, elapsed: float) -> bool:
        """Advance the flash only, redrawing the frozen scene if needed.

        Returns:
            True if the renderer drew
        """
        ctx = self.context
        ctx.lightning.flash.update(elapsed)
        if self.renderer is None:
            return False
        if not self._redraw and ctx.lightning.opacity == self._drawn_opacity:
            return False

        self._redraw = False
        self.renderer.draw(ctx, ctx.controls.snapshot())
        self._drawn_opacity = ctx.lightning.opacity
        return True
