"""Drawing surface dimensions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from rainfx.constants import Rain, Visuals


def clamp_dpr(dpr: float) -> float:
    """Clamp a device pixel ratio into [1, 2]."""
    return max(Visuals.DPR_MIN, min(Visuals.DPR_MAX, dpr))


@dataclass(frozen=True)
class SurfaceDimensions:
    """Device-pixel size of the drawing surface.

    Replaced as a whole on resize so readers never see a half-updated value.

    Attributes:
        width: Surface width in device pixels
        height: Surface height in device pixels
        dpr: Device pixel ratio used to scale motion and strokes
    """

    width: int
    height: int
    dpr: float = 1.0

    @classmethod
    def from_viewport(cls, width: float, height: float, dpr: float = 1.0) -> SurfaceDimensions:
        """Build dimensions from a logical viewport size.

        Args:
            width: Viewport width in logical pixels
            height: Viewport height in logical pixels
            dpr: Requested device pixel ratio (clamped)
        """
        dpr = clamp_dpr(dpr)
        return cls(math.floor(width * dpr), math.floor(height * dpr), dpr)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def target_count(self, density: int) -> int:
        """Number of drops for ``density`` scaled by area, capped at MAX_DROPS."""
        count = math.floor(density * self.area / Rain.REFERENCE_AREA + 0.5)
        return max(0, min(count, Rain.MAX_DROPS))
