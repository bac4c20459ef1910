"""Draws the rain scene onto a pygame surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from rainfx.constants import Lightning, Visuals
from rainfx.simulation.drops import DropPool
from rainfx.simulation.splashes import SplashEmitter

if TYPE_CHECKING:
    from rainfx.config.controls import EffectConfig
    from rainfx.simulation.context import SimulationContext


def build_fog(size: tuple[int, int]) -> pygame.Surface:
    """Vertical gradient that darkens slightly toward the bottom."""
    width, height = size
    column = pygame.Surface((1, max(1, height)), pygame.SRCALPHA)
    top = Visuals.FOG_TOP_ALPHA * 255
    bottom = Visuals.FOG_BOTTOM_ALPHA * 255
    span = max(1, height - 1)
    for row in range(max(1, height)):
        alpha = int(round(top + (bottom - top) * row / span))
        column.set_at((0, row), (*Visuals.FOG_COLOR, alpha))
    return pygame.transform.scale(column, (max(1, width), max(1, height)))


class RenderPass:
    """Clears the target and composites fog, drops, splashes and flash.

    Attributes:
        target: Surface drawn into each frame
        background: Clear color
    """

    def __init__(self, target: pygame.Surface, background: str = Visuals.DEFAULT_BACKGROUND) -> None:
        self.target = target
        self.background = pygame.Color(background)
        self.fog_overlay: pygame.Surface | None = None
        self._splash_layer: pygame.Surface | None = None
        self._flash_layer: pygame.Surface | None = None

    def set_target(self, target: pygame.Surface) -> None:
        """Point at a new surface (after a resize)."""
        self.target = target

    def draw(self, context: SimulationContext, config: EffectConfig) -> None:
        """Render the current frame state."""
        screen = self.target
        screen.fill(self.background)
        self.draw_fog(screen)

        color = pygame.Color(config.color)
        dpr = context.surface.dpr
        self.draw_drops(screen, context.drops, config, color, dpr)
        self.draw_splashes(screen, context.splashes, config, color, dpr)
        self.draw_flash(screen, context.lightning.opacity)

    def draw_fog(self, screen: pygame.Surface) -> None:
        if self.fog_overlay is None or self.fog_overlay.get_size() != screen.get_size():
            self.fog_overlay = build_fog(screen.get_size())
        screen.blit(self.fog_overlay, (0, 0))

    def draw_drops(
        self,
        screen: pygame.Surface,
        drops: DropPool,
        config: EffectConfig,
        color: pygame.Color,
        dpr: float,
    ) -> int:
        """Stroke one streak per active drop."""
        head_x, head_y, tail_x, tail_y = drops.streaks(config, dpr)
        width = max(1, round(DropPool.line_width(config.thickness, dpr)))
        line = pygame.draw.line
        for x0, y0, x1, y1 in zip(head_x.tolist(), head_y.tolist(), tail_x.tolist(), tail_y.tolist()):
            line(screen, color, (x0, y0), (x1, y1), width)
        return len(head_x)

    def draw_splashes(
        self,
        screen: pygame.Surface,
        splashes: SplashEmitter,
        config: EffectConfig,
        color: pygame.Color,
        dpr: float,
    ) -> int:
        """Fill a fading square per live splash particle."""
        if not len(splashes):
            return 0

        layer = self._layer("_splash_layer", screen.get_size())
        layer.fill((0, 0, 0, 0))
        size = max(1, round(SplashEmitter.particle_size(config.thickness, dpr)))
        alphas = (splashes.opacity() * 255).astype(int).tolist()
        rgb = (color.r, color.g, color.b)
        rect = pygame.draw.rect
        for x, y, alpha in zip(splashes.x.tolist(), splashes.y.tolist(), alphas):
            rect(layer, (*rgb, alpha), (int(x), int(y), size, size))
        screen.blit(layer, (0, 0))
        return len(alphas)

    def draw_flash(self, screen: pygame.Surface, opacity: float) -> None:
        if opacity <= 0:
            return
        layer = self._layer("_flash_layer", screen.get_size())
        layer.fill((*Lightning.COLOR, int(opacity * 255)))
        screen.blit(layer, (0, 0))

    def _layer(self, name: str, size: tuple[int, int]) -> pygame.Surface:
        layer = getattr(self, name)
        if layer is None or layer.get_size() != size:
            layer = pygame.Surface(size, pygame.SRCALPHA)
            setattr(self, name, layer)
        return layer
