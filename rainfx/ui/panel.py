"""Control panel overlay listing parameters and key bindings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from rainfx.simulation.context import SimulationContext


KEY_HELP = [
    "SPACE pause   L lightning   R reset",
    "UP/DOWN speed   LEFT/RIGHT wind",
    "PGUP/PGDN density   +/- thickness",
    "C color   S splash   T storm   M audio",
    "H hide panel   ESC quit",
]


class ControlPanel:
    """Translucent text panel in the top-left corner.

    Attributes:
        visible: Whether the panel is drawn
    """

    def __init__(self, visible: bool = True) -> None:
        self.visible = visible
        self.font_medium = None
        self.font_small = None
        self._initialized = False

    def toggle(self) -> bool:
        self.visible = not self.visible
        return self.visible

    def _init_fonts(self) -> None:
        """Initialize fonts (call after pygame.init)."""
        if self._initialized:
            return

        if not pygame.font.get_init():
            pygame.font.init()
        try:
            self.font_medium = pygame.font.SysFont("consolas", 18, bold=True)
            self.font_small = pygame.font.SysFont("consolas", 14)
        except Exception:
            # SysFont can fail on systems without fontconfig
            self.font_medium = pygame.font.Font(None, 20)
            self.font_small = pygame.font.Font(None, 16)
        self._initialized = True

    def lines(self, context: SimulationContext) -> list[str]:
        """Text rows describing the current state."""
        v = context.controls.values
        return [
            f"DENSITY   {v.density}  ({context.target_count} drops)",
            f"SPEED     {v.speed:.2f}x",
            f"WIND      {v.wind:+.0f} deg",
            f"THICKNESS {v.thickness:.2f}px",
            f"COLOR     {v.color}",
            f"SPLASH    {'on' if v.splash else 'off'}",
            f"LIGHTNING {'on' if v.lightning else 'off'}",
        ]

    def draw(self, screen: pygame.Surface, context: SimulationContext) -> None:
        """Draw the panel if visible."""
        if not self.visible:
            return
        self._init_fonts()

        rows = self.lines(context)
        panel_rect = pygame.Rect(10, 10, 330, 30 + 22 * len(rows) + 18 * len(KEY_HELP))
        s = pygame.Surface((panel_rect.width, panel_rect.height), pygame.SRCALPHA)
        s.fill((0, 0, 0, 150))
        screen.blit(s, panel_rect.topleft)
        pygame.draw.rect(screen, (90, 100, 120), panel_rect, 1)

        y = panel_rect.y + 10
        for row in rows:
            text = self.font_medium.render(row, True, (220, 230, 245))
            screen.blit(text, (panel_rect.x + 10, y))
            y += 22

        y += 8
        for row in KEY_HELP:
            text = self.font_small.render(row, True, (150, 160, 180))
            screen.blit(text, (panel_rect.x + 10, y))
            y += 18
