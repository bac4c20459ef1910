"""Interactive pygame window running the rain effect."""

from __future__ import annotations

import pygame

from rainfx.config import Controls, Settings, get_settings
from rainfx.constants import Limits
from rainfx.logging_config import get_logger
from rainfx.render import RenderPass
from rainfx.simulation import FrameScheduler, SimulationContext
from rainfx.ui import AudioToggle, ControlPanel

logger = get_logger(__name__)


class RainApp:
    """Owns the window, the event loop and the keyboard bindings.

    Attributes:
        settings: Application settings
        context: Simulation state
        panel: Control panel overlay
        audio: Background audio toggle
        screen: Display surface (None until the window opens)
        running: Cleared to leave the event loop
    """

    # Lower-cased character -> handler method
    CHAR_BINDINGS: dict[str, str] = {
        "l": "trigger_lightning",
        "r": "reset",
        "h": "toggle_panel",
        "m": "toggle_audio",
        "c": "cycle_color",
        "s": "toggle_splash",
        "t": "toggle_ambient_lightning",
        "+": "thicker",
        "=": "thicker",
        "-": "thinner",
        "_": "thinner",
    }

    def __init__(self, settings: Settings | None = None, controls: Controls | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        display = self.settings.display
        self.context = SimulationContext.create(
            display.width,
            display.height,
            display.dpr,
            controls=controls if controls is not None else Controls.from_settings(self.settings.rain),
            seed=self.settings.seed,
        )
        self.panel = ControlPanel()
        self.audio = AudioToggle(self.settings.audio.track, self.settings.audio.volume)
        self.screen: pygame.Surface | None = None
        self.renderer: RenderPass | None = None
        self.scheduler = FrameScheduler(self.context)
        self.running = False

    def open_window(self) -> pygame.Surface:
        """Create the display and wire the render pass to it."""
        pygame.init()
        pygame.display.set_caption("rainfx")
        self.screen = pygame.display.set_mode(self.context.surface.size, pygame.RESIZABLE)
        self.renderer = RenderPass(self.screen, self.settings.display.background)
        self.scheduler.renderer = self.renderer
        logger.info(
            "window_opened",
            width=self.context.surface.width,
            height=self.context.surface.height,
            dpr=self.context.surface.dpr,
        )
        return self.screen

    def run(self, max_frames: int | None = None) -> int:
        """Run the event loop until quit.

        Args:
            max_frames: Stop after this many loop iterations

        Returns:
            Number of loop iterations executed
        """
        self.open_window()
        clock = pygame.time.Clock()
        self.running = True
        self.scheduler.start()
        frames = 0

        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)

                self.scheduler.tick()
                if self.scheduler.drawn:
                    self.panel.draw(self.screen, self.context)
                    pygame.display.flip()

                clock.tick(self.settings.display.fps)
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            logger.info("app_stopped", frames=frames, **self.scheduler.guard.get_recovery_stats())
            self.audio.stop()
            pygame.quit()
        return frames

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
            self.scheduler.request_redraw()
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event)
            self.scheduler.request_redraw()

    def handle_key(self, event: pygame.event.Event) -> None:
        """Dispatch a key press to its binding."""
        key = event.key
        if key == pygame.K_SPACE:
            self.context.toggle_pause()
        elif key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_UP:
            self.context.controls.nudge("speed", Limits.SPEED_STEP)
        elif key == pygame.K_DOWN:
            self.context.controls.nudge("speed", -Limits.SPEED_STEP)
        elif key == pygame.K_RIGHT:
            self.context.controls.nudge("wind", Limits.WIND_STEP)
        elif key == pygame.K_LEFT:
            self.context.controls.nudge("wind", -Limits.WIND_STEP)
        elif key == pygame.K_PAGEUP:
            self.context.nudge_density(Limits.DENSITY_STEP)
        elif key == pygame.K_PAGEDOWN:
            self.context.nudge_density(-Limits.DENSITY_STEP)
        else:
            handler = self.CHAR_BINDINGS.get(getattr(event, "unicode", "").lower())
            if handler:
                getattr(self, handler)()

    def resize(self, pixel_width: int, pixel_height: int) -> None:
        """Follow a window resize given in device pixels."""
        dpr = self.context.surface.dpr
        self.context.resize(pixel_width / dpr, pixel_height / dpr)
        surface = pygame.display.get_surface() if pygame.display.get_init() else None
        if surface is not None and self.renderer is not None:
            self.screen = surface
            self.renderer.set_target(surface)

    # Key binding handlers

    def trigger_lightning(self) -> None:
        self.context.trigger_lightning()

    def reset(self) -> None:
        self.context.reset()

    def toggle_panel(self) -> None:
        self.panel.toggle()

    def toggle_audio(self) -> None:
        self.audio.toggle()

    def cycle_color(self) -> None:
        self.context.controls.cycle_color()

    def toggle_splash(self) -> None:
        self.context.controls.toggle("splash")

    def toggle_ambient_lightning(self) -> None:
        self.context.controls.toggle("lightning")

    def thicker(self) -> None:
        self.context.controls.nudge("thickness", Limits.THICKNESS_STEP)

    def thinner(self) -> None:
        self.context.controls.nudge("thickness", -Limits.THICKNESS_STEP)
