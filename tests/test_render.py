"""Tests for the render pass."""

import pygame
import pytest

from rainfx.config import Controls, ControlValues
from rainfx.constants import Visuals
from rainfx.render import RenderPass, build_fog
from rainfx.simulation import SimulationContext


@pytest.fixture
def small_context():
    """320x180 scene with white drops."""
    controls = Controls(ControlValues(density=900, color="#ffffff", thickness=1.0))
    return SimulationContext.create(320, 180, controls=controls, seed=7)


@pytest.fixture
def screen(small_context):
    return pygame.Surface(small_context.surface.size)


class TestFog:
    """Test the fog gradient."""

    def test_gradient_alpha(self):
        fog = build_fog((10, 100))
        assert fog.get_size() == (10, 100)
        assert fog.get_at((0, 0)).a == 0
        assert fog.get_at((0, 99)).a == round(Visuals.FOG_BOTTOM_ALPHA * 255)
        assert fog.get_at((5, 50)).a <= fog.get_at((5, 99)).a

    def test_fog_cached(self, small_context, screen):
        renderer = RenderPass(screen)
        config = small_context.controls.snapshot()
        renderer.draw(small_context, config)
        fog = renderer.fog_overlay
        renderer.draw(small_context, config)
        assert renderer.fog_overlay is fog

    def test_fog_rebuilt_on_resize(self, small_context, screen):
        renderer = RenderPass(screen)
        config = small_context.controls.snapshot()
        renderer.draw(small_context, config)
        fog = renderer.fog_overlay

        renderer.set_target(pygame.Surface((640, 360)))
        renderer.draw(small_context, config)

        assert renderer.fog_overlay is not fog
        assert renderer.fog_overlay.get_size() == (640, 360)


class TestRenderPass:
    """Test drawing of particles and flash."""

    def test_draws_drop_streak(self, small_context, screen):
        """Test a drop is stroked from its head back up its streak."""
        drops = small_context.drops
        drops.ensure_size(1, small_context.surface)
        drops.x[0] = 100.0
        drops.y[0] = 100.0
        drops.base[0] = 1000.0

        renderer = RenderPass(screen)
        drawn = renderer.draw_drops(
            screen, drops, small_context.controls.snapshot(), pygame.Color("#ffffff"), 1.0
        )

        assert drawn == 1
        assert tuple(screen.get_at((100, 90)))[:3] == (255, 255, 255)
        assert tuple(screen.get_at((100, 110)))[:3] != (255, 255, 255)

    def test_clears_previous_frame(self, small_context, screen):
        screen.fill((255, 0, 0))
        renderer = RenderPass(screen, background="#000000")
        renderer.draw(small_context, small_context.controls.snapshot())
        assert tuple(screen.get_at((0, 0)))[:3] == (0, 0, 0)

    def test_draws_splashes(self, small_context, screen):
        small_context.splashes.emit(50.0, 170.0, 12.0)
        renderer = RenderPass(screen, background="#000000")
        drawn = renderer.draw_splashes(
            screen,
            small_context.splashes,
            small_context.controls.snapshot(),
            pygame.Color("#ffffff"),
            1.0,
        )
        assert drawn == 11
        assert tuple(screen.get_at((50, 170)))[:3] != (0, 0, 0)

    def test_no_splashes_no_layer(self, small_context, screen):
        renderer = RenderPass(screen)
        config = small_context.controls.snapshot()
        assert renderer.draw_splashes(screen, small_context.splashes, config, pygame.Color("white"), 1.0) == 0

    def test_lightning_overlay(self, small_context, screen):
        """Test an active flash brightens the whole frame."""
        renderer = RenderPass(screen, background="#000000")
        small_context.trigger_lightning()
        renderer.draw(small_context, small_context.controls.snapshot())
        assert screen.get_at((5, 5)).r > 180

    def test_no_overlay_when_idle(self, small_context, screen):
        renderer = RenderPass(screen, background="#000000")
        renderer.draw(small_context, small_context.controls.snapshot())
        assert screen.get_at((5, 5)).r < 20


class TestCapture:
    """Test headless frame capture."""

    def test_snapshot_writes_last_frame(self, small_context, tmp_path):
        from rainfx.render.capture import save_snapshot

        path = save_snapshot(small_context, tmp_path / "rain.png", frames=3, fps=60)

        image = pygame.image.load(str(path))
        assert image.get_size() == small_context.surface.size
        assert small_context.frame == 3

    def test_snapshot_needs_at_least_one_frame(self, small_context, tmp_path):
        """Test zero frames still simulates and saves one."""
        from rainfx.render.capture import save_snapshot

        save_snapshot(small_context, tmp_path / "rain.png", frames=0, fps=60)
        assert small_context.frame == 1

    def test_frame_pixels_shape(self, small_context):
        from rainfx.render.capture import frame_pixels, simulate_frames

        surface = next(simulate_frames(small_context, 1, 60))
        assert frame_pixels(surface).shape == (180, 320, 3)
