"""Headless rendering of the rain scene to images and video."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

import imageio
import numpy as np
import pygame
import structlog

from rainfx.constants import Visuals
from rainfx.render.renderer import RenderPass
from rainfx.simulation.scheduler import FrameScheduler

if TYPE_CHECKING:
    from rainfx.simulation.context import SimulationContext

logger = structlog.get_logger()


def simulate_frames(
    context: SimulationContext,
    frames: int,
    fps: int,
    background: str = Visuals.DEFAULT_BACKGROUND,
) -> Iterator[pygame.Surface]:
    """Advance the scene on a fixed clock, yielding the surface after each frame."""
    surface = pygame.Surface(context.surface.size)
    scheduler = FrameScheduler(context, RenderPass(surface, background))
    scheduler.start(0.0)
    for i in range(frames):
        scheduler.tick((i + 1) / fps)
        yield surface


def frame_pixels(surface: pygame.Surface) -> np.ndarray:
    """Surface contents as a (height, width, 3) uint8 array."""
    return np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2))


def record_video(
    context: SimulationContext,
    path: Path,
    frames: int,
    fps: int,
    background: str = Visuals.DEFAULT_BACKGROUND,
) -> Path:
    """Render ``frames`` frames into a video file."""
    writer = imageio.get_writer(path, fps=fps)
    written = 0
    try:
        for surface in simulate_frames(context, frames, fps, background):
            try:
                writer.append_data(frame_pixels(surface))
                written += 1
            except Exception as e:
                logger.warning("frame_capture_failed", frame=written, error=str(e))
    finally:
        writer.close()

    logger.info("video_recorded", path=str(path), frames=written, fps=fps)
    return path


def save_snapshot(
    context: SimulationContext,
    path: Path,
    frames: int,
    fps: int,
    background: str = Visuals.DEFAULT_BACKGROUND,
) -> Path:
    """Simulate ``frames`` frames and save the last one as an image."""
    last = deque(simulate_frames(context, max(1, frames), fps, background), maxlen=1)
    pygame.image.save(last[0], str(path))
    logger.info("snapshot_saved", path=str(path), frames=frames, drops=len(context.drops))
    return path
