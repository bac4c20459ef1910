"""Rendering of the rain scene."""

from rainfx.render.renderer import RenderPass, build_fog

__all__ = ["RenderPass", "build_fog"]
