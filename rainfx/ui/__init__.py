"""Window-side collaborators: control panel and audio."""

from rainfx.ui.audio import AudioToggle
from rainfx.ui.panel import ControlPanel

__all__ = ["AudioToggle", "ControlPanel"]
