"""Background rain audio play/pause toggle."""

from __future__ import annotations

from pathlib import Path

import pygame
import structlog

logger = structlog.get_logger()


class AudioToggle:
    """Loops a background track through ``pygame.mixer.music``.

    Attributes:
        track: Audio file to loop, or None when audio is not configured
        volume: Playback volume in [0, 1]
        playing: Whether the track is currently audible
    """

    def __init__(self, track: Path | str | None = None, volume: float = 0.5) -> None:
        self.track = Path(track) if track else None
        self.volume = volume
        self.playing = False
        self._loaded = False
        self._disabled = self.track is None

    @property
    def available(self) -> bool:
        return not self._disabled

    def toggle(self) -> bool:
        """Start, pause or resume playback.

        Returns:
            Whether audio is playing afterwards
        """
        if self._disabled:
            logger.info("audio_unavailable", track=str(self.track) if self.track else None)
            return False

        try:
            if not self._loaded:
                self._load()
                pygame.mixer.music.play(loops=-1)
                self.playing = True
            elif self.playing:
                pygame.mixer.music.pause()
                self.playing = False
            else:
                pygame.mixer.music.unpause()
                self.playing = True
        except pygame.error as e:
            logger.warning("audio_failed", track=str(self.track), error=str(e))
            self._disabled = True
            self.playing = False
            return False

        logger.info("audio_toggled", playing=self.playing)
        return self.playing

    def _load(self) -> None:
        if not self.track.exists():
            raise pygame.error(f"track not found: {self.track}")
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.music.load(str(self.track))
        pygame.mixer.music.set_volume(self.volume)
        self._loaded = True

    def stop(self) -> None:
        """Stop playback and release the mixer."""
        if self._loaded and pygame.mixer.get_init():
            pygame.mixer.music.stop()
        self.playing = False
