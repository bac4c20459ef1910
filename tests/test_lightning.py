"""Tests for the lightning flash and ambient trigger."""

import pytest

from rainfx.constants import Lightning
from rainfx.weather import FlashPhase, LightningController, LightningFlash


class FixedRng:
    """Random source returning fixed values."""

    def __init__(self, value=0.0, cooldown=10.0):
        self.value = value
        self.cooldown = cooldown
        self.rolls = 0

    def random(self):
        self.rolls += 1
        return self.value

    def uniform(self, low, high):
        assert low == Lightning.COOLDOWN_MIN
        assert high == Lightning.COOLDOWN_MAX
        return self.cooldown


class TestLightningFlash:
    """Test the flash state machine."""

    @pytest.fixture
    def flash(self):
        return LightningFlash()

    def test_idle_by_default(self, flash):
        assert flash.phase is FlashPhase.IDLE
        assert flash.opacity == 0.0
        assert flash.update(1.0) is FlashPhase.IDLE

    def test_sequence(self, flash):
        """Test bright, gap, dimmer bright, fade, idle."""
        flash.trigger()
        assert flash.phase is FlashPhase.FLASH1
        assert flash.opacity == 0.8

        assert flash.update(0.05) is FlashPhase.FLASH1
        assert flash.update(0.10) is FlashPhase.GAP
        assert flash.opacity == 0.0

        assert flash.update(0.06) is FlashPhase.FLASH2
        assert flash.opacity == 0.6

        assert flash.update(0.07) is FlashPhase.FADE
        assert 0.0 < flash.opacity < 0.6

        assert flash.update(0.05) is FlashPhase.IDLE
        assert flash.opacity == 0.0
        assert not flash.active

    def test_fade_is_linear(self, flash):
        """Test opacity halves midway through the fade."""
        flash.trigger()
        midpoint = (Lightning.FLASH2_END + Lightning.FADE_END) / 2
        flash.update(midpoint)
        assert flash.phase is FlashPhase.FADE
        assert flash.opacity == pytest.approx(0.3)

    def test_total_window(self, flash):
        """Test the whole sequence lasts about 320 ms."""
        flash.trigger()
        flash.update(0.319)
        assert flash.active
        flash.update(0.002)
        assert not flash.active

    def test_retrigger_restarts(self, flash):
        """Test a second trigger restarts the sequence."""
        flash.trigger()
        flash.update(0.15)
        flash.trigger()
        assert flash.phase is FlashPhase.FLASH1
        assert flash.elapsed == 0.0

    def test_large_step_skips_to_idle(self, flash):
        """Test a long frame finishes the flash."""
        flash.trigger()
        assert flash.update(1.0) is FlashPhase.IDLE


class TestLightningController:
    """Test ambient lightning."""

    def test_manual_trigger(self):
        controller = LightningController(FixedRng())
        controller.trigger()
        assert controller.flash.active
        assert controller.opacity == 0.8

    def test_ambient_fires_and_sets_cooldown(self):
        """Test a successful roll fires and resets the cooldown."""
        controller = LightningController(FixedRng(value=0.0, cooldown=7.5))
        assert controller.update(0.016, 0.016, enabled=True) is True
        assert controller.flash.active
        assert controller.cooldown == 7.5

    def test_cooldown_blocks(self):
        """Test no roll happens while the cooldown is running."""
        rng = FixedRng(value=0.0)
        controller = LightningController(rng)
        controller.cooldown = 5.0
        assert controller.update(0.033, 0.033, enabled=True) is False
        assert rng.rolls == 0
        assert controller.cooldown == pytest.approx(5.0 - 0.033)

    def test_failed_roll(self):
        """Test a high roll does not fire."""
        controller = LightningController(FixedRng(value=0.5))
        assert controller.update(0.016, 0.016, enabled=True) is False
        assert not controller.flash.active

    def test_disabled(self):
        """Test nothing happens while ambient lightning is off."""
        rng = FixedRng(value=0.0)
        controller = LightningController(rng)
        controller.cooldown = 1.0
        assert controller.update(0.033, 0.033, enabled=False) is False
        assert controller.cooldown == 1.0
        assert rng.rolls == 0

    def test_flash_advances_when_disabled(self):
        """Test a manual flash still plays out with ambient lightning off."""
        controller = LightningController(FixedRng())
        controller.trigger()
        controller.update(0.033, 0.5, enabled=False)
        assert not controller.flash.active

    def test_ambient_rate_with_real_rng(self, rng):
        """Test ambient strikes stay rare and respect the cooldown."""
        controller = LightningController(rng)
        for _ in range(60 * 60):  # one minute at 60 fps
            controller.update(1 / 60, 1 / 60, enabled=True)
        assert controller.strikes <= 60 / Lightning.COOLDOWN_MIN + 1
