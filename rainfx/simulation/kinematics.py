"""Velocity and streak geometry for falling drops.

All functions accept python floats or numpy arrays and broadcast.
"""

from __future__ import annotations

import math

import numpy as np

from rainfx.constants import Rain


def wind_radians(wind_degrees: float) -> float:
    """Wind angle measured from vertical, in radians."""
    return wind_degrees * math.pi / 180


def fall_magnitude(base_speed, speed: float):
    """Velocity magnitude of a drop: base fall speed scaled by the speed control."""
    return base_speed * speed


def velocity(base_speed, speed: float, wind_degrees: float):
    """Velocity components (vx, vy) in px/s.

    Args:
        base_speed: Per-drop base fall speed
        speed: Speed multiplier
        wind_degrees: Wind angle from vertical, positive drifts right

    Returns:
        (vx, vy) tuple matching the shape of ``base_speed``
    """
    theta = wind_radians(wind_degrees)
    magnitude = fall_magnitude(base_speed, speed)
    return magnitude * math.sin(theta), magnitude * math.cos(theta)


def streak_length(magnitude, dpr: float):
    """On-screen streak length, clamped to [8, 32] px before DPR scaling."""
    return np.clip(magnitude * Rain.STREAK_FACTOR, Rain.STREAK_MIN, Rain.STREAK_MAX) * dpr


def streak_tail(x, y, wind_degrees: float, length):
    """Tail end of a streak drawn back along the direction of travel."""
    theta = wind_radians(wind_degrees)
    return x - math.sin(theta) * length, y - math.cos(theta) * length


def splash_power(magnitude):
    """Splash strength produced by a drop hitting the ground."""
    return magnitude * Rain.SPLASH_POWER_FACTOR
