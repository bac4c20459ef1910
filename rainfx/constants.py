"""Application constants."""

import math


# Drop pool constants
class Rain:
    """Rain drop spawning and motion constants."""

    MAX_DROPS = 8000
    REFERENCE_WIDTH = 1280
    REFERENCE_HEIGHT = 720
    REFERENCE_AREA = REFERENCE_WIDTH * REFERENCE_HEIGHT

    BASE_SPEED_MIN = 700.0  # px/s along vertical when speed=1
    BASE_SPEED_MAX = 1400.0

    SPAWN_OVERSCAN = 0.1  # fraction of width beyond each edge
    SPAWN_TOP_GAP = 10.0
    RECYCLE_BAND = 0.2  # fraction of height above the top edge

    WRAP_MARGIN = 0.2
    WRAP_SPAN = 1.4

    STREAK_FACTOR = 0.02
    STREAK_MIN = 8.0
    STREAK_MAX = 32.0
    MIN_LINE_WIDTH = 0.5

    SPLASH_POWER_FACTOR = 0.012
    GROUND_OFFSET = 2.0


# Splash particle constants
class Splash:
    """Splash burst constants."""

    BASE_COUNT = 5
    COUNT_PER_POWER = 0.5
    ANGLE_MIN = -math.pi * 0.9
    ANGLE_MAX = -math.pi * 0.1
    SPEED_MIN = 80.0
    SPEED_MAX = 260.0
    SPEED_POWER_FACTOR = 0.25
    LIFE_MIN = 0.15
    LIFE_MAX = 0.35
    GRAVITY = 1800.0  # px/s^2
    FADE_WINDOW = 0.25
    MAX_OPACITY = 0.6
    SIZE_FACTOR = 0.9
    INITIAL_CAPACITY = 1024


# Frame pacing constants
class Timing:
    """Frame scheduler constants."""

    MAX_FRAME_DT = 0.033
    MIN_FRAME_DT = 1e-4


class Lightning:
    """Lightning flash timeline and ambient trigger constants."""

    FLASH1_END = 0.120
    GAP_END = 0.200
    FLASH2_END = 0.260
    FADE_END = 0.320

    FLASH1_ALPHA = 0.8
    FLASH2_ALPHA = 0.6

    AMBIENT_CHANCE = 0.0015
    COOLDOWN_MIN = 5.0
    COOLDOWN_MAX = 18.0

    COLOR = (255, 255, 255)


class Visuals:
    """Visual rendering constants."""

    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 720
    DEFAULT_FPS = 60
    DEFAULT_BACKGROUND = "#0b0f14"

    FOG_COLOR = (15, 20, 28)
    FOG_TOP_ALPHA = 0.0
    FOG_BOTTOM_ALPHA = 0.06

    DPR_MIN = 1.0
    DPR_MAX = 2.0

    COLOR_PRESETS = ["#9fb8d6", "#c8d8ff", "#7fa7c9", "#b0e0e6", "#ffffff"]


class Limits:
    """Accepted ranges for user-adjustable controls."""

    DENSITY_MIN = 0
    DENSITY_MAX = 4000
    SPEED_MIN = 0.1
    SPEED_MAX = 4.0
    WIND_MIN = -75.0
    WIND_MAX = 75.0
    THICKNESS_MIN = 0.25
    THICKNESS_MAX = 6.0

    # Keyboard adjustment steps
    DENSITY_STEP = 100
    SPEED_STEP = 0.1
    WIND_STEP = 5.0
    THICKNESS_STEP = 0.25
