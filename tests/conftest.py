"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

# Make the package importable without installation
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))

# Set dummy drivers for headless testing
os.environ["SDL_VIDEODRIVER"] = "dummy"
os.environ["SDL_AUDIODRIVER"] = "dummy"

import numpy as np
import pytest

from rainfx.config import Controls, ControlValues
from rainfx.simulation import SimulationContext, SurfaceDimensions


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment."""
    os.environ.setdefault("ENV", "test")
    yield


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def surface():
    """Reference 1280x720 surface at DPR 1."""
    return SurfaceDimensions(1280, 720, 1.0)


@pytest.fixture
def context(surface, rng):
    """Simulation context with default controls at density 900."""
    return SimulationContext(surface, Controls(ControlValues(density=900)), rng=rng)
