"""Pytest configuration and shared fixtures."""

import os
import random

import pytest

from inevitable.core.geometry import Bounds, Size
from inevitable.scheduler import FrameScheduler

# Headless pygame for the demo tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible sampling."""
    return random.Random(1234)


@pytest.fixture
def stage() -> Bounds:
    """A roomy stage with an offset client rectangle."""
    return Bounds(width=1000, height=800, top=50, left=30)


@pytest.fixture
def control() -> Size:
    """Size of the evading control."""
    return Size(160, 64)


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler(fps=60)
