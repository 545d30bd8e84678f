"""Evasive control and celebration engine."""

from inevitable.celebration.overlay import CelebrationOverlay
from inevitable.celebration.particles import CelebrationConfig, ParticleSystem
from inevitable.controller import AttemptCounter, EvasionConfig, EvasionController, RenderState
from inevitable.core.behaviors import BehaviorEngine, EvasionProfile
from inevitable.core.geometry import Bounds, Position, Size
from inevitable.core.sampler import PositionSampler, PositionStrategy
from inevitable.motion import MotionPreference, intensity_multiplier
from inevitable.scheduler import FrameScheduler

__version__ = "0.1.0"
__all__ = [
    "AttemptCounter",
    "BehaviorEngine",
    "Bounds",
    "CelebrationConfig",
    "CelebrationOverlay",
    "EvasionConfig",
    "EvasionController",
    "EvasionProfile",
    "FrameScheduler",
    "MotionPreference",
    "ParticleSystem",
    "Position",
    "PositionSampler",
    "PositionStrategy",
    "RenderState",
    "Size",
    "intensity_multiplier",
]
