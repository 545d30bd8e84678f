"""Pure geometry and behavior tables."""

from inevitable.core.behaviors import BehaviorEngine, escalation_profile, premonition_profile
from inevitable.core.labels import LabelPool, button_label, label
from inevitable.core.sampler import PositionSampler

__all__ = [
    "BehaviorEngine",
    "LabelPool",
    "PositionSampler",
    "button_label",
    "escalation_profile",
    "label",
    "premonition_profile",
]
