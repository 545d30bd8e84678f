"""
Escalating evasion behaviors.

Maps an attempt count to an EvasionProfile: where the control should go
next and how it should look while getting there. Three tables drive it:

- Escalation tiers: one explicit profile per attempt, 0..K-1
- Cyclic fallback: reused forever once the explicit tiers run out
- Premonition tiers: visual-only hints shown before evasion starts

Every table has a full-motion and a reduced-motion variant. Reduced tiers
keep the placement strategy of their full-motion twin but trade rotation
and scaling for opacity/brightness cues and shorter transitions.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from inevitable.core.sampler import (
    CORNER,
    EDGE,
    REPEL,
    UNIFORM,
    PositionStrategy,
    multi_hop,
)


SPRING = "cubic-bezier(0.34, 1.56, 0.64, 1)"
BACK = "cubic-bezier(0.68, -0.55, 0.265, 1.55)"


@dataclass(frozen=True)
class Transform:
    rotate: float = 0.0  # degrees
    scale: float = 1.0

    def css(self) -> str:
        parts = []
        if self.rotate:
            parts.append(f"rotate({self.rotate:g}deg)")
        if self.scale != 1.0:
            parts.append(f"scale({self.scale:g})")
        return " ".join(parts) or "none"


@dataclass(frozen=True)
class Filter:
    blur: Optional[float] = None  # px
    brightness: Optional[float] = None

    def css(self) -> str:
        parts = []
        if self.blur is not None:
            parts.append(f"blur({self.blur:g}px)")
        if self.brightness is not None:
            parts.append(f"brightness({self.brightness:g})")
        return " ".join(parts) or "none"


@dataclass(frozen=True)
class Transition:
    duration_ms: int = 300
    easing: str = "ease-out"
    properties: Tuple[str, ...] = ("all",)

    def css(self) -> str:
        return ", ".join(
            f"{prop} {self.duration_ms / 1000:g}s {self.easing}" for prop in self.properties
        )


@dataclass(frozen=True)
class EvasionProfile:
    """Immutable behavior for one tier."""
    transition: Transition
    strategy: Optional[PositionStrategy] = None
    transform: Optional[Transform] = None
    opacity: Optional[float] = None
    filter: Optional[Filter] = None

    @property
    def has_position(self) -> bool:
        return self.strategy is not None


def _p(ms: int, easing: str = "ease-out", strategy=UNIFORM, **visual) -> EvasionProfile:
    return EvasionProfile(transition=Transition(ms, easing), strategy=strategy, **visual)


FULL_MOTION_TIERS: Tuple[EvasionProfile, ...] = (
    _p(300, SPRING),                                         # 0: plain teleport
    _p(300, SPRING),                                         # 1
    _p(400, strategy=EDGE),                                  # 2: edge hugging
    _p(300, BACK, transform=Transform(scale=0.8)),           # 3: shrink and dodge
    _p(250, strategy=REPEL),                                 # 4: pointer repulsion
    _p(350, SPRING, transform=Transform(rotate=-15)),        # 5: tilt
    _p(300, "ease-in-out", opacity=0.5),                     # 6: fade tease
    _p(300, filter=Filter(blur=2)),                          # 7: blur escape
    _p(200, "ease-in-out", strategy=multi_hop(2)),           # 8: double jump
    _p(400, BACK, transform=Transform(scale=1.2)),           # 9: grow and flee
    _p(500, "ease-in-out", strategy=CORNER),                 # 10: corner escape
    _p(400, transform=Transform(rotate=360, scale=0.9)),     # 11: spin
    _p(250, "ease-in-out", opacity=0.3, filter=Filter(blur=1)),
    _p(200, BACK, strategy=REPEL,                            # 13: everything at once
       transform=Transform(rotate=-10, scale=0.85), opacity=0.7),
)

REDUCED_MOTION_TIERS: Tuple[EvasionProfile, ...] = (
    _p(150),
    _p(150),
    EvasionProfile(
        transition=Transition(150, "ease-out", ("opacity", "left", "top")),
        strategy=EDGE,
        opacity=0.9,
    ),
    _p(150, opacity=0.85),
    _p(150, strategy=REPEL),
    _p(150, filter=Filter(brightness=0.9)),
    _p(150, opacity=0.8),
    _p(150, opacity=0.75),
    _p(100, strategy=multi_hop(2)),
    _p(150, filter=Filter(brightness=1.1)),
    _p(200, strategy=CORNER),
    _p(150, opacity=0.7),
    _p(150, opacity=0.65),
    _p(100, strategy=REPEL, opacity=0.6),
)

FULL_MOTION_CYCLE: Tuple[EvasionProfile, ...] = (
    _p(300, strategy=REPEL, transform=Transform(rotate=25, scale=0.95)),
    _p(350, "ease-in-out", transform=Transform(rotate=-180), opacity=0.6),
    _p(400, BACK, strategy=CORNER, transform=Transform(scale=0.7)),
    _p(300, transform=Transform(scale=1.15), filter=Filter(blur=1.5)),
    _p(250, "ease-in-out", strategy=EDGE, transform=Transform(rotate=15), opacity=0.8),
)

REDUCED_MOTION_CYCLE: Tuple[EvasionProfile, ...] = (
    _p(150, opacity=0.55),
    _p(150, strategy=REPEL, filter=Filter(brightness=0.85)),
    _p(200, strategy=CORNER, opacity=0.7),
)

# Premonition tiers never carry a strategy: the control stays put
FULL_MOTION_PREMONITION: Tuple[EvasionProfile, ...] = (
    _p(150, strategy=None, transform=Transform(scale=0.97)),
    _p(150, strategy=None, opacity=0.92),
    _p(200, strategy=None, transform=Transform(scale=0.95), filter=Filter(brightness=0.95)),
)

REDUCED_MOTION_PREMONITION: Tuple[EvasionProfile, ...] = (
    _p(100, strategy=None, opacity=0.95),
    _p(100, strategy=None, filter=Filter(brightness=0.95)),
    _p(100, strategy=None, opacity=0.9, filter=Filter(brightness=0.95)),
)


def escalation_profile(attempts: int, reduced_motion: bool = False) -> EvasionProfile:
    """
    Look up the evasion profile for an attempt count.

    Explicit tiers cover 0..K-1; anything beyond walks the cyclic list,
    starting from its first entry at attempts == K.
    """
    if attempts < 0:
        raise ValueError(f"attempts must be >= 0, got {attempts}")
    tiers = REDUCED_MOTION_TIERS if reduced_motion else FULL_MOTION_TIERS
    if attempts < len(tiers):
        return tiers[attempts]
    cycle = REDUCED_MOTION_CYCLE if reduced_motion else FULL_MOTION_CYCLE
    return cycle[(attempts - len(tiers)) % len(cycle)]


def premonition_profile(attempts: int, reduced_motion: bool = False) -> EvasionProfile:
    """Visual-only hint for attempts below the evasion threshold."""
    if attempts < 0:
        raise ValueError(f"attempts must be >= 0, got {attempts}")
    tiers = REDUCED_MOTION_PREMONITION if reduced_motion else FULL_MOTION_PREMONITION
    return tiers[min(attempts, len(tiers) - 1)]


def with_pointer_repel(profile: EvasionProfile) -> EvasionProfile:
    """Same visual cues, but flee from the pointer."""
    return replace(profile, strategy=REPEL)


class BehaviorEngine:
    """
    Pure profile selection around an evasion threshold.

    Below ``threshold`` attempts the control only shows premonition cues;
    from the threshold on it escalates through the evasion tiers.
    """

    def __init__(self, threshold: int = 3):
        if threshold < 0 or threshold > len(FULL_MOTION_TIERS):
            raise ValueError(
                f"threshold must be within 0..{len(FULL_MOTION_TIERS)}, got {threshold}"
            )
        self.threshold = threshold

    def is_evading(self, attempts: int) -> bool:
        return attempts >= self.threshold

    def profile(self, attempts: int, reduced_motion: bool = False) -> EvasionProfile:
        if not self.is_evading(attempts):
            return premonition_profile(attempts, reduced_motion)
        return escalation_profile(attempts, reduced_motion)
