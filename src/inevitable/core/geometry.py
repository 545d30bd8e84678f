"""
Value types shared by the sampler, behaviors and controller.

All coordinates are container-local pixels unless a docstring says
otherwise (pointer events arrive in client space).
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Client rectangle of the stage container."""
    width: float = 0.0
    height: float = 0.0
    top: float = 0.0
    left: float = 0.0

    @property
    def area(self) -> float:
        return max(self.width, 0.0) * max(self.height, 0.0)

    @property
    def center(self) -> "Position":
        return Position(self.width / 2, self.height / 2)

    def to_local(self, client: "Position") -> "Position":
        """Convert a client-space point into container-local space."""
        return Position(client.x - self.left, client.y - self.top)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Position:
    """Top-left placement (or a plain point, for pointers)."""
    x: float
    y: float

    def distance_to(self, other: "Position") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def intersects(self, other: "Rect") -> bool:
        """Strict overlap; touching edges do not count."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into [low, high]; ``low`` wins when the range is inverted."""
    return max(low, min(value, high))
