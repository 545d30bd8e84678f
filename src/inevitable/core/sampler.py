"""
Safe placement of the evading control.

Produces a top-left position for a control of a given size inside the stage,
biased by a strategy, while keeping it clear of the protected zone in the
middle of the stage (where the always-reachable control lives):

- none: uniform random placement
- edge: hug one of the four edges
- corner: park in one of the four corners
- repel: jump to the far side of the stage center, away from the pointer
- multi_hop: chain several uniform jumps, landing on the last one
"""

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from inevitable.core.geometry import Bounds, Position, Rect, Size, clamp


STRATEGY_KINDS = ("none", "edge", "corner", "repel", "multi_hop")


@dataclass(frozen=True)
class PositionStrategy:
    """How the next position should be chosen."""
    kind: str = "none"
    hops: int = 1

    def __post_init__(self):
        if self.kind not in STRATEGY_KINDS:
            raise ValueError(f"Unknown position strategy: {self.kind!r}")
        if self.hops < 1:
            raise ValueError(f"hops must be >= 1, got {self.hops}")


UNIFORM = PositionStrategy("none")
EDGE = PositionStrategy("edge")
CORNER = PositionStrategy("corner")
REPEL = PositionStrategy("repel")


def multi_hop(hops: int) -> PositionStrategy:
    return PositionStrategy("multi_hop", hops=hops)


@dataclass
class SamplerConfig:
    """Geometry constants for placement."""
    padding: float = 20.0
    corner_padding: float = 40.0
    repel_radius: float = 200.0
    zone_width: float = 200.0  # protected zone, centered on the stage
    zone_height: float = 100.0
    max_retries: int = 50


class PositionSampler:
    """
    Picks positions for the evading control.

    Randomness comes from a local ``random.Random`` so tests (and replays)
    can pin the sequence with a seed.
    """

    def __init__(self, config: SamplerConfig | None = None,
                 rng: random.Random | None = None, seed: int | None = None):
        self.cfg = config or SamplerConfig()
        self.rng = rng or random.Random(seed)

    def protected_zone(self, bounds: Bounds) -> Rect:
        cx, cy = bounds.width / 2, bounds.height / 2
        return Rect(
            cx - self.cfg.zone_width / 2,
            cy - self.cfg.zone_height / 2,
            self.cfg.zone_width,
            self.cfg.zone_height,
        )

    def overlaps_zone(self, pos: Position, size: Size, bounds: Bounds) -> bool:
        box = Rect(pos.x, pos.y, size.width, size.height)
        return box.intersects(self.protected_zone(bounds))

    def _limits(self, size: Size, bounds: Bounds) -> tuple[float, float]:
        pad = self.cfg.padding
        return bounds.width - size.width - pad, bounds.height - size.height - pad

    def _clamp(self, x: float, y: float, size: Size, bounds: Bounds) -> Position:
        max_x, max_y = self._limits(size, bounds)
        pad = self.cfg.padding
        return Position(clamp(x, pad, max_x), clamp(y, pad, max_y))

    def _uniform(self, size: Size, bounds: Bounds) -> Position:
        max_x, max_y = self._limits(size, bounds)
        pad = self.cfg.padding
        x = self.rng.uniform(pad, max(pad, max_x))
        y = self.rng.uniform(pad, max(pad, max_y))
        return self._clamp(x, y, size, bounds)

    def _edge(self, size: Size, bounds: Bounds) -> Position:
        max_x, max_y = self._limits(size, bounds)
        pad = self.cfg.padding
        edge = self.rng.randrange(4)  # 0=top, 1=right, 2=bottom, 3=left
        if edge == 0:
            return self._clamp(self.rng.uniform(pad, max_x), pad, size, bounds)
        if edge == 1:
            return self._clamp(max_x, self.rng.uniform(pad, max_y), size, bounds)
        if edge == 2:
            return self._clamp(self.rng.uniform(pad, max_x), max_y, size, bounds)
        return self._clamp(pad, self.rng.uniform(pad, max_y), size, bounds)

    def _corner(self, size: Size, bounds: Bounds) -> Position:
        max_x, max_y = self._limits(size, bounds)
        near = self.cfg.padding + self.cfg.corner_padding
        inset = self.cfg.corner_padding
        corner = self.rng.randrange(4)  # clockwise from top-left
        x = near if corner in (0, 3) else max_x - inset
        y = near if corner in (0, 1) else max_y - inset
        return self._clamp(x, y, size, bounds)

    def _repel(self, size: Size, bounds: Bounds, pointer: Optional[Position]) -> Position:
        if pointer is None:
            return self._uniform(size, bounds)
        cx, cy = bounds.width / 2, bounds.height / 2
        dx, dy = cx - pointer.x, cy - pointer.y
        dist = math.hypot(dx, dy)
        if dist == 0 or not math.isfinite(dist):
            return self._uniform(size, bounds)
        r = self.cfg.repel_radius
        # center of the control lands on the repel circle
        x = cx + dx / dist * r - size.width / 2
        y = cy + dy / dist * r - size.height / 2
        return self._clamp(x, y, size, bounds)

    def sample_hops(self, size: Size, bounds: Bounds,
                    strategy: PositionStrategy | None = None,
                    pointer: Position | None = None) -> List[Position]:
        """
        Sample a placement and return the full hop chain.

        Every strategy but multi_hop yields a single hop. The last entry is
        the resolved, zone-avoiding placement; earlier entries are the
        intermediate jumps a renderer may animate through.
        """
        strategy = strategy or UNIFORM
        hops: List[Position] = []

        if strategy.kind == "edge":
            candidate = self._edge(size, bounds)
        elif strategy.kind == "corner":
            candidate = self._corner(size, bounds)
        elif strategy.kind == "repel":
            candidate = self._repel(size, bounds, pointer)
        elif strategy.kind == "multi_hop":
            for _ in range(strategy.hops - 1):
                hops.append(self._uniform(size, bounds))
            candidate = self._uniform(size, bounds)
        else:
            candidate = self._uniform(size, bounds)

        hops.append(self._resolve_overlap(candidate, size, bounds))
        return hops

    def sample(self, size: Size, bounds: Bounds,
               strategy: PositionStrategy | None = None,
               pointer: Position | None = None) -> Position:
        """Sample a single placement (the final hop)."""
        return self.sample_hops(size, bounds, strategy, pointer)[-1]

    def _resolve_overlap(self, candidate: Position, size: Size, bounds: Bounds) -> Position:
        retries = 0
        while retries < self.cfg.max_retries and self.overlaps_zone(candidate, size, bounds):
            candidate = self._uniform(size, bounds)
            retries += 1
        # Exhausted retries keep the last candidate, overlap or not
        return self._clamp(candidate.x, candidate.y, size, bounds)
