"""
Celebration particle simulation.

Two particle kinds rise from the bottom edge of the viewport:
- Emblem: large hearts with drift, sinusoidal wobble and slow spin; they
  start fading once they pass 40% of the height (from the top)
- Glint: small stars that rise faster and burn out on a linear life timer

Population caps and spawn odds scale with the intensity multiplier, so a
user who fought the evading control for longer gets a denser burst.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from inevitable.celebration.colorgrade import add_glow, hue_to_rgba, tone_map_soft
from inevitable.motion import intensity_multiplier


@dataclass
class CelebrationConfig:
    """Configuration for the celebration overlay."""
    width: int = 1280
    height: int = 720
    fps: int = 60
    background_color: Tuple[int, int, int] = (24, 8, 20)

    # Population
    emblem_cap: int = 90
    glint_cap: int = 40
    emblem_spawn_rate: float = 0.45
    emblem_spawn_max: float = 0.8
    glint_spawn_rate: float = 0.3
    glint_spawn_max: float = 0.6

    # Lifetime (ms)
    base_duration_ms: float = 15000.0
    duration_per_attempt_ms: float = 100.0
    duration_bonus_cap_ms: float = 10000.0
    reduced_duration_ms: float = 3000.0

    # Reduced-motion fade-in
    fade_step_ms: float = 50.0
    fade_step: float = 0.05

    # Post-processing
    glow_enabled: bool = True
    glow_intensity: float = 0.35
    glow_radius: int = 12


@dataclass
class Emblem:
    """Heart that floats up, wobbles and fades near the top."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    rotation: float
    rotation_speed: float
    hue: float
    wobble_speed: float
    wobble: float = 0.0
    opacity: float = 1.0
    kind: str = "emblem"

    def update(self, height: float) -> bool:
        """Advance one frame. Returns False once the emblem is gone."""
        self.y += self.vy
        self.x += self.vx + math.sin(self.wobble) * 0.8
        self.rotation += self.rotation_speed
        self.wobble += self.wobble_speed
        if self.y < height * 0.4:
            self.opacity = max(self.opacity - 0.01, 0.0)
        return self.opacity > 0 and self.y > -50


@dataclass
class Glint:
    """Star spark driven by a linearly decaying life."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    rotation: float
    rotation_speed: float
    life: float = 1.0
    kind: str = "glint"

    @property
    def opacity(self) -> float:
        return max(self.life, 0.0)

    def update(self, height: float) -> bool:
        self.y += self.vy
        self.x += self.vx
        self.rotation += self.rotation_speed
        self.life -= 0.015
        return self.life > 0 and self.y > -50


def _cubic(p0, p1, p2, p3, steps: int) -> List[Tuple[float, float]]:
    pts = []
    for i in range(1, steps + 1):
        t = i / steps
        u = 1 - t
        x = u ** 3 * p0[0] + 3 * u * u * t * p1[0] + 3 * u * t * t * p2[0] + t ** 3 * p3[0]
        y = u ** 3 * p0[1] + 3 * u * u * t * p1[1] + 3 * u * t * t * p2[1] + t ** 3 * p3[1]
        pts.append((x, y))
    return pts


def _heart_outline(steps: int = 12) -> List[Tuple[float, float]]:
    """Unit heart (size 1) as two cubic lobes, origin near the notch."""
    start = (0.0, 0.3)
    pts = [start]
    pts += _cubic(start, (-0.5, -0.3), (-1.0, 0.1), (0.0, 0.8), steps)
    pts += _cubic((0.0, 0.8), (1.0, 0.1), (0.5, -0.3), start, steps)
    return pts


_HEART = _heart_outline()


def _transform(points: Sequence[Tuple[float, float]], cx: float, cy: float,
               scale: float, rotation: float) -> List[Tuple[float, float]]:
    c, s = math.cos(rotation), math.sin(rotation)
    return [
        (cx + (px * c - py * s) * scale, cy + (px * s + py * c) * scale)
        for px, py in points
    ]


def draw_emblem(draw: ImageDraw.ImageDraw, x: float, y: float, size: float,
                rotation: float, opacity: float, hue: float):
    if opacity <= 0:
        return
    draw.polygon(_transform(_HEART, x, y, size, rotation), fill=hue_to_rgba(hue, opacity))


def draw_glint(draw: ImageDraw.ImageDraw, x: float, y: float, size: float,
               rotation: float, opacity: float):
    if opacity <= 0:
        return
    points = []
    for i in range(10):
        angle = rotation - math.pi / 2 + i * math.pi / 5
        r = size if i % 2 == 0 else size / 2
        points.append((x + math.cos(angle) * r, y + math.sin(angle) * r))
    draw.polygon(points, fill=hue_to_rgba(50.0, opacity, saturation=0.55, value=1.0))


class ParticleSystem:
    """
    Emblem + glint simulation for one celebration.

    Randomness is local (``random.Random``) so two systems with the same
    seed evolve identically.
    """

    def __init__(self, config: CelebrationConfig | None = None, attempts: int = 0,
                 rng: random.Random | None = None, seed: int | None = None):
        self.cfg = config or CelebrationConfig()
        self.rng = rng or random.Random(seed)
        self.attempts = attempts
        self.multiplier = intensity_multiplier(attempts)

        cfg = self.cfg
        self.emblem_cap = int(math.floor(cfg.emblem_cap * self.multiplier))
        self.glint_cap = int(math.floor(cfg.glint_cap * self.multiplier))
        self.emblem_rate = min(cfg.emblem_spawn_rate * self.multiplier, cfg.emblem_spawn_max)
        self.glint_rate = min(cfg.glint_spawn_rate * self.multiplier, cfg.glint_spawn_max)

        self.emblems: List[Emblem] = []
        self.glints: List[Glint] = []
        self.frame_count = 0

    def spawn_emblem(self) -> Emblem:
        rng = self.rng
        e = Emblem(
            x=rng.random() * self.cfg.width,
            y=self.cfg.height + 20,
            vx=(rng.random() - 0.5) * 3,
            vy=-rng.random() * 4 - 2.5,
            size=rng.random() * 30 + 15,
            rotation=rng.random() * math.pi * 2,
            rotation_speed=(rng.random() - 0.5) * 0.2,
            hue=rng.random() * 40 + 330,
            wobble_speed=rng.random() * 0.06 + 0.02,
        )
        self.emblems.append(e)
        return e

    def spawn_glint(self) -> Glint:
        rng = self.rng
        g = Glint(
            x=rng.random() * self.cfg.width,
            y=self.cfg.height + 20,
            vx=(rng.random() - 0.5) * 2,
            vy=-rng.random() * 3 - 2,
            size=rng.random() * 8 + 4,
            rotation=rng.random() * math.pi * 2,
            rotation_speed=(rng.random() - 0.5) * 0.3,
        )
        self.glints.append(g)
        return g

    def tick(self):
        """Spawn, update and cull one frame's worth of particles."""
        if len(self.emblems) < self.emblem_cap and self.rng.random() < self.emblem_rate:
            self.spawn_emblem()
        if len(self.glints) < self.glint_cap and self.rng.random() < self.glint_rate:
            self.spawn_glint()

        h = self.cfg.height
        self.emblems = [e for e in self.emblems if e.update(h)]
        self.glints = [g for g in self.glints if g.update(h)]
        self.frame_count += 1

    def render(self) -> np.ndarray | None:
        """
        Draw the current particles.

        Returns an (H, W, 3) uint8 frame, or None when the surface has no
        area yet.
        """
        cfg = self.cfg
        if cfg.width <= 0 or cfg.height <= 0:
            return None
        img = Image.new("RGB", (cfg.width, cfg.height), cfg.background_color)
        draw = ImageDraw.Draw(img, "RGBA")
        for e in self.emblems:
            draw_emblem(draw, e.x, e.y, e.size, e.rotation, e.opacity, e.hue)
        for g in self.glints:
            draw_glint(draw, g.x, g.y, g.size, g.rotation, g.opacity)
        return finish_frame(np.asarray(img), cfg)


def finish_frame(frame: np.ndarray, cfg: CelebrationConfig) -> np.ndarray:
    if cfg.glow_enabled:
        frame = add_glow(frame, intensity=cfg.glow_intensity, radius=cfg.glow_radius)
    return tone_map_soft(frame)
