"""
Celebration overlay lifecycle.

Owns the rendering surface while a celebration is active and picks one of
two paths:
- Full motion: a ParticleSystem ticked on every frame
- Reduced motion: a fixed arrangement of shapes that fades in through
  discrete opacity steps and then holds still

Every timer and the frame callback belong to the current run. Deactivation,
teardown, a reduced-motion flip or an intensity change cancels the run; the
last two start a fresh one.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from PIL import Image, ImageDraw

from inevitable.celebration.particles import (
    CelebrationConfig,
    ParticleSystem,
    draw_emblem,
    draw_glint,
    finish_frame,
)
from inevitable.motion import MotionPreference, intensity_multiplier
from inevitable.scheduler import FrameScheduler, Handle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaticShape:
    """One shape of the reduced-motion arrangement, relative to center."""
    kind: str  # "emblem" or "glint"
    dx: float
    dy: float
    size: float
    opacity_scale: float = 1.0
    hue: float = 350.0


BASE_SHAPES = (
    StaticShape("emblem", 0, -100, 40, hue=350),
    StaticShape("emblem", -150, 0, 30, hue=340),
    StaticShape("emblem", 150, 0, 30, hue=360),
    StaticShape("emblem", -80, 120, 25, hue=345),
    StaticShape("emblem", 80, 120, 25, hue=355),
    StaticShape("glint", -100, -150, 8, 0.8),
    StaticShape("glint", 100, -150, 8, 0.8),
    StaticShape("glint", 0, 180, 10, 0.8),
)

# (multiplier threshold, shapes unlocked above it)
EXTRA_SHAPES = (
    (1.5, (
        StaticShape("emblem", -200, -80, 28, 0.8, hue=335),
        StaticShape("emblem", 200, -80, 28, 0.8, hue=365),
        StaticShape("emblem", 0, 180, 32, 0.9, hue=355),
    )),
    (1.3, (
        StaticShape("glint", -180, 0, 7, 0.7),
        StaticShape("glint", 180, 0, 7, 0.7),
    )),
)


def static_arrangement(multiplier: float) -> List[StaticShape]:
    shapes = list(BASE_SHAPES)
    for threshold, extra in EXTRA_SHAPES:
        if multiplier > threshold:
            shapes.extend(extra)
    return shapes


def overlay_duration_ms(attempts: int, reduced_motion: bool,
                        config: CelebrationConfig | None = None) -> float:
    """Total active time of a celebration."""
    cfg = config or CelebrationConfig()
    if reduced_motion:
        return cfg.reduced_duration_ms
    bonus = min(max(attempts, 0) * cfg.duration_per_attempt_ms, cfg.duration_bonus_cap_ms)
    return cfg.base_duration_ms + bonus


class CelebrationOverlay:
    """
    Runs a celebration on a FrameScheduler.

    ``frame()`` always returns the most recent rendered frame (or None when
    nothing has been drawn yet), so whoever owns the display only needs to
    poll it after advancing the scheduler.
    """

    def __init__(self, scheduler: FrameScheduler, attempts: int = 0,
                 config: CelebrationConfig | None = None,
                 motion: MotionPreference | None = None,
                 seed: int | None = None):
        self.cfg = config or CelebrationConfig()
        self.scheduler = scheduler
        self.motion = motion or MotionPreference()
        self.attempts = attempts
        self.rng = random.Random(seed)

        self.active = False
        self.system: Optional[ParticleSystem] = None
        self.static_opacity = 0.0
        self.target_opacity = 0.0
        self.duration_ms = 0.0
        self.started_at = 0.0
        self._frame: Optional[np.ndarray] = None
        self._handles: List[Handle] = []
        self._fade_handle: Optional[Handle] = None
        self._unsubscribe = None

    @property
    def multiplier(self) -> float:
        return intensity_multiplier(self.attempts)

    @property
    def reduced_motion(self) -> bool:
        return self.motion.reduced

    # ------------------------------------------------------------------
    # Lifecycle

    def start(self):
        """Activate (or restart) the celebration."""
        if self._unsubscribe is None:
            self._unsubscribe = self.motion.subscribe(self._on_motion_change)
        self._cancel_run()
        self.active = True
        self.started_at = self.scheduler.now
        self.duration_ms = overlay_duration_ms(self.attempts, self.reduced_motion, self.cfg)
        self._frame = None

        if self.reduced_motion:
            self.system = None
            self.static_opacity = 0.0
            self.target_opacity = min(0.7 * self.multiplier, 0.9)
            self._fade_handle = self.scheduler.call_every(
                self.cfg.fade_step_ms, self._fade_step, label="celebration-fade"
            )
            self._handles.append(self._fade_handle)
        else:
            self.system = ParticleSystem(self.cfg, attempts=self.attempts,
                                         seed=self.rng.randrange(2 ** 32))
            self._handles.append(self.scheduler.on_frame(self._frame_step, label="celebration-frame"))

        self._handles.append(self.scheduler.call_later(
            self.duration_ms, self.deactivate, label="celebration-lifetime"
        ))
        logger.debug(
            "celebration started: attempts=%d reduced=%s duration=%.0fms",
            self.attempts, self.reduced_motion, self.duration_ms,
        )

    def deactivate(self):
        if not self.active:
            return
        self._cancel_run()
        self.active = False
        self._frame = None
        logger.debug("celebration ended after %.0fms", self.scheduler.now - self.started_at)

    def teardown(self):
        self.deactivate()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def set_intensity(self, attempts: int):
        """New attempt count; restarts the run so the duration is recomputed."""
        if attempts == self.attempts:
            return
        self.attempts = attempts
        if self.active:
            self.start()

    def resize(self, width: int, height: int):
        """Surface size changed; takes effect on the next drawn frame."""
        self.cfg.width = width
        self.cfg.height = height

    def _on_motion_change(self, reduced: bool):
        if self.active:
            self.start()

    def _cancel_run(self):
        for handle in self._handles:
            handle.cancel()
        self._handles = []

    @property
    def remaining_ms(self) -> float:
        if not self.active:
            return 0.0
        return max(self.started_at + self.duration_ms - self.scheduler.now, 0.0)

    # ------------------------------------------------------------------
    # Per-path steps

    def _frame_step(self):
        self.system.tick()
        frame = self.system.render()
        if frame is not None:
            self._frame = frame

    def _fade_step(self):
        next_opacity = self.static_opacity + self.cfg.fade_step
        if next_opacity > self.target_opacity:
            # Hold the last drawn arrangement
            self._fade_handle.cancel()
            return
        self.static_opacity = next_opacity
        self._frame = self.render_static(self.static_opacity)

    def render_static(self, opacity: float) -> np.ndarray | None:
        cfg = self.cfg
        if cfg.width <= 0 or cfg.height <= 0:
            return None
        img = Image.new("RGB", (cfg.width, cfg.height), cfg.background_color)
        draw = ImageDraw.Draw(img, "RGBA")
        cx, cy = cfg.width / 2, cfg.height / 2
        for shape in static_arrangement(self.multiplier):
            alpha = opacity * shape.opacity_scale
            if shape.kind == "emblem":
                draw_emblem(draw, cx + shape.dx, cy + shape.dy, shape.size, 0.0, alpha, shape.hue)
            else:
                draw_glint(draw, cx + shape.dx, cy + shape.dy, shape.size, 0.0, alpha)
        return finish_frame(np.asarray(img), cfg)

    def frame(self) -> np.ndarray | None:
        return self._frame
