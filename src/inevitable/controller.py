"""
Evasion controller for the control that can never be activated.

Turns pointer / activation events into a desired visual state:
- Deliberate interactions (press, hover entry, focus) count as attempts,
  debounced so one gesture is never counted twice.
- Pointer movement near the control makes it flee once evasion has started.
- Activating it never succeeds; it just dodges again.

The controller never draws. ``render_state()`` describes what the control
should look like and a renderer (pygame demo, web bridge, tests) applies it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from inevitable.core.behaviors import (
    BehaviorEngine,
    EvasionProfile,
    Filter,
    Transform,
    Transition,
    with_pointer_repel,
)
from inevitable.core.geometry import Bounds, Position, Size
from inevitable.core.labels import BUTTON_LABELS, FEEDBACK, LabelPool
from inevitable.core.sampler import PositionSampler
from inevitable.motion import MotionPreference
from inevitable.scheduler import FrameScheduler, Handle

logger = logging.getLogger(__name__)

IDLE = "idle"
EVADING = "evading"


@dataclass
class EvasionConfig:
    """Timing and layout knobs for the evading control."""
    threshold: int = 3  # attempts before the control starts moving
    debounce_ms: float = 300.0
    proximity_radius: float = 150.0
    visual_reset_ms: float = 500.0
    control_width: float = 160.0
    control_height: float = 64.0
    home_offset_x: float = 120.0  # resting slot, right of the protected zone


@dataclass(frozen=True)
class RenderState:
    """Desired look of the evading control."""
    position: Optional[Position] = None
    waypoints: Tuple[Position, ...] = ()
    transform: Optional[Transform] = None
    opacity: Optional[float] = None
    filter: Optional[Filter] = None
    transition: Optional[Transition] = None
    label: str = ""
    feedback: str = ""

    def css(self) -> dict:
        """Inline style mapping for web renderers."""
        style = {}
        if self.position is not None:
            style["position"] = "absolute"
            style["left"] = f"{self.position.x:g}px"
            style["top"] = f"{self.position.y:g}px"
        if self.transform is not None:
            style["transform"] = self.transform.css()
        if self.opacity is not None:
            style["opacity"] = f"{self.opacity:g}"
        if self.filter is not None:
            style["filter"] = self.filter.css()
        if self.transition is not None:
            style["transition"] = self.transition.css()
        return style


class AttemptCounter:
    """Monotonic attempt count; only ``reset`` can lower it."""

    def __init__(self):
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value

    def reset(self):
        self._value = 0


class EvasionController:
    """
    Stateful orchestrator between input events and the behavior tables.

    Attempts are owned by the caller: ``on_attempt`` is invoked once per
    counted interaction and the caller feeds the new count back through
    ``update_inputs(attempts=...)`` (synchronously from the callback is fine).
    """

    def __init__(
        self,
        on_attempt: Callable[[], None],
        scheduler: FrameScheduler,
        config: EvasionConfig | None = None,
        engine: BehaviorEngine | None = None,
        sampler: PositionSampler | None = None,
        motion: MotionPreference | None = None,
        labels: LabelPool = BUTTON_LABELS,
        feedback: LabelPool = FEEDBACK,
    ):
        self.cfg = config or EvasionConfig()
        self.on_attempt = on_attempt
        self.scheduler = scheduler
        self.engine = engine or BehaviorEngine(threshold=self.cfg.threshold)
        self.sampler = sampler or PositionSampler()
        self.motion = motion or MotionPreference()
        self.labels = labels
        self.feedback = feedback

        self.bounds = Bounds()
        self.attempts = 0
        self.control_size = Size(self.cfg.control_width, self.cfg.control_height)
        self.state = EVADING if self.engine.is_evading(0) else IDLE

        self._position: Optional[Position] = None
        self._waypoints: Tuple[Position, ...] = ()
        self._visual: dict = {}
        self._last_deliberate: Optional[float] = None
        self._reset_handle: Optional[Handle] = None
        self._closed = False
        self._unsubscribe = self.motion.subscribe(self._on_motion_change)

    # ------------------------------------------------------------------
    # Inputs

    def update_inputs(self, bounds: Bounds | None = None, attempts: int | None = None,
                      reduced_motion: bool | None = None,
                      control_size: Size | None = None):
        if control_size is not None:
            self.control_size = control_size
        if bounds is not None:
            self.bounds = bounds
            self._drop_position_if_outside()
        if attempts is not None:
            if attempts < self.attempts:
                raise ValueError(
                    f"attempts went backwards ({self.attempts} -> {attempts}); use reset()"
                )
            self.attempts = attempts
            if self.state == IDLE and self.engine.is_evading(attempts):
                self.state = EVADING
                logger.debug("evasion started at %d attempts", attempts)
        if reduced_motion is not None:
            self.motion.set(reduced_motion)

    def _drop_position_if_outside(self):
        pos = self._position
        if pos is None or self.bounds.area == 0:
            return
        size = self.control_size
        if (pos.x < 0 or pos.y < 0
                or pos.x + size.width > self.bounds.width
                or pos.y + size.height > self.bounds.height):
            logger.debug("position %s no longer fits %s, returning home", pos, self.bounds)
            self._position = None
            self._waypoints = ()
            self._visual = {}

    def _on_motion_change(self, reduced: bool):
        # Cues from the old mode would never be reset now; drop them
        self._cancel_reset()
        self._visual = {}

    # ------------------------------------------------------------------
    # Events

    def press(self, pointer: Position | None = None):
        """Pointer down / tap on the control."""
        self._deliberate(pointer)

    def enter(self, pointer: Position | None = None):
        """Pointer entered the control."""
        self._deliberate(pointer)

    def focus(self):
        """Keyboard focus reached the control."""
        self._deliberate(None)

    def activate(self, pointer: Position | None = None) -> bool:
        """
        Click / keyboard activation.

        Never succeeds: the control dodges again and ``False`` is returned.
        """
        if self._closed:
            return False
        self._apply(self._local(pointer), self._current_profile())
        return False

    def pointer_move(self, pointer: Position):
        """Passive movement; only matters once evasion started."""
        if self._closed or self.state != EVADING:
            return
        local = self._local(pointer)
        if local.distance_to(self.control_center()) < self.cfg.proximity_radius:
            self._apply(local, with_pointer_repel(self._current_profile()))

    def _deliberate(self, pointer: Position | None):
        if self._closed:
            return
        now = self.scheduler.now
        if self._last_deliberate is None or now - self._last_deliberate >= self.cfg.debounce_ms:
            self._last_deliberate = now
            self.on_attempt()
        self._apply(self._local(pointer), self._current_profile())

    # ------------------------------------------------------------------
    # Behavior application

    def _local(self, pointer: Position | None) -> Position | None:
        if pointer is None:
            return None
        return self.bounds.to_local(pointer)

    def _current_profile(self) -> EvasionProfile:
        return self.engine.profile(self.attempts, self.motion.reduced)

    def _apply(self, pointer: Position | None, profile: EvasionProfile):
        self._visual = {
            "transform": profile.transform,
            "opacity": profile.opacity,
            "filter": profile.filter,
            "transition": profile.transition,
        }
        if profile.has_position and self.state == EVADING and self.bounds.area > 0:
            hops = self.sampler.sample_hops(
                self.control_size, self.bounds, profile.strategy, pointer
            )
            self._position = hops[-1]
            self._waypoints = tuple(hops[:-1])
        self._schedule_reset()

    def _schedule_reset(self):
        self._cancel_reset()
        if profile_has_cues(self._visual):
            self._reset_handle = self.scheduler.call_later(
                self.cfg.visual_reset_ms, self._reset_visual, label="visual-reset"
            )

    def _cancel_reset(self):
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def _reset_visual(self):
        self._reset_handle = None
        self._visual = {
            "transform": None,
            "opacity": 1.0,
            "filter": None,
            "transition": self._visual.get("transition"),
        }

    # ------------------------------------------------------------------
    # Output

    def home_position(self) -> Position:
        size = self.control_size
        return Position(
            self.bounds.width / 2 + self.cfg.home_offset_x,
            self.bounds.height / 2 - size.height / 2,
        )

    @property
    def position(self) -> Optional[Position]:
        return self._position

    def control_center(self) -> Position:
        pos = self._position or self.home_position()
        return Position(pos.x + self.control_size.width / 2,
                        pos.y + self.control_size.height / 2)

    def render_state(self) -> RenderState:
        return RenderState(
            position=self._position,
            waypoints=self._waypoints,
            transform=self._visual.get("transform"),
            opacity=self._visual.get("opacity"),
            filter=self._visual.get("filter"),
            transition=self._visual.get("transition"),
            label=self.labels.label(self.attempts),
            feedback=self.feedback.label(self.attempts),
        )

    # ------------------------------------------------------------------
    # Lifecycle

    def reset(self):
        """Full reset: back to IDLE with zero attempts."""
        self._cancel_reset()
        self.attempts = 0
        self.state = EVADING if self.engine.is_evading(0) else IDLE
        self._position = None
        self._waypoints = ()
        self._visual = {}
        self._last_deliberate = None

    def teardown(self):
        """Cancel pending timers; later events are ignored."""
        self._closed = True
        self._cancel_reset()
        self._unsubscribe()


def profile_has_cues(visual: dict) -> bool:
    return (
        visual.get("transform") is not None
        or visual.get("opacity") is not None
        or visual.get("filter") is not None
    )
