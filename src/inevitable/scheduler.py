"""
Cooperative, single-threaded scheduling on a virtual millisecond clock.

Everything time-based in the package (debounce windows, visual cue decay,
fade steps, overlay lifetime, per-frame simulation) goes through a
FrameScheduler. Nothing blocks: callers register callbacks and whoever owns
the loop (a test, the CLI renderer, the pygame demo) calls ``advance``.
"""

import heapq
import itertools
import logging
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Timers run before frame callbacks due at the same instant, so a state
# change scheduled for time t is visible to the frame drawn at t.
_TIMER = 0
_FRAME = 1


class Handle:
    """Cancellation token for a scheduled callback."""

    __slots__ = ("callback", "interval", "cancelled", "label")

    def __init__(self, callback: Callable[[], None], interval: Optional[float] = None,
                 label: str = ""):
        self.callback = callback
        self.interval = interval
        self.cancelled = False
        self.label = label

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            logger.debug("cancelled %s", self.label or self.callback)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"<Handle {self.label or self.callback!r} {state}>"


class FrameScheduler:
    """
    Virtual clock with one-shot timers, repeating timers and frame callbacks.

    Frame callbacks repeat every ``1000 / fps`` milliseconds, starting one
    frame after registration.
    """

    def __init__(self, fps: int = 60, start_ms: float = 0.0):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.frame_ms = 1000.0 / fps
        self.now = float(start_ms)
        self._queue: List[Tuple[float, int, int, Handle]] = []
        self._seq = itertools.count()

    def _push(self, due: float, kind: int, handle: Handle):
        heapq.heappush(self._queue, (due, kind, next(self._seq), handle))

    def call_later(self, delay_ms: float, callback: Callable[[], None],
                   label: str = "") -> Handle:
        handle = Handle(callback, label=label)
        self._push(self.now + max(delay_ms, 0.0), _TIMER, handle)
        return handle

    def call_every(self, interval_ms: float, callback: Callable[[], None],
                   label: str = "") -> Handle:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        handle = Handle(callback, interval=interval_ms, label=label)
        self._push(self.now + interval_ms, _TIMER, handle)
        return handle

    def on_frame(self, callback: Callable[[], None], label: str = "") -> Handle:
        handle = Handle(callback, interval=self.frame_ms, label=label)
        self._push(self.now + self.frame_ms, _FRAME, handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, _, h in self._queue if not h.cancelled)

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing everything that falls due.

        Returns the number of callbacks that ran.
        """
        target = self.now + max(ms, 0.0)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, kind, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            if handle.interval is not None:
                self._push(due + handle.interval, kind, handle)
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def advance_frames(self, count: int = 1) -> int:
        return self.advance(self.frame_ms * count)

    def clear(self):
        for _, _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
