"""Reduced-motion preference as an observable boolean."""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class MotionPreference:
    """
    Holds the reduced-motion flag and tells subscribers when it flips.

    Detection (OS setting, media query, CLI flag) happens elsewhere; this
    only carries the value to the controller and the celebration overlay.
    """

    def __init__(self, reduced: bool = False):
        self._reduced = bool(reduced)
        self._listeners: List[Callable[[bool], None]] = []

    @property
    def reduced(self) -> bool:
        return self._reduced

    def set(self, reduced: bool):
        reduced = bool(reduced)
        if reduced == self._reduced:
            return
        self._reduced = reduced
        logger.debug("reduced motion -> %s", reduced)
        for listener in list(self._listeners):
            listener(reduced)

    def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def intensity_multiplier(attempts: int) -> float:
    """Celebration scale factor: 1.0 at zero attempts, capped at 2.5."""
    return min(1.0 + max(attempts, 0) / 30.0, 2.5)
