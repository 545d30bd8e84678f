"""
Interactive pygame demo.

A Yes control sits in the protected middle of the window; the No control
next to it gets harder to catch with every try. Clicking Yes starts the
celebration. Keys: R resets, M toggles reduced motion, Tab focuses No.

Usage:
    inevitable-demo [--width 1280] [--height 720] [--reduced-motion]
"""

import argparse
import logging
from typing import Optional

import numpy as np
import pygame

from inevitable.celebration.overlay import CelebrationOverlay
from inevitable.celebration.particles import CelebrationConfig
from inevitable.controller import AttemptCounter, EvasionController, RenderState
from inevitable.core.geometry import Bounds, Position
from inevitable.motion import MotionPreference
from inevitable.scheduler import FrameScheduler

logger = logging.getLogger(__name__)

BACKGROUND = (40, 14, 34)
YES_COLOR = (232, 64, 120)
NO_COLOR = (245, 240, 245)
TEXT_DARK = (40, 14, 34)
TEXT_LIGHT = (250, 240, 245)


class DemoApp:
    """Owns the window, the scheduler and both halves of the core."""

    def __init__(self, width: int = 1280, height: int = 720, fps: int = 60,
                 reduced_motion: bool = False, seed: int | None = None):
        pygame.init()
        self.width, self.height = width, height
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("inevitable")
        self.font = pygame.font.Font(None, 36)
        self.small_font = pygame.font.Font(None, 28)

        self.scheduler = FrameScheduler(fps=fps)
        self.motion = MotionPreference(reduced_motion)
        self.counter = AttemptCounter()
        self.seed = seed

        self.controller = EvasionController(self._on_attempt, self.scheduler, motion=self.motion)
        self.controller.update_inputs(bounds=Bounds(width, height, 0, 0))

        self.overlay: Optional[CelebrationOverlay] = None
        self.yes_rect = pygame.Rect(0, 0, 180, 80)
        self.yes_rect.center = (width // 2, height // 2)

        self._hovering = False
        self._shown = self.controller.home_position()
        self._path: list[Position] = []
        self._leg_from = self._shown
        self._leg_started = 0.0
        self._last_target: Optional[Position] = None
        self.running = True

    # ------------------------------------------------------------------

    def _on_attempt(self):
        self.controller.update_inputs(attempts=self.counter.increment())
        logger.debug("attempt %d", self.counter.value)

    def no_rect(self) -> pygame.Rect:
        size = self.controller.control_size
        return pygame.Rect(int(self._shown.x), int(self._shown.y),
                           int(size.width), int(size.height))

    def celebrate(self):
        if self.overlay is not None:
            self.overlay.teardown()
        cfg = CelebrationConfig(width=self.width, height=self.height, fps=self.scheduler.fps)
        self.overlay = CelebrationOverlay(self.scheduler, attempts=self.counter.value,
                                          config=cfg, motion=self.motion, seed=self.seed)
        self.overlay.start()

    def reset(self):
        if self.overlay is not None:
            self.overlay.teardown()
            self.overlay = None
        self.counter.reset()
        self.controller.reset()
        self._shown = self.controller.home_position()
        self._path = []
        self._last_target = None

    # ------------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_r:
                self.reset()
            elif event.key == pygame.K_m:
                self.motion.set(not self.motion.reduced)
            elif event.key == pygame.K_TAB:
                self.controller.focus()
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.controller.activate()
        elif event.type == pygame.MOUSEMOTION:
            pointer = Position(*event.pos)
            inside = self.no_rect().collidepoint(event.pos)
            if inside and not self._hovering:
                self.controller.enter(pointer)
            else:
                self.controller.pointer_move(pointer)
            self._hovering = inside
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.yes_rect.collidepoint(event.pos):
                self.celebrate()
            elif self.no_rect().collidepoint(event.pos):
                self.controller.press(Position(*event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.no_rect().collidepoint(event.pos):
                self.controller.activate(Position(*event.pos))

    def _follow(self, state: RenderState):
        """Tween the drawn position toward the target through any waypoints."""
        target = state.position or self.controller.home_position()
        if target != self._last_target:
            self._last_target = target
            self._path = list(state.waypoints) + [target]
            self._leg_from = self._shown
            self._leg_started = self.scheduler.now

        if not self._path:
            return
        duration = state.transition.duration_ms if state.transition else 0.0
        leg_ms = duration / max(len(state.waypoints) + 1, 1)
        t = 1.0 if leg_ms <= 0 else min((self.scheduler.now - self._leg_started) / leg_ms, 1.0)
        goal = self._path[0]
        self._shown = Position(
            self._leg_from.x + (goal.x - self._leg_from.x) * t,
            self._leg_from.y + (goal.y - self._leg_from.y) * t,
        )
        if t >= 1.0:
            self._path.pop(0)
            self._leg_from = goal
            self._leg_started = self.scheduler.now

    def _button_surface(self, state: RenderState) -> pygame.Surface:
        size = self.controller.control_size
        surf = pygame.Surface((int(size.width), int(size.height)), pygame.SRCALPHA)
        color = NO_COLOR
        if state.filter is not None and state.filter.brightness is not None:
            color = tuple(min(255, int(c * state.filter.brightness)) for c in color)
        pygame.draw.rect(surf, color, surf.get_rect(), border_radius=int(size.height // 2))
        text = self.font.render(state.label, True, TEXT_DARK)
        surf.blit(text, text.get_rect(center=surf.get_rect().center))

        if state.filter is not None and state.filter.blur:
            factor = 1.0 + state.filter.blur
            small = pygame.transform.smoothscale(
                surf, (max(1, int(surf.get_width() / factor)), max(1, int(surf.get_height() / factor)))
            )
            surf = pygame.transform.smoothscale(small, surf.get_size())
        if state.transform is not None:
            surf = pygame.transform.rotozoom(surf, -state.transform.rotate, state.transform.scale)
        if state.opacity is not None:
            surf.set_alpha(int(255 * max(0.0, min(state.opacity, 1.0))))
        return surf

    def draw(self):
        state = self.controller.render_state()
        self._follow(state)

        self.screen.fill(BACKGROUND)
        pygame.draw.rect(self.screen, YES_COLOR, self.yes_rect, border_radius=40)
        yes = self.font.render("Yes", True, TEXT_LIGHT)
        self.screen.blit(yes, yes.get_rect(center=self.yes_rect.center))

        button = self._button_surface(state)
        center = self.no_rect().center
        self.screen.blit(button, button.get_rect(center=center))

        if state.feedback:
            msg = self.small_font.render(state.feedback, True, TEXT_LIGHT)
            self.screen.blit(msg, msg.get_rect(center=(self.width // 2, self.height - 40)))

        if self.overlay is not None and self.overlay.active:
            frame = self.overlay.frame()
            if frame is not None:
                overlay = pygame.surfarray.make_surface(np.transpose(frame, (1, 0, 2)))
                overlay.set_alpha(200)
                self.screen.blit(overlay, (0, 0))

    def step(self, dt_ms: float):
        for event in pygame.event.get():
            self.handle_event(event)
        self.scheduler.advance(dt_ms)
        self.draw()
        pygame.display.flip()

    def run(self):
        clock = pygame.time.Clock()
        try:
            while self.running:
                dt = clock.tick(self.scheduler.fps)
                self.step(dt)
        finally:
            self.close()

    def close(self):
        if self.overlay is not None:
            self.overlay.teardown()
        self.controller.teardown()
        self.scheduler.clear()
        pygame.quit()


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="inevitable-demo", description="Evasive control demo")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("-f", "--fps", type=int, default=60)
    parser.add_argument("--reduced-motion", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    DemoApp(args.width, args.height, args.fps, args.reduced_motion, args.seed).run()


if __name__ == "__main__":
    main()
