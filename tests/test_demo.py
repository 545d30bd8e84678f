"""Headless tests for the pygame demo wiring."""

import pytest

pygame = pytest.importorskip("pygame")

from inevitable.controller import EVADING, IDLE, RenderState  # noqa: E402
from inevitable.core.behaviors import Transition  # noqa: E402
from inevitable.core.geometry import Position  # noqa: E402
from inevitable.demo import DemoApp  # noqa: E402


@pytest.fixture
def app():
    demo = DemoApp(800, 600, fps=50, seed=5)
    yield demo
    demo.close()


def _click(app, pos, kind=None):
    kind = kind or pygame.MOUSEBUTTONDOWN
    app.handle_event(pygame.event.Event(kind, pos=pos, button=1))


def _key(app, key):
    app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))


class TestDemo:
    def test_starts_home(self, app):
        assert app.controller.state == IDLE
        assert app.no_rect().topleft == (int(app._shown.x), int(app._shown.y))
        assert not app.no_rect().colliderect(app.yes_rect)

    def test_presses_count_and_escalate(self, app):
        for _ in range(3):
            _click(app, app.no_rect().center)
            app.scheduler.advance(300)
        assert app.counter.value == 3
        assert app.controller.state == EVADING
        assert app.controller.position is not None

    def test_release_never_activates(self, app):
        _click(app, app.no_rect().center, pygame.MOUSEBUTTONUP)
        assert app.counter.value == 0

    def test_yes_starts_celebration(self, app):
        _click(app, app.yes_rect.center)
        assert app.overlay is not None and app.overlay.active
        app.scheduler.advance(100)
        app.draw()

    def test_keys(self, app):
        _key(app, pygame.K_TAB)
        assert app.counter.value == 1
        _key(app, pygame.K_m)
        assert app.motion.reduced
        _key(app, pygame.K_r)
        assert app.counter.value == 0
        _key(app, pygame.K_RETURN)
        assert app.counter.value == 0

    def test_hover_counts_once_per_entry(self, app):
        center = app.no_rect().center
        app.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=center, rel=(0, 0), buttons=(0, 0, 0)))
        app.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=center, rel=(0, 0), buttons=(0, 0, 0)))
        assert app.counter.value == 1

    def test_step_draws(self, app):
        app.controller.press()
        app.step(20)
        app.step(20)

    def test_quit(self, app):
        app.handle_event(pygame.event.Event(pygame.QUIT))
        assert not app.running

    def test_follow_passes_through_waypoints(self, app):
        home = app._shown
        hop = Position(100, 400)
        target = Position(600, 100)
        state = RenderState(position=target, waypoints=(hop,), transition=Transition(200))

        app._follow(state)
        assert app._shown == home
        # two legs of 100 ms each
        app.scheduler.advance(50)
        app._follow(state)
        assert app._shown.x == pytest.approx((home.x + hop.x) / 2)
        app.scheduler.advance(50)
        app._follow(state)
        assert app._shown.x == pytest.approx(hop.x)
        assert app._shown.y == pytest.approx(hop.y)
        app.scheduler.advance(100)
        app._follow(state)
        assert app._shown.x == pytest.approx(target.x)
        assert app._shown.y == pytest.approx(target.y)

    def test_close_drops_pending_callbacks(self, app):
        _click(app, app.yes_rect.center)
        app.controller.press()
        assert app.scheduler.pending > 0
        app.close()
        assert app.scheduler.pending == 0
