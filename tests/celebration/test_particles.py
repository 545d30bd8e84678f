"""Tests for the celebration particle simulation."""

import numpy as np
import pytest

from inevitable.celebration.particles import (
    CelebrationConfig,
    Emblem,
    Glint,
    ParticleSystem,
)


@pytest.fixture
def small_config():
    return CelebrationConfig(width=200, height=150, glow_radius=4)


def _emblem(y, vy=-1.0):
    return Emblem(x=0, y=y, vx=0, vy=vy, size=20, rotation=0,
                  rotation_speed=0, hue=350, wobble_speed=0.05)


class TestScaling:
    @pytest.mark.parametrize("attempts,emblems,glints", [
        (0, 90, 40),
        (15, 135, 60),
        (45, 225, 100),
        (500, 225, 100),
    ])
    def test_caps(self, attempts, emblems, glints):
        system = ParticleSystem(attempts=attempts, seed=0)
        assert system.emblem_cap == emblems
        assert system.glint_cap == glints

    def test_spawn_rates_saturate(self):
        calm = ParticleSystem(attempts=0, seed=0)
        assert calm.emblem_rate == pytest.approx(0.45)
        assert calm.glint_rate == pytest.approx(0.3)
        wild = ParticleSystem(attempts=90, seed=0)
        assert wild.emblem_rate == pytest.approx(0.8)
        assert wild.glint_rate == pytest.approx(0.6)


class TestPopulation:
    @pytest.mark.parametrize("attempts", [0, 50, 100])
    def test_caps_hold(self, attempts):
        system = ParticleSystem(attempts=attempts, seed=attempts)
        for _ in range(1500):
            system.tick()
            assert len(system.emblems) <= system.emblem_cap
            assert len(system.glints) <= system.glint_cap

    def test_cap_is_reached(self):
        system = ParticleSystem(CelebrationConfig(emblem_cap=3, glint_cap=2), seed=1)
        peak = 0
        for _ in range(200):
            system.tick()
            peak = max(peak, len(system.emblems))
        assert peak == 3

    def test_same_seed_same_run(self, small_config):
        a = ParticleSystem(small_config, attempts=10, seed=7)
        b = ParticleSystem(small_config, attempts=10, seed=7)
        for _ in range(30):
            a.tick()
            b.tick()
        assert a.emblems == b.emblems
        assert a.glints == b.glints
        np.testing.assert_array_equal(a.render(), b.render())

    def test_spawn_on_bottom_edge(self, small_config):
        system = ParticleSystem(small_config, seed=3)
        e = system.spawn_emblem()
        g = system.spawn_glint()
        assert e.y == g.y == small_config.height + 20
        assert 0 <= e.x <= small_config.width
        assert e.vy < 0 and g.vy < 0


class TestParticles:
    def test_emblem_fades_above_forty_percent(self):
        high = _emblem(y=100)
        assert high.update(720)
        assert high.opacity == pytest.approx(0.99)

        low = _emblem(y=600)
        low.update(720)
        assert low.opacity == 1.0

    def test_emblem_expires_off_top(self):
        assert _emblem(y=-49, vy=-2).update(720) is False

    def test_emblem_expires_when_faded(self):
        e = _emblem(y=100, vy=0)
        e.opacity = 0.005
        assert e.update(720) is False

    def test_glint_burns_out(self):
        g = Glint(x=0, y=10_000, vx=0, vy=0, size=5, rotation=0, rotation_speed=0)
        alive = 0
        while g.update(720):
            alive += 1
        assert alive == 66
        assert g.opacity == 0.0


class TestRender:
    def test_frame_shape(self, small_config):
        system = ParticleSystem(small_config, attempts=20, seed=2)
        for _ in range(60):
            system.tick()
        frame = system.render()
        assert frame.shape == (150, 200, 3)
        assert frame.dtype == np.uint8

    def test_particles_show_up(self, small_config):
        small_config.glow_enabled = False
        system = ParticleSystem(small_config, seed=4)
        empty = system.render()
        e = system.spawn_emblem()
        e.x, e.y = 100, 60
        assert system.render().sum() > empty.sum()

    def test_zero_area_renders_nothing(self):
        system = ParticleSystem(CelebrationConfig(width=0, height=100), seed=0)
        assert system.render() is None
