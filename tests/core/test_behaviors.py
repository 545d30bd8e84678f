"""Tests for the escalation tables and BehaviorEngine."""

import pytest

from inevitable.core.behaviors import (
    FULL_MOTION_CYCLE,
    FULL_MOTION_PREMONITION,
    FULL_MOTION_TIERS,
    REDUCED_MOTION_CYCLE,
    REDUCED_MOTION_PREMONITION,
    REDUCED_MOTION_TIERS,
    BehaviorEngine,
    Filter,
    Transform,
    Transition,
    escalation_profile,
    premonition_profile,
    with_pointer_repel,
)
from inevitable.core.sampler import REPEL, UNIFORM


class TestEscalationTables:
    def test_tables_line_up(self):
        assert len(FULL_MOTION_TIERS) == len(REDUCED_MOTION_TIERS) == 14
        assert len(FULL_MOTION_PREMONITION) == len(REDUCED_MOTION_PREMONITION)
        assert FULL_MOTION_CYCLE and REDUCED_MOTION_CYCLE

    def test_reduced_tiers_keep_strategy(self):
        for full, reduced in zip(FULL_MOTION_TIERS, REDUCED_MOTION_TIERS):
            assert full.strategy == reduced.strategy

    def test_reduced_tiers_never_transform(self):
        for profile in REDUCED_MOTION_TIERS + REDUCED_MOTION_CYCLE + REDUCED_MOTION_PREMONITION:
            assert profile.transform is None

    def test_reduced_transitions_are_shorter(self):
        for full, reduced in zip(FULL_MOTION_TIERS, REDUCED_MOTION_TIERS):
            assert reduced.transition.duration_ms <= full.transition.duration_ms

    def test_premonition_tiers_never_move(self):
        for profile in FULL_MOTION_PREMONITION + REDUCED_MOTION_PREMONITION:
            assert profile.strategy is None
            assert not profile.has_position


class TestEscalationProfile:
    def test_first_tier_is_position_only(self):
        profile = escalation_profile(0)
        assert profile.strategy == UNIFORM
        assert profile.transform is None
        assert profile.opacity is None
        assert profile.filter is None

    def test_fifth_attempt_rotates(self):
        profile = escalation_profile(5)
        assert profile.has_position
        assert profile.transform is not None
        assert profile.transform.rotate != 0

    def test_first_attempt_past_tiers_uses_cycle_start(self):
        k = len(FULL_MOTION_TIERS)
        assert escalation_profile(k) == FULL_MOTION_CYCLE[0]
        assert escalation_profile(k, reduced_motion=True) == REDUCED_MOTION_CYCLE[0]

    def test_cycle_wraps(self):
        k = len(FULL_MOTION_TIERS)
        n = len(FULL_MOTION_CYCLE)
        for a in range(k, k + 3 * n):
            assert escalation_profile(a) == FULL_MOTION_CYCLE[(a - k) % n]

    def test_large_attempts_are_total(self):
        for a in (100, 1_000, 123_457):
            assert escalation_profile(a) in FULL_MOTION_CYCLE
            assert escalation_profile(a, True) in REDUCED_MOTION_CYCLE

    def test_negative_attempts_rejected(self):
        with pytest.raises(ValueError):
            escalation_profile(-1)
        with pytest.raises(ValueError):
            premonition_profile(-1)

    def test_premonition_saturates(self):
        last = FULL_MOTION_PREMONITION[-1]
        assert premonition_profile(len(FULL_MOTION_PREMONITION) + 10) == last


class TestBehaviorEngine:
    def test_pure(self):
        engine = BehaviorEngine()
        for a in range(40):
            assert engine.profile(a) == engine.profile(a)
            assert engine.profile(a, True) == engine.profile(a, True)

    def test_no_strategy_below_threshold(self):
        engine = BehaviorEngine(threshold=3)
        for a in range(3):
            assert not engine.is_evading(a)
            assert engine.profile(a).strategy is None
        assert engine.is_evading(3)
        assert engine.profile(3) == escalation_profile(3)

    def test_zero_threshold_evades_immediately(self):
        engine = BehaviorEngine(threshold=0)
        assert engine.is_evading(0)
        assert engine.profile(0).has_position

    @pytest.mark.parametrize("threshold", [-1, 15])
    def test_threshold_range(self, threshold):
        with pytest.raises(ValueError):
            BehaviorEngine(threshold=threshold)

    def test_pointer_repel_keeps_visuals(self):
        base = escalation_profile(5)
        repelled = with_pointer_repel(base)
        assert repelled.strategy == REPEL
        assert repelled.transform == base.transform
        assert repelled.transition == base.transition


class TestCss:
    def test_transform(self):
        assert Transform(rotate=-15).css() == "rotate(-15deg)"
        assert Transform(rotate=360, scale=0.9).css() == "rotate(360deg) scale(0.9)"
        assert Transform().css() == "none"

    def test_filter(self):
        assert Filter(blur=2).css() == "blur(2px)"
        assert Filter(blur=1, brightness=0.95).css() == "blur(1px) brightness(0.95)"
        assert Filter().css() == "none"

    def test_transition(self):
        assert Transition(300, "ease-out").css() == "all 0.3s ease-out"
        multi = Transition(150, "ease-out", ("opacity", "left"))
        assert multi.css() == "opacity 0.15s ease-out, left 0.15s ease-out"
