"""Tests for attempt-driven copy."""

import pytest

from inevitable.core.labels import BUTTON_LABELS, FEEDBACK, LabelPool, button_label, label


class TestFeedback:
    def test_empty_before_first_attempt(self):
        assert label(0) == ""

    def test_literals_then_cycle(self):
        assert label(1) == FEEDBACK.literals[1]
        assert label(19) == FEEDBACK.literals[19]
        assert label(20) == FEEDBACK.cycle[0]
        assert label(21) == FEEDBACK.cycle[1]

    def test_template_interpolates_count(self):
        # 54 is past the template threshold and divisible by 3
        assert label(54) == "54 times you've made me smile watching this! Now say yes?"

    def test_template_with_derived_value(self):
        assert label(51) == "Fun stat: you've spent 102 seconds not saying yes!"
        assert label(66) == "The button has now traveled 660 pixels trying to escape!"

    def test_non_template_attempts_cycle(self):
        assert label(52) == FEEDBACK.cycle[(52 - 20) % len(FEEDBACK.cycle)]

    def test_never_empty_after_first_attempt(self):
        for a in range(1, 500):
            assert label(a)


class TestButtonLabels:
    def test_starts_with_no(self):
        assert button_label(0) == "No"

    def test_cycles_after_literals(self):
        n = len(BUTTON_LABELS.literals)
        assert button_label(n) == BUTTON_LABELS.cycle[0]
        assert button_label(n + len(BUTTON_LABELS.cycle)) == BUTTON_LABELS.cycle[0]


class TestLabelPool:
    def test_custom_pool(self):
        pool = LabelPool(literals=("a", "b"), cycle=("x", "y"),
                         templates=("#{n}",), template_from=4, template_period=2)
        assert [pool.label(a) for a in range(7)] == ["a", "b", "x", "y", "#4", "y", "#6"]
        assert label(3, pool) == "y"

    def test_callable_template(self):
        pool = LabelPool(literals=("a",), cycle=("x",),
                         templates=(lambda n: f"{n // 2} pairs",), template_from=2, template_period=2)
        assert pool.label(1) == "x"
        assert pool.label(4) == "2 pairs"

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            LabelPool(literals=(), cycle=("x",))
        with pytest.raises(ValueError):
            LabelPool(literals=("a",), cycle=())

    def test_rejects_negative_attempts(self):
        with pytest.raises(ValueError):
            label(-1)
