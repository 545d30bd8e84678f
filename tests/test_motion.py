import pytest

from inevitable.motion import MotionPreference, intensity_multiplier


class TestMotionPreference:
    def test_notifies_on_change_only(self):
        pref = MotionPreference()
        seen = []
        pref.subscribe(seen.append)
        pref.set(False)
        pref.set(True)
        pref.set(True)
        pref.set(False)
        assert seen == [True, False]

    def test_unsubscribe(self):
        pref = MotionPreference(reduced=True)
        seen = []
        unsubscribe = pref.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        pref.set(False)
        assert seen == []
        assert pref.reduced is False


class TestIntensity:
    @pytest.mark.parametrize("attempts,expected", [
        (0, 1.0),
        (15, 1.5),
        (30, 2.0),
        (45, 2.5),
        (100, 2.5),
    ])
    def test_multiplier(self, attempts, expected):
        assert intensity_multiplier(attempts) == pytest.approx(expected)

    def test_monotonic_and_bounded(self):
        values = [intensity_multiplier(a) for a in range(200)]
        assert values == sorted(values)
        assert all(1.0 <= v <= 2.5 for v in values)
