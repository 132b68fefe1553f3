import pytest

from tuningsprings.model.intervals import Interval


def test_from_distance_folds_compound_intervals():
    assert Interval.from_distance(7) is Interval.PERFECT_FIFTH
    assert Interval.from_distance(19) is Interval.PERFECT_FIFTH
    assert Interval.from_distance(12) is Interval.OCTAVE
    assert Interval.from_distance(24) is Interval.OCTAVE
    assert Interval.from_distance(1) is Interval.MINOR_SECOND


def test_unison_is_not_an_interval_spring():
    with pytest.raises(ValueError):
        Interval.from_distance(0)


def test_labels():
    assert Interval.DIMINISHED_FIFTH.label == "diminished fifth"
    assert Interval.from_label("perfect fifth") is Interval.PERFECT_FIFTH
    assert Interval.from_label("MAJOR_THIRD") is Interval.MAJOR_THIRD
    assert len(Interval) == 12


def test_unknown_label():
    with pytest.raises(ValueError):
        Interval.from_label("augmented ninth")
