import pytest

from tuningsprings.exceptions import InvalidNoteLabel
from tuningsprings.utils import (
    cents_to_frequency,
    frequency_to_cents,
    note_to_cents,
    note_to_frequency,
    parse_note_label,
    ratio_to_cents,
    round_two,
)


def test_reference_notes():
    assert note_to_frequency("C4") == pytest.approx(261.6255653)
    assert note_to_frequency("A4") == pytest.approx(440.0, rel=1e-6)
    assert note_to_frequency("C3") == pytest.approx(261.6255653 / 2)
    assert note_to_cents("C5") == pytest.approx(1200.0)
    assert note_to_cents("A#3") == pytest.approx(-200.0)


def test_ratio_to_cents():
    assert ratio_to_cents(2.0) == pytest.approx(1200.0)
    assert ratio_to_cents(3 / 2) == pytest.approx(701.955, abs=1e-3)
    assert ratio_to_cents(5 / 4) == pytest.approx(386.314, abs=1e-3)


@pytest.mark.parametrize("cents", [-1200.0, -13.7, 0.0, 386.3137, 2400.0])
def test_frequency_cents_round_trip(cents):
    assert frequency_to_cents(cents_to_frequency(cents)) == pytest.approx(cents)


def test_custom_reference_frequency():
    assert note_to_frequency("C4", reference_frequency=256.0) == pytest.approx(256.0)
    assert frequency_to_cents(512.0, reference_frequency=256.0) == pytest.approx(1200.0)


def test_parse_note_label():
    assert parse_note_label("C#4") == ("C#", 4)
    assert parse_note_label("B10") == ("B", 10)
    assert parse_note_label("E-1") == ("E", -1)


@pytest.mark.parametrize("label", ["H4", "C", "Cb4", "E#4", "c4", ""])
def test_parse_note_label_rejects(label):
    with pytest.raises(InvalidNoteLabel):
        parse_note_label(label)


def test_round_two():
    assert round_two(261.6255653) == 261.63
    assert round_two(-1.005) == pytest.approx(-1.0, abs=0.01)
