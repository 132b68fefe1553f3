import numpy as np
import pytest

from tuningsprings.exceptions import DegenerateEquilibriumInput
from tuningsprings.model.tunings import TuningTable
from tuningsprings.solvers.predictor import EquilibriumPredictor
from tuningsprings.utils import ratio_to_cents

MAJOR_THIRD = ratio_to_cents(5 / 4)
FIFTH = ratio_to_cents(3 / 2)


@pytest.fixture
def predictor():
    return EquilibriumPredictor(TuningTable())


def test_single_note_sits_at_anchor(predictor):
    np.testing.assert_allclose(predictor.predict([12], anchor_cents=3.5), [3.5])


def test_two_notes(predictor):
    np.testing.assert_allclose(predictor.phi([12, 16]), [MAJOR_THIRD, -MAJOR_THIRD])
    np.testing.assert_allclose(predictor.predict([12, 16], anchor_cents=0.0), [0.0, MAJOR_THIRD])


def test_consistent_triad_is_exact(predictor):
    predicted = predictor.predict([12, 16, 19], anchor_cents=-10.0)
    np.testing.assert_allclose(predicted, [-10.0, MAJOR_THIRD - 10.0, FIFTH - 10.0])


def test_augmented_triad_splits_the_comma(predictor):
    # C E G#: two just thirds plus a just minor sixth sum to one octave,
    # so the least squares answer is the equal-tempered one
    predicted = predictor.predict([0, 4, 8], anchor_cents=0.0)
    np.testing.assert_allclose(predicted, [0.0, 400.0, 800.0], atol=1e-9)


def test_compound_interval(predictor):
    predicted = predictor.predict([12, 28], anchor_cents=0.0)
    assert predicted[1] == pytest.approx(1200.0 + MAJOR_THIRD)


def test_empty_input(predictor):
    with pytest.raises(DegenerateEquilibriumInput):
        predictor.predict([], anchor_cents=0.0)
    with pytest.raises(DegenerateEquilibriumInput):
        predictor.compare([], [], [])


@pytest.mark.parametrize("indices", [[16, 12], [12, 12]])
def test_indices_must_be_sorted_and_distinct(predictor, indices):
    with pytest.raises(ValueError):
        predictor.predict(indices, anchor_cents=0.0)


def test_compare_sorts_by_index(predictor):
    prediction = predictor.compare(
        labels=["E4", "C4"],
        indices=[16, 12],
        current_cents=[400.0, 0.0],
    )
    assert prediction.labels == ["C4", "E4"]
    np.testing.assert_allclose(prediction.current, [0.0, 400.0])
    np.testing.assert_allclose(prediction.predicted, [0.0, MAJOR_THIRD])
    assert prediction.max_error == pytest.approx(400.0 - MAJOR_THIRD)
    assert prediction.rounded() == {"C4": (0.0, 0.0), "E4": (386.31, 400.0)}
