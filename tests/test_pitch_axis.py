import numpy as np
import pytest

from tuningsprings.model.pitch_axis import PitchAxis


def test_default_domain_edges():
    axis = PitchAxis()
    assert axis.cents_to_position(-1200.0) == pytest.approx(50.0)
    assert axis.cents_to_position(2400.0) == pytest.approx(1150.0)
    assert axis.note_to_position("C4") == pytest.approx(50.0 + 1200.0 * 1100.0 / 3600.0)


def test_cents_position_round_trip():
    axis = PitchAxis()
    cents = np.linspace(-1200.0, 2400.0, 37)
    np.testing.assert_allclose(axis.position_to_cents(axis.cents_to_position(cents)), cents, atol=1e-9)

    positions = np.linspace(axis.start, axis.end, 23)
    np.testing.assert_allclose(axis.cents_to_position(axis.position_to_cents(positions)), positions, atol=1e-9)


def test_length_drops_affine_offset():
    axis = PitchAxis()
    assert axis.length_of(0.0) == 0.0
    assert axis.length_of(1200.0) == pytest.approx(1100.0 / 3.0)
    # same slope, different offset -> same interval lengths
    shifted = PitchAxis(width=1100.0, offset=0.0)
    assert shifted.length_of(386.3137) == pytest.approx(axis.length_of(386.3137))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 100.0, "offset": 50.0},
        {"cents_min": 0.0, "cents_max": 1200.0},
        {"cents_min": 100.0, "cents_max": 100.0},
    ],
)
def test_invalid_axis(kwargs):
    with pytest.raises(ValueError):
        PitchAxis(**kwargs)
