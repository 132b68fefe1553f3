import matplotlib.pyplot as plt
import numpy as np
import pytest

from tuningsprings.model.stiffness import (
    PowerLawStiffnessCurve,
    RationalStiffnessCurve,
    StiffnessCurve,
    validate_weight,
)

CURVES = [RationalStiffnessCurve(), PowerLawStiffnessCurve()]


@pytest.mark.parametrize("curve", CURVES, ids=lambda c: c.NAME)
def test_endpoints(curve):
    assert curve(0.0) == 0.0
    assert curve(1.0) == curve.max_stiffness


@pytest.mark.parametrize("curve", CURVES, ids=lambda c: c.NAME)
def test_strictly_increasing_below_saturation(curve):
    weights = np.linspace(0.0, 0.9, 40)
    strengths = np.array([curve(w) for w in weights])
    assert np.all(np.diff(strengths) > 0)


@pytest.mark.parametrize("curve", CURVES, ids=lambda c: c.NAME)
def test_saturates_near_one(curve):
    assert curve(0.999) == curve.max_stiffness


def test_rational_values():
    curve = RationalStiffnessCurve(mean_stiffness=0.002, max_stiffness=0.1)
    assert curve(0.5) == pytest.approx(0.002)
    assert curve(0.2) == pytest.approx(0.0005)
    assert curve(0.99) == pytest.approx(0.1)


def test_power_law_neutral_point():
    curve = PowerLawStiffnessCurve(neutral_stiffness=0.004, exponent=3.0)
    assert curve(0.5) == pytest.approx(0.004)


@pytest.mark.parametrize("weight", [-0.01, 1.01, 5])
def test_weight_out_of_range(weight):
    with pytest.raises(ValueError):
        validate_weight(weight)
    with pytest.raises(ValueError):
        RationalStiffnessCurve()(weight)


def test_from_dict_picks_registered_curve():
    curve = StiffnessCurve.from_dict({"type": "power law", "exponent": 3.0})
    assert isinstance(curve, PowerLawStiffnessCurve)
    assert curve.exponent == 3.0
    assert isinstance(StiffnessCurve.from_dict({}), RationalStiffnessCurve)


def test_invalid_parameters():
    with pytest.raises(ValueError):
        RationalStiffnessCurve(mean_stiffness=0.0)
    with pytest.raises(ValueError):
        PowerLawStiffnessCurve(max_stiffness=-1.0)


def test_plot(monkeypatch):
    monkeypatch.setattr(plt, "show", lambda: None)
    RationalStiffnessCurve().plot()
    plt.close("all")
