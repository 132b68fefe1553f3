import pytest

from tuningsprings.controller.session import TuningSession
from tuningsprings.model.state import SessionConfig
from tuningsprings.utils import ratio_to_cents

MAJOR_THIRD = ratio_to_cents(5 / 4)


def test_two_notes_relax_to_just_third(untethered):
    untethered.activate("C4")
    untethered.activate("E4")
    untethered.registry["C4"].particle.lock()

    untethered.relax(2000)

    assert untethered.note_cents("C4") == pytest.approx(0.0, abs=1e-9)
    assert untethered.note_cents("E4") == pytest.approx(MAJOR_THIRD, abs=0.05)
    assert untethered.predict().max_error < 0.05


def test_simulation_matches_closed_form(untethered):
    for label in ("C4", "D4", "E4", "G4"):
        untethered.activate(label)

    untethered.relax(3000)

    assert untethered.predict().max_error < 0.5


def test_solver_matches_closed_form_for_uniform_strength(untethered):
    for label in ("C4", "D4", "E4", "G4"):
        untethered.activate(label)

    solved = untethered.solve_equilibrium()
    prediction = untethered.predict()

    for label, predicted in zip(prediction.labels, prediction.predicted):
        assert solved[label] == pytest.approx(predicted, abs=1e-6)


def test_solver_leaves_locked_particles_alone(untethered):
    untethered.activate("C4")
    untethered.activate("G4")
    untethered.registry["G4"].particle.lock()

    solved = untethered.solve_equilibrium()
    assert solved["G4"] == pytest.approx(700.0)
    assert solved["C4"] == pytest.approx(700.0 - ratio_to_cents(3 / 2))


def test_tether_pulls_towards_equal_temperament(session):
    session.activate("C4")
    session.activate("E4")
    session.registry["C4"].particle.lock()

    curve = session.config.stiffness_curve
    k_interval, k_tether = curve(0.5), curve(0.2)
    expected = (k_interval * MAJOR_THIRD + k_tether * 400.0) / (k_interval + k_tether)

    assert session.solve_equilibrium()["E4"] == pytest.approx(expected, abs=1e-6)

    session.relax(2000)
    assert session.note_cents("E4") == pytest.approx(expected, abs=0.05)


def test_pinned_note_holds_equal_temperament(session):
    session.activate("C4")
    session.activate("E4")
    session.set_tether_weight("E4", 1.0)
    session.registry["C4"].particle.lock()

    session.relax(500)
    assert session.note_cents("E4") == pytest.approx(400.0)


def test_empty_working_set():
    session = TuningSession(SessionConfig(tethering=False))
    assert session.solver.solve() == {}
    assert session.solve_equilibrium() == {}


@pytest.mark.parametrize("target_cents", [1500.0, -800.0])
def test_dragged_note_returns_after_release(untethered, target_cents):
    untethered.activate("C4")
    untethered.activate("E4")
    untethered.registry["C4"].particle.lock()
    pointer = untethered.pointer

    assert pointer.grab(untethered.axis.note_to_position("E4")) is untethered.registry["E4"]
    pointer.drag_to(untethered.axis.cents_to_position(target_cents))
    untethered.tick()
    pointer.release()

    untethered.relax(3000)
    assert untethered.note_cents("E4") == pytest.approx(MAJOR_THIRD, abs=0.05)
    assert untethered.predict().max_error < 0.05
