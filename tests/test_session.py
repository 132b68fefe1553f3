import pytest

from tests.conftest import find_spring
from tuningsprings.controller.session import TuningSession
from tuningsprings.exceptions import DegenerateEquilibriumInput, UnknownTuningName
from tuningsprings.model.intervals import Interval
from tuningsprings.model.state import SessionConfig, Waveform
from tuningsprings.model.stiffness import PowerLawStiffnessCurve
from tuningsprings.utils import cents_to_frequency, ratio_to_cents, round_two


def test_tick_pushes_live_pitch_to_voice(untethered):
    untethered.activate("E4")
    untethered.tick()
    voice = untethered.registry["E4"].voice
    assert voice.frequency == round_two(cents_to_frequency(400.0))
    assert voice.is_audible


def test_idle_voices_are_not_updated(untethered):
    untethered.activate("C4")
    untethered.activate("E4")
    untethered.relax(10)
    untethered.deactivate("E4")
    frozen = untethered.registry["E4"].voice.frequency
    untethered.relax(10)
    assert untethered.registry["E4"].voice.frequency == frozen


def test_pointer_drag(session):
    session.activate("E4")
    note = session.registry["E4"]
    axis = session.axis

    assert session.pointer.grab(note.particle.position + 5.0) is note
    session.pointer.drag_to(axis.cents_to_position(450.0))
    session.tick()

    assert note.particle.is_locked
    assert session.note_cents("E4") == pytest.approx(450.0)
    assert note.voice.frequency == round_two(cents_to_frequency(450.0))

    session.pointer.release()
    assert not note.particle.is_locked
    assert session.pointer.grabbed_note is None


def test_pointer_ignores_idle_and_locked_particles(session):
    session.activate("E4")
    assert session.pointer.grab(session.axis.note_to_position("G4")) is None

    session.set_tether_weight("E4", 1.0)
    assert session.pointer.grab(session.axis.note_to_position("E4")) is None


def test_set_waveform(session):
    session.set_waveform("square")
    assert session.config.waveform is Waveform.SQUARE
    assert all(n.voice.waveform is Waveform.SQUARE for n in session.registry)
    with pytest.raises(ValueError):
        session.set_waveform("noise")


def test_predict_needs_a_sounding_note(session):
    with pytest.raises(DegenerateEquilibriumInput):
        session.predict()


def test_log_notes(untethered, caplog):
    untethered.activate("C4")
    untethered.activate("E4")
    with caplog.at_level("INFO", logger="tuningsprings"):
        rounded = untethered.log_notes()
    assert rounded == {"C4": (0.0, 0.0), "E4": (386.31, 400.0)}
    assert "E4: predicted 386.31 c, current 400.00 c" in caplog.text


def test_current_cents(untethered):
    untethered.activate("G3")
    untethered.activate("C4")
    current = untethered.current_cents()
    assert list(current) == ["G3", "C4"]
    assert current["G3"] == pytest.approx(-500.0)


def test_unknown_tuning_changes_nothing(session):
    rest = [r.spring.get_rest_length() for r in session.graph]
    with pytest.raises(UnknownTuningName):
        session.select_tuning("meantone")
    assert [r.spring.get_rest_length() for r in session.graph] == rest
    assert session.config.tuning_name == "just"
    assert session.table.name == "just"


def test_select_tuning_updates_config(session):
    session.select_tuning("overtone")
    assert session.config.tuning_name == "overtone"
    assert "overtone" in session.tuning_names()


def test_unknown_tuning_at_construction():
    with pytest.raises(UnknownTuningName):
        TuningSession(SessionConfig(tuning_name="meantone"))


def test_spring_extension_percent(untethered):
    untethered.activate("C4")
    untethered.activate("E4")
    record = find_spring(untethered, "C4", "E4")
    expected = 100.0 * 400.0 / ratio_to_cents(5 / 4) - 100.0
    assert untethered.spring_extension_percent(record) == pytest.approx(expected)


def test_set_interval_weight_updates_config(session):
    session.set_interval_weight("minor third", 0.8)
    assert session.config.interval_weights[Interval.MINOR_THIRD] == 0.8


def test_power_law_curve_session():
    config = SessionConfig(stiffness_curve=PowerLawStiffnessCurve(), tethering=False)
    session = TuningSession(config)
    assert find_spring(session, "C4", "G4").spring.get_strength() == pytest.approx(0.002)


def test_custom_octaves_and_reference():
    session = TuningSession(SessionConfig(octaves=(4,), reference_frequency=256.0))
    assert session.registry.labels[0] == "C4"
    assert len(session.graph) == 66
    assert session.registry["C4"].voice.frequency == 256.0


class TestSessionConfig:
    def test_partial_weights_are_filled(self):
        config = SessionConfig(interval_weights={"perfect fifth": 0.9})
        assert config.interval_weights[Interval.PERFECT_FIFTH] == 0.9
        assert config.interval_weights[Interval.OCTAVE] == 0.5
        assert len(config.interval_weights) == 12

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            SessionConfig(tether_weight=-0.5)
        with pytest.raises(ValueError):
            SessionConfig(interval_weights={Interval.OCTAVE: 2.0})
        with pytest.raises(ValueError):
            SessionConfig(waveform="noise")
        with pytest.raises(ValueError):
            SessionConfig(octaves=())

    def test_dict_round_trip(self):
        config = SessionConfig(
            tuning_name="pythagorean",
            tether_weight=0.4,
            tethering=False,
            waveform=Waveform.SINE,
            stiffness_curve=PowerLawStiffnessCurve(exponent=3.0),
        )
        config.interval_weights[Interval.DIMINISHED_FIFTH] = 0.1

        restored = SessionConfig.from_dict(config.to_dict())
        assert restored.tuning_name == "pythagorean"
        assert restored.interval_weights == config.interval_weights
        assert restored.tether_weight == 0.4
        assert restored.tethering is False
        assert restored.waveform is Waveform.SINE
        assert isinstance(restored.stiffness_curve, PowerLawStiffnessCurve)
        assert restored.stiffness_curve.exponent == 3.0

    def test_reset(self):
        config = SessionConfig(tuning_name="equal", tethering=False)
        config.reset()
        assert config.tuning_name == "just"
        assert config.tethering is True
