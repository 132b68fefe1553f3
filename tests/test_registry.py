import pytest

from tuningsprings.exceptions import InvalidNoteLabel
from tuningsprings.utils import round_two


def test_layout(session):
    registry = session.registry
    assert len(registry) == 36
    assert registry.labels[0] == "C3"
    assert registry.labels[-1] == "B5"
    assert [n.index for n in registry] == list(range(36))
    frequencies = [n.frequency for n in registry]
    assert frequencies == sorted(frequencies)
    assert registry["C4"].cents == pytest.approx(0.0)


def test_particles_start_at_equal_temperament(session):
    for note in session.registry:
        expected = session.axis.note_to_position(note.label)
        assert note.particle.position == pytest.approx(expected)
        assert note.anchor.position == pytest.approx(expected)
        assert note.anchor.is_locked
        assert not note.particle.is_locked


def test_nothing_is_active_initially(session):
    assert len(session.physics.particles) == 0
    assert len(session.physics.springs) == 0


@pytest.mark.parametrize("label", ["C9", "X4", "c4"])
def test_unknown_label(session, label):
    assert label not in session.registry
    with pytest.raises(InvalidNoteLabel):
        session.registry[label]


def test_by_index(session):
    assert session.registry.by_index(12).label == "C4"
    with pytest.raises(IndexError):
        session.registry.by_index(36)


def test_note_for_particle(session):
    note = session.registry["G4"]
    assert session.registry.note_for_particle(note.particle) is note
    assert session.registry.note_for_particle(note.anchor) is None


def test_voices_start_silent(session):
    for note in session.registry:
        assert note.voice.started
        assert note.voice.amplitude == 0.0
        assert note.voice.frequency == round_two(note.frequency)
