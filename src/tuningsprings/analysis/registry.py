"""
Note Registry
=============
One particle per chromatic note across the configured octave range, each
optionally paired with a locked equal-tempered anchor particle (its tether).
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence, TYPE_CHECKING

from tuningsprings.config import NOTE_NAMES, REFERENCE_FREQUENCY_C4
from tuningsprings.exceptions import InvalidNoteLabel
from tuningsprings.utils import note_label, note_to_cents, note_to_frequency

if TYPE_CHECKING:
    from tuningsprings.controller.audio import Voice
    from tuningsprings.model.pitch_axis import PitchAxis
    from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsParticle

logger = logging.getLogger(__name__)


class Note:
    """
    Represents a note of the registry.
    """
    def __init__(
        self,
        label: str,
        index: int,
        frequency: float,
        cents: float,
        particle: PhysicsParticle,
        anchor: PhysicsParticle,
    ) -> None:
        """
        Args:
            label: Pitch class and octave, e.g. "C4".
            index: Chromatic index across the whole registry (0 = lowest note).
            frequency: Equal-tempered frequency in Hz.
            cents: Equal-tempered cents from C4.
            particle: The free particle that carries the live pitch.
            anchor: The equal-tempered reference particle (always locked).
        """
        self.label = label
        self.index = index
        self.frequency = frequency
        self.cents = cents
        self.particle = particle
        self.anchor = anchor
        self.voice: Optional[Voice] = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.label}, index={self.index})"


class NoteRegistry:
    """
    Ordered collection of notes; ordering by index matches ascending pitch.
    """
    def __init__(
        self,
        physics: PhysicsAdapter,
        axis: PitchAxis,
        octaves: Sequence[int],
        reference_frequency: float = REFERENCE_FREQUENCY_C4,
    ) -> None:
        self.axis = axis
        self.reference_frequency = reference_frequency
        self.notes: list[Note] = []
        self._by_label: dict[str, Note] = {}
        self._by_particle: dict[PhysicsParticle, Note] = {}

        for octave in sorted(octaves):
            for pitch_class in range(len(NOTE_NAMES)):
                self._add(physics, note_label(pitch_class, octave))

        logger.info(
            f"Note registry built: {len(self.notes)} notes "
            f"({self.notes[0].label}..{self.notes[-1].label})."
        )

    def _add(self, physics: PhysicsAdapter, label: str) -> None:
        position = self.axis.note_to_position(label, self.reference_frequency)
        anchor = physics.create_particle(position)
        anchor.lock()
        note = Note(
            label=label,
            index=len(self.notes),
            frequency=note_to_frequency(label, self.reference_frequency),
            cents=note_to_cents(label, self.reference_frequency),
            particle=physics.create_particle(position),
            anchor=anchor,
        )
        self.notes.append(note)
        self._by_label[label] = note
        self._by_particle[note.particle] = note

    def __len__(self) -> int:
        return len(self.notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __contains__(self, label: object) -> bool:
        return label in self._by_label

    def __getitem__(self, label: str) -> Note:
        """
        Raises:
            InvalidNoteLabel: If `label` is not part of the registry.
        """
        try:
            return self._by_label[label]
        except KeyError:
            raise InvalidNoteLabel(label) from None

    @property
    def labels(self) -> list[str]:
        return [note.label for note in self.notes]

    def by_index(self, index: int) -> Note:
        if not 0 <= index < len(self.notes):
            raise IndexError(f"Note index {index} out of range 0..{len(self.notes) - 1}.")
        return self.notes[index]

    def note_for_particle(self, particle: PhysicsParticle) -> Optional[Note]:
        """The note whose live particle is `particle` (anchors map to None)."""
        return self._by_particle.get(particle)
