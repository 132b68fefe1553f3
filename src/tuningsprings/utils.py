"""
Pitch Unit Conversions
======================
Stateless conversions between note labels, frequency, frequency ratios and
cents. Cents are measured from C4 (the reference frequency).
"""
from __future__ import annotations

import math
import re

from tuningsprings.config import (
    NOTE_NAMES,
    OCTAVE_CENTS,
    REFERENCE_FREQUENCY_C4,
    REFERENCE_OCTAVE,
    SEMITONES_PER_OCTAVE,
)
from tuningsprings.exceptions import InvalidNoteLabel

_NOTE_LABEL_RE = re.compile(r"^([A-G]#?)(-?\d+)$")


def ratio_to_cents(ratio: float) -> float:
    """Convert a frequency ratio to cents (1200 per octave)."""
    return OCTAVE_CENTS * math.log2(ratio)


def cents_to_ratio(cents: float) -> float:
    """Convert cents to a frequency ratio."""
    return 2.0 ** (cents / OCTAVE_CENTS)


def parse_note_label(label: str) -> tuple[str, int]:
    """
    Split a note label such as "C#4" into its pitch class and octave.

    Raises:
        InvalidNoteLabel: If the label is not a pitch class followed by an octave.
    """
    match = _NOTE_LABEL_RE.match(label)
    if match is None or match.group(1) not in NOTE_NAMES:
        raise InvalidNoteLabel(label)
    return match.group(1), int(match.group(2))


def note_label(pitch_class_index: int, octave: int) -> str:
    """Build a label from a pitch class index (0 = C) and an octave."""
    return f"{NOTE_NAMES[pitch_class_index]}{octave}"


def note_to_frequency(
    label: str,
    reference_frequency: float = REFERENCE_FREQUENCY_C4,
) -> float:
    """Equal-tempered frequency of a note in Hz."""
    name, octave = parse_note_label(label)
    semitone = NOTE_NAMES.index(name)
    return (
        reference_frequency
        * 2.0 ** (semitone / SEMITONES_PER_OCTAVE)
        * 2.0 ** (octave - REFERENCE_OCTAVE)
    )


def frequency_to_cents(
    frequency: float,
    reference_frequency: float = REFERENCE_FREQUENCY_C4,
) -> float:
    """Cents above (or below) the reference frequency."""
    return ratio_to_cents(frequency / reference_frequency)


def cents_to_frequency(
    cents: float,
    reference_frequency: float = REFERENCE_FREQUENCY_C4,
) -> float:
    """Inverse of :func:`frequency_to_cents`."""
    return reference_frequency * cents_to_ratio(cents)


def note_to_cents(
    label: str,
    reference_frequency: float = REFERENCE_FREQUENCY_C4,
) -> float:
    return frequency_to_cents(note_to_frequency(label, reference_frequency), reference_frequency)


def round_two(value: float) -> float:
    return round(value * 100.0) / 100.0
