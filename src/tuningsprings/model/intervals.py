"""
Interval Kinds
==============
Closed enumeration of the twelve interval kinds a spring can represent.
The value of each member is its semitone distance (1..12).
"""
from __future__ import annotations

from enum import IntEnum

from tuningsprings.config import SEMITONES_PER_OCTAVE


class Interval(IntEnum):
    MINOR_SECOND = 1
    MAJOR_SECOND = 2
    MINOR_THIRD = 3
    MAJOR_THIRD = 4
    PERFECT_FOURTH = 5
    DIMINISHED_FIFTH = 6
    PERFECT_FIFTH = 7
    MINOR_SIXTH = 8
    MAJOR_SIXTH = 9
    MINOR_SEVENTH = 10
    MAJOR_SEVENTH = 11
    OCTAVE = 12

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'perfect fifth'."""
        return self.name.lower().replace("_", " ")

    @classmethod
    def from_distance(cls, semitones: int) -> Interval:
        """
        Interval kind of two distinct notes `semitones` apart.

        Compound intervals fold into their simple kind; whole octaves (distance
        0 modulo 12) map to OCTAVE since unison never joins two distinct notes.
        """
        if semitones <= 0:
            raise ValueError(f"Interval distance must be positive, got {semitones}.")
        folded = semitones % SEMITONES_PER_OCTAVE
        return cls(folded) if folded else cls.OCTAVE

    @classmethod
    def from_label(cls, label: str) -> Interval:
        """Look up an interval by its label or member name."""
        key = label.strip().upper().replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown interval: '{label}'.") from None
