"""
Configuration & Global Constants
================================
This module serves as the central registry for the musical and spatial
constants shared by the whole package.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (reference pitch, axis range, MIDI
   offset) from being scattered throughout the code.
2. Consistency: Pitch math, the note registry and the MIDI mapping must agree
   on the same chromatic layout.

Exports:
    NOTE_NAMES (tuple[str, ...]): Pitch classes in chromatic order, C first.
    REFERENCE_FREQUENCY_C4 (float): Frequency of C4 in Hz (0 cents).
    DEFAULT_OCTAVES (tuple[int, ...]): Octaves covered by the note registry.
"""
from typing import Final

NOTE_NAMES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"
)
SEMITONES_PER_OCTAVE: Final[int] = 12
OCTAVE_CENTS: Final[float] = 1200.0

# Middle C, equal temperament with A4 = 440 Hz
REFERENCE_FREQUENCY_C4: Final[float] = 261.6255653
REFERENCE_OCTAVE: Final[int] = 4

DEFAULT_OCTAVES: Final[tuple[int, ...]] = (3, 4, 5)

# Pitch axis: cents domain mapped onto [offset, width - offset]
AXIS_CENTS_MIN: Final[float] = -1200.0
AXIS_CENTS_MAX: Final[float] = 2400.0
AXIS_WIDTH: Final[float] = 1200.0
AXIS_OFFSET: Final[float] = 50.0

# MIDI note number of the first registry note (C3)
MIDI_NOTE_OFFSET: Final[int] = 48

# Pointer pick distance in axis units
GRAB_RADIUS: Final[float] = 20.0

# Voice envelope
PLAY_AMPLITUDE: Final[float] = 0.5
AMPLITUDE_RAMP_SECONDS: Final[float] = 0.01
FREQUENCY_RAMP_SECONDS: Final[float] = 0.01
