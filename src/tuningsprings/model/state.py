"""
Session Configuration (Data Model)
==================================
This module defines the configuration surface consumed by a tuning session.

Why is this file needed?
------------------------
1. State Management: It holds the selected tuning, interval and tether
   weights, tethering flag, waveform and registry layout in one place.
2. Decoupling: Front-ends (Qt store, CLI, MIDI) edit this object; the session
   reads it on construction.

Classes:
    Waveform: Oscillator waveform names passed through to the audio voices.
    SessionConfig: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import logging
from typing import Any, Dict

from tuningsprings.config import (
    AXIS_OFFSET,
    AXIS_WIDTH,
    DEFAULT_OCTAVES,
    MIDI_NOTE_OFFSET,
    REFERENCE_FREQUENCY_C4,
)
from tuningsprings.model.intervals import Interval
from tuningsprings.model.pitch_axis import PitchAxis
from tuningsprings.model.stiffness import RationalStiffnessCurve, StiffnessCurve, validate_weight
from tuningsprings.model.tunings import DEFAULT_TUNING

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_WEIGHT = 0.5
DEFAULT_TETHER_WEIGHT = 0.2


class Waveform(StrEnum):
    SINE = "sine"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"
    SQUARE = "square"


def _default_interval_weights() -> Dict[Interval, float]:
    return {interval: DEFAULT_INTERVAL_WEIGHT for interval in Interval}


@dataclass
class SessionConfig:
    """
    Everything a session needs to be constructed.

    `octaves`, `reference_frequency` and the axis only affect how the note
    registry is laid out; the remaining fields can change at runtime.
    """
    tuning_name: str = DEFAULT_TUNING
    interval_weights: Dict[Interval, float] = field(default_factory=_default_interval_weights)
    tether_weight: float = DEFAULT_TETHER_WEIGHT
    tethering: bool = True
    waveform: Waveform = Waveform.SAWTOOTH

    octaves: tuple[int, ...] = DEFAULT_OCTAVES
    reference_frequency: float = REFERENCE_FREQUENCY_C4
    axis_width: float = AXIS_WIDTH
    axis_offset: float = AXIS_OFFSET

    stiffness_curve: StiffnessCurve = field(default_factory=RationalStiffnessCurve)
    midi_note_offset: int = MIDI_NOTE_OFFSET

    def __post_init__(self) -> None:
        # Any interval missing from a partial mapping falls back to the default
        weights = _default_interval_weights()
        for key, value in self.interval_weights.items():
            interval = key if isinstance(key, Interval) else Interval.from_label(str(key))
            weights[interval] = validate_weight(value)
        self.interval_weights = weights
        self.tether_weight = validate_weight(self.tether_weight)
        self.waveform = Waveform(self.waveform)
        self.octaves = tuple(sorted(self.octaves))
        if not self.octaves:
            raise ValueError("At least one octave is required.")

    @property
    def axis(self) -> PitchAxis:
        return PitchAxis(width=self.axis_width, offset=self.axis_offset)

    def reset(self) -> None:
        """Restore runtime settings to their defaults."""
        self.tuning_name = DEFAULT_TUNING
        self.interval_weights = _default_interval_weights()
        self.tether_weight = DEFAULT_TETHER_WEIGHT
        self.tethering = True
        self.waveform = Waveform.SAWTOOTH
        logger.info("Session configuration has been reset.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tuning_name": self.tuning_name,
            "interval_weights": {i.label: w for i, w in self.interval_weights.items()},
            "tether_weight": self.tether_weight,
            "tethering": self.tethering,
            "waveform": self.waveform.value,
            "octaves": list(self.octaves),
            "reference_frequency": self.reference_frequency,
            "axis_width": self.axis_width,
            "axis_offset": self.axis_offset,
            "stiffness_curve": self.stiffness_curve.to_dict(),
            "midi_note_offset": self.midi_note_offset,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SessionConfig:
        config = SessionConfig(
            tuning_name=data.get("tuning_name", DEFAULT_TUNING),
            interval_weights=data.get("interval_weights", {}),
            tether_weight=data.get("tether_weight", DEFAULT_TETHER_WEIGHT),
            tethering=data.get("tethering", True),
            waveform=Waveform(data.get("waveform", Waveform.SAWTOOTH)),
            octaves=tuple(data.get("octaves", DEFAULT_OCTAVES)),
            reference_frequency=data.get("reference_frequency", REFERENCE_FREQUENCY_C4),
            axis_width=data.get("axis_width", AXIS_WIDTH),
            axis_offset=data.get("axis_offset", AXIS_OFFSET),
            midi_note_offset=data.get("midi_note_offset", MIDI_NOTE_OFFSET),
        )
        if "stiffness_curve" in data:
            config.stiffness_curve = StiffnessCurve.from_dict(data["stiffness_curve"])
        return config
