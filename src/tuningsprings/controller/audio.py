"""
Audio Voice Contract
====================
One voice per note. The session only ever ramps frequency and amplitude and
forwards the waveform name; synthesis itself belongs to the audio back-end.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from tuningsprings.model.state import Waveform


class Voice(ABC):
    """Abstract oscillator owned by a note."""

    @abstractmethod
    def set_frequency(self, hz: float, ramp_seconds: float = 0.0) -> None:
        pass

    @abstractmethod
    def set_amplitude(self, level: float, ramp_seconds: float = 0.0) -> None:
        pass

    @abstractmethod
    def set_waveform(self, waveform: Waveform) -> None:
        pass

    @abstractmethod
    def start(self) -> None:
        pass


class SilentVoice(Voice):
    """
    Voice that only records what it was told; used headless and in tests.
    """
    def __init__(self) -> None:
        self.frequency: float = 0.0
        self.amplitude: float = 0.0
        self.waveform: Waveform = Waveform.SAWTOOTH
        self.started: bool = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(f={self.frequency:.2f} Hz, "
            f"amp={self.amplitude:.2f}, {self.waveform.value})"
        )

    @property
    def is_audible(self) -> bool:
        return self.started and self.amplitude > 0

    def set_frequency(self, hz: float, ramp_seconds: float = 0.0) -> None:
        self.frequency = hz

    def set_amplitude(self, level: float, ramp_seconds: float = 0.0) -> None:
        self.amplitude = level

    def set_waveform(self, waveform: Waveform) -> None:
        self.waveform = Waveform(waveform)

    def start(self) -> None:
        self.started = True
