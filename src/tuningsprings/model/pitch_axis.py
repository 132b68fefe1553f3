"""
Pitch Axis
==========
Affine map between log-pitch (cents from C4) and the spatial coordinate the
physics adapter works in.

Why is this file needed?
------------------------
Particles live on a bounded axis [offset, width - offset] while tuning math is
done in cents. The map is affine, not linear, so spring lengths must be built
from differences of mapped values (see :meth:`PitchAxis.length_of`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from tuningsprings.config import (
    AXIS_CENTS_MAX,
    AXIS_CENTS_MIN,
    AXIS_OFFSET,
    AXIS_WIDTH,
    OCTAVE_CENTS,
    REFERENCE_FREQUENCY_C4,
)
from tuningsprings.utils import note_to_cents

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class PitchAxis:
    """
    Maps the cents domain [cents_min, cents_max] onto [offset, width - offset].

    The default domain spans one octave below C4 to two octaves above it, so
    that notes of a three octave registry can drift without clipping.
    """
    cents_min: float = AXIS_CENTS_MIN
    cents_max: float = AXIS_CENTS_MAX
    width: float = AXIS_WIDTH
    offset: float = AXIS_OFFSET

    def __post_init__(self) -> None:
        if self.cents_max <= self.cents_min:
            raise ValueError("cents_max must be greater than cents_min.")
        if self.width <= 2 * self.offset:
            raise ValueError("Axis width must exceed twice the offset.")
        if self.cents_max - self.cents_min < 2 * OCTAVE_CENTS:
            raise ValueError("Axis must cover at least two octaves.")

    @property
    def start(self) -> float:
        return self.offset

    @property
    def end(self) -> float:
        return self.width - self.offset

    @property
    def units_per_cent(self) -> float:
        """Slope of the affine map."""
        return (self.end - self.start) / (self.cents_max - self.cents_min)

    def cents_to_position(
        self,
        cents: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        return self.start + (cents - self.cents_min) * self.units_per_cent

    def position_to_cents(
        self,
        position: float | npt.NDArray[np.float64],
    ) -> float | npt.NDArray[np.float64]:
        return self.cents_min + (position - self.start) / self.units_per_cent

    def length_of(self, cents: float) -> float:
        """
        Spatial length of an interval of `cents`.

        The constant term of the affine map cancels, leaving only the scaled
        delta.
        """
        return self.cents_to_position(cents) - self.cents_to_position(0.0)

    def note_to_position(
        self,
        label: str,
        reference_frequency: float = REFERENCE_FREQUENCY_C4,
    ) -> float:
        """Equal-tempered position of a note."""
        return self.cents_to_position(note_to_cents(label, reference_frequency))
