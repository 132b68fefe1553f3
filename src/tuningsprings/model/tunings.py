"""
Tuning Library & Tuning Table
=============================
Defines the named interval-ratio sets and the active cents-offset table the
spring graph is built from.

Why is this file needed?
------------------------
1. Catalogue: It holds every known tuning (just, pythagorean, overtone, ...)
   in one place and lets users register their own.
2. Selection: The active :class:`TuningTable` is the only thing a tuning
   switch mutates; the spring graph reads it when (re)computing rest lengths.

Classes:
    Tuning: A named sequence of ratios over one octave.
    TuningLibrary: Registry of tunings.
    TuningTable: Active selection, exposed as cents per semitone distance.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import math
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from tuningsprings.config import OCTAVE_CENTS, SEMITONES_PER_OCTAVE
from tuningsprings.exceptions import UnknownTuningName

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

DEFAULT_TUNING = "just"

DEFAULT_TUNINGS: Dict[str, List[float]] = {
    "just": [1/1, 16/15, 9/8, 6/5, 5/4, 4/3, 45/32, 3/2, 8/5, 5/3, 9/5, 15/8, 2/1],
    "symmetric": [1/1, 16/15, 9/8, 6/5, 5/4, 4/3, math.sqrt(2), 3/2, 8/5, 5/3, 16/9, 15/8, 2/1],
    "overtone": [1/1, 17/16, 9/8, 19/16, 5/4, 21/16, 11/8, 3/2, 13/8, 27/16, 7/4, 15/8, 2/1],
    "well tuned piano": [1/1, 567/512, 9/8, 147/128, 21/16, 1323/1024, 189/128, 3/2, 49/32, 7/4, 441/256, 63/32, 2/1],
    "pythagorean": [1/1, 256/243, 9/8, 32/27, 81/64, 4/3, 729/512, 3/2, 128/81, 27/16, 16/9, 243/128, 2/1],
    "equal": [2.0 ** (i / 12) for i in range(13)],
}


@dataclass
class Tuning:
    """
    A named set of ratios indexed by semitone distance from unison.

    Accepts 12 ratios (unison .. major seventh) or 13 (inclusive of the
    octave). The octave is always stored as exactly 2/1.
    """
    name: str
    ratios: List[float] = field(default_factory=list)
    description: str = ""

    def __post_init__(self) -> None:
        ratios = [float(r) for r in self.ratios]
        if len(ratios) not in (SEMITONES_PER_OCTAVE, SEMITONES_PER_OCTAVE + 1):
            raise ValueError(
                f"Tuning '{self.name}' needs 12 or 13 ratios, got {len(ratios)}."
            )
        if any(r <= 0 for r in ratios):
            raise ValueError(f"Tuning '{self.name}' contains non-positive ratios.")
        if not math.isclose(ratios[0], 1.0):
            raise ValueError(f"Tuning '{self.name}' must start at unison (1/1).")
        self.ratios = ratios[:SEMITONES_PER_OCTAVE] + [2.0]

    @property
    def cents(self) -> npt.NDArray[np.float64]:
        """
        Cents offsets for semitone distances 0..12.

        Index 12 is the octave and is pinned to exactly 1200 cents.
        """
        values = OCTAVE_CENTS * np.log2(np.asarray(self.ratios[:SEMITONES_PER_OCTAVE]))
        values[0] = 0.0
        return np.append(values, OCTAVE_CENTS)

    def deviation_from_equal(self) -> npt.NDArray[np.float64]:
        """Cents each degree sits above (+) or below (-) 12-TET."""
        return self.cents - 100.0 * np.arange(SEMITONES_PER_OCTAVE + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "ratios": list(self.ratios), "description": self.description}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Tuning:
        return Tuning(
            name=data["name"],
            ratios=data["ratios"],
            description=data.get("description", ""),
        )

    def plot(self) -> None:
        """
        Plot the deviation of every degree from equal temperament.
        """
        deviation = self.deviation_from_equal()
        degrees = np.arange(len(deviation))

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.bar(degrees, deviation, color='tab:blue')
        plt.axhline(0.0, color='gray', lw=0.5)

        plt.grid(visible=True, which='major', axis='y', linestyle='-', color='gray', lw=0.5)

        plt.title(f"{self.name} vs. 12-TET")
        plt.xlabel("Semitone distance")
        plt.ylabel("Deviation (cents)")
        plt.xticks(degrees)
        plt.show()


class TuningLibrary:
    """
    Manages the set of known tunings, including loading user tunings
    from JSON files.
    """
    def __init__(self) -> None:
        self.tunings: Dict[str, Tuning] = {}
        self._init_defaults()

    def _init_defaults(self) -> None:
        for name, ratios in DEFAULT_TUNINGS.items():
            self.tunings[name] = Tuning(name=name, ratios=ratios)

    def add_tuning(self, tuning: Tuning) -> None:
        """Add or replace a tuning in the library."""
        self.tunings[tuning.name] = tuning
        logger.debug(f"Registered tuning '{tuning.name}'.")

    def get_tuning(self, name: str) -> Tuning:
        """
        Retrieve a tuning by name.

        Raises:
            UnknownTuningName: If no tuning of that name is registered.
        """
        try:
            return self.tunings[name]
        except KeyError:
            raise UnknownTuningName(name) from None

    def get_names(self) -> List[str]:
        return list(self.tunings.keys())

    def __contains__(self, name: object) -> bool:
        return name in self.tunings

    def load_file(self, filepath: str) -> List[str]:
        """
        Load tunings from a JSON file mapping tuning name -> list of ratios.

        The whole file is validated before anything is registered.

        Returns:
            Names of the tunings that were added.
        """
        logger.info(f"Loading tunings from: {filepath}")
        with open(filepath, mode='r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Tuning file '{filepath}' must contain a JSON object.")

        loaded = [Tuning(name=name, ratios=ratios) for name, ratios in data.items()]
        for tuning in loaded:
            self.add_tuning(tuning)
        return [t.name for t in loaded]


class TuningTable:
    """
    The active cents-offset table.

    Selecting a tuning only swaps the table; callers are responsible for
    re-tuning the springs afterwards.
    """
    def __init__(self, library: Optional[TuningLibrary] = None, name: str = DEFAULT_TUNING) -> None:
        self.library = library if library is not None else TuningLibrary()
        self.name: str = ""
        self._cents: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self.select(name)

    @property
    def cents(self) -> npt.NDArray[np.float64]:
        """Cents for semitone distances 0..12 of the active tuning."""
        return self._cents

    def select(self, name: str) -> None:
        """
        Make `name` the active tuning.

        Raises:
            UnknownTuningName: The previous tuning stays active.
        """
        tuning = self.library.get_tuning(name)
        self._cents = tuning.cents
        self.name = tuning.name
        logger.info(f"Tuning '{name}' selected.")

    def cents_at(self, distance: int) -> float:
        """
        Cents of an interval spanning `distance` semitones (distance >= 0).

        Compound intervals add one octave per twelve semitones.
        """
        octaves, degree = divmod(distance, SEMITONES_PER_OCTAVE)
        return float(self._cents[degree]) + OCTAVE_CENTS * octaves
