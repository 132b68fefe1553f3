"""
Equilibrium Predictor
=====================
Closed-form equilibrium of a fully connected, uniform-strength spring network
on a line, with no tethers.

For sounding notes sorted by chromatic index, with ``T(d)`` the tuning cents
of an interval spanning ``d`` semitones::

    phi1(k) = sum_{i > k} T(index[i] - index[k])
    phi2(k) = sum_{i < k} T(index[k] - index[i])
    phi(k)  = phi1(k) - phi2(k)
    predicted(k) = a0 + (phi(0) - phi(k)) / N

where ``a0`` is the actual current cents of the lowest note. This is used as a
diagnostic oracle for the simulation, not to drive it.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from tuningsprings.exceptions import DegenerateEquilibriumInput
from tuningsprings.utils import round_two

if TYPE_CHECKING:
    import numpy.typing as npt

    from tuningsprings.model.tunings import TuningTable

logger = logging.getLogger(__name__)


@dataclass
class EquilibriumPrediction:
    """Predicted and current cents of the sounding notes, lowest first."""
    labels: list[str]
    predicted: npt.NDArray[np.float64]
    current: npt.NDArray[np.float64]

    @property
    def residual(self) -> npt.NDArray[np.float64]:
        """Current minus predicted cents."""
        return self.current - self.predicted

    @property
    def max_error(self) -> float:
        return float(np.max(np.abs(self.residual)))

    def rounded(self) -> dict[str, tuple[float, float]]:
        """label -> (predicted, current), both rounded to two decimals."""
        return {
            label: (round_two(float(p)), round_two(float(c)))
            for label, p, c in zip(self.labels, self.predicted, self.current)
        }

    def plot(self) -> None:
        """
        Plot predicted against current cents per note.
        """
        x = np.arange(len(self.labels))

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.plot(x, self.predicted, 'o', color='tab:blue', label="predicted")
        plt.plot(x, self.current, 'x', color='tab:red', label="current")

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)

        plt.title("Equilibrium (uniform strength, no tethers)")
        plt.xlabel("Note")
        plt.ylabel("Cents from C4")
        plt.xticks(x, self.labels)
        plt.legend()
        plt.show()


class EquilibriumPredictor:
    """
    Closed-form equilibrium for the active tuning table.
    """
    def __init__(self, table: TuningTable) -> None:
        self.table = table

    def phi(self, indices: Sequence[int]) -> npt.NDArray[np.float64]:
        """
        Net tuning offset pulling on each note.

        Args:
            indices: Chromatic indices, ascending and distinct.
        """
        idx = np.asarray(indices, dtype=np.int64)
        n = len(idx)
        # offsets[k, i] = T(|index[i] - index[k]|)
        distances = np.abs(idx[None, :] - idx[:, None])
        offsets = np.vectorize(self.table.cents_at, otypes=[np.float64])(distances)

        above = np.triu(np.ones((n, n), dtype=bool), k=1)
        phi1 = np.where(above, offsets, 0.0).sum(axis=1)
        phi2 = np.where(above.T, offsets, 0.0).sum(axis=1)
        return phi1 - phi2

    def predict(self, indices: Sequence[int], anchor_cents: float) -> npt.NDArray[np.float64]:
        """
        Predicted cents per note, the lowest one pinned to `anchor_cents`.

        Raises:
            DegenerateEquilibriumInput: If `indices` is empty.
        """
        if len(indices) == 0:
            raise DegenerateEquilibriumInput()
        if list(indices) != sorted(set(indices)):
            raise ValueError("Indices must be distinct and in ascending order.")

        phi = self.phi(indices)
        return anchor_cents + (phi[0] - phi) / len(indices)

    def compare(
        self,
        labels: Sequence[str],
        indices: Sequence[int],
        current_cents: Sequence[float],
    ) -> EquilibriumPrediction:
        """
        Predict for the given notes and pair the result with their live cents.

        The inputs are sorted together by chromatic index first.

        Raises:
            DegenerateEquilibriumInput: If no notes are given.
        """
        if len(indices) == 0:
            raise DegenerateEquilibriumInput()
        order = sorted(range(len(indices)), key=lambda i: indices[i])
        sorted_labels = [labels[i] for i in order]
        sorted_indices = [indices[i] for i in order]
        current = np.asarray([current_cents[i] for i in order], dtype=np.float64)

        predicted = self.predict(sorted_indices, anchor_cents=float(current[0]))
        logger.debug(f"Predicted equilibrium for {', '.join(sorted_labels)}.")
        return EquilibriumPrediction(labels=sorted_labels, predicted=predicted, current=current)
