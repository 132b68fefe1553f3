"""
Stiffness / Weight Model
========================
Converts the user-facing 0..1 "strength" of an interval (or tether) into a
physical spring constant.

Two curves are supported and selected through configuration:

* :class:`RationalStiffnessCurve` - ``mean * w / (1 - w)`` clamped to the maximum.
* :class:`PowerLawStiffnessCurve` - an inverse power law, normalised so that
  ``w = 0.5`` yields the neutral strength.

Both map 0 to 0 (spring removed), increase strictly with the weight and
saturate at ``max_stiffness`` as the weight approaches 1 (spring rigid).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Dict, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    import numpy.typing as npt

MIN_WEIGHT = 0.0
MAX_WEIGHT = 1.0


class StiffnessCurveType(StrEnum):
    RATIONAL = "rational"
    POWER_LAW = "power law"


def validate_weight(weight: float) -> float:
    """Return `weight` as float, rejecting values outside [0, 1]."""
    weight = float(weight)
    if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
        raise ValueError(f"Weight must lie in [{MIN_WEIGHT}, {MAX_WEIGHT}], got {weight}.")
    return weight


_REGISTRY: dict[StiffnessCurveType, type[StiffnessCurve]] = {}


def register_curve(cls: type[StiffnessCurve]) -> type[StiffnessCurve]:
    """Class decorator to register a curve by its TYPE."""
    key = getattr(cls, "TYPE", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define TYPE")
    _REGISTRY[key] = cls
    return cls


# ==========================================
# ABSTRACT CLASS FOR STIFFNESS CURVES
# ==========================================
class StiffnessCurve(ABC):
    """
    Abstract base class for weight -> stiffness curves.
    """
    TYPE: StiffnessCurveType
    NAME: str = "Stiffness Curve"

    def __init__(self, max_stiffness: float = 0.1) -> None:
        if max_stiffness <= 0:
            raise ValueError("max_stiffness must be positive.")
        self.max_stiffness = max_stiffness

    @property
    def min_stiffness(self) -> float:
        return 0.0

    @abstractmethod
    def _unclamped(self, weight: float) -> float:
        """Curve value for 0 < weight < 1 before saturation."""
        pass

    def weight_to_stiffness(self, weight: float) -> float:
        """
        Spring strength for a weight in [0, 1].

        Args:
            weight: User-facing strength. 0 disables, 1 is rigid.

        Returns:
            Strength in [min_stiffness, max_stiffness].
        """
        weight = validate_weight(weight)
        if weight == MIN_WEIGHT:
            return self.min_stiffness
        if weight == MAX_WEIGHT:
            return self.max_stiffness
        return float(min(self.max_stiffness, max(self.min_stiffness, self._unclamped(weight))))

    def __call__(self, weight: float) -> float:
        return self.weight_to_stiffness(weight)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        pass

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> StiffnessCurve:
        """Factory method to deserialize into the registered subclass."""
        curve_type = StiffnessCurveType(data.get("type", StiffnessCurveType.RATIONAL))
        params = {k: v for k, v in data.items() if k != "type"}
        return _REGISTRY[curve_type](**params)

    def sample(self, steps: int = 200) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Weights and strengths across the whole domain."""
        weights = np.linspace(MIN_WEIGHT, MAX_WEIGHT, steps)
        return weights, np.array([self.weight_to_stiffness(w) for w in weights])

    def plot(self) -> None:
        """
        Plot the curve over the weight domain.
        """
        weights, strengths = self.sample()

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.plot(weights, strengths, 'b', lw=2)

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(f"{self.NAME} Stiffness Curve")
        plt.xlabel("Weight")
        plt.ylabel("Spring strength")

        plt.xlim(-0.02, 1.02)
        plt.show()


@register_curve
class RationalStiffnessCurve(StiffnessCurve):
    """
    strength = mean_stiffness * w / (1 - w), clamped to max_stiffness.
    """
    TYPE = StiffnessCurveType.RATIONAL
    NAME = "Rational"

    def __init__(self, mean_stiffness: float = 0.002, max_stiffness: float = 0.1) -> None:
        super().__init__(max_stiffness=max_stiffness)
        if mean_stiffness <= 0:
            raise ValueError("mean_stiffness must be positive.")
        self.mean_stiffness = mean_stiffness

    def _unclamped(self, weight: float) -> float:
        return self.mean_stiffness * weight / (1.0 - weight)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE.value,
            "mean_stiffness": self.mean_stiffness,
            "max_stiffness": self.max_stiffness,
        }


@register_curve
class PowerLawStiffnessCurve(StiffnessCurve):
    """
    strength = neutral * ((1 - w)^-p - 1) / (2^p - 1), clamped to max_stiffness.

    The normalisation pins w = 0.5 to `neutral_stiffness`.
    """
    TYPE = StiffnessCurveType.POWER_LAW
    NAME = "Inverse Power Law"

    def __init__(
        self,
        neutral_stiffness: float = 0.002,
        exponent: float = 2.0,
        max_stiffness: float = 0.1,
    ) -> None:
        super().__init__(max_stiffness=max_stiffness)
        if neutral_stiffness <= 0 or exponent <= 0:
            raise ValueError("neutral_stiffness and exponent must be positive.")
        self.neutral_stiffness = neutral_stiffness
        self.exponent = exponent

    def _unclamped(self, weight: float) -> float:
        norm = 2.0 ** self.exponent - 1.0
        return self.neutral_stiffness * ((1.0 - weight) ** -self.exponent - 1.0) / norm

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.TYPE.value,
            "neutral_stiffness": self.neutral_stiffness,
            "exponent": self.exponent,
            "max_stiffness": self.max_stiffness,
        }
