"""
Physics Adapter Contract
========================
The minimal particle/spring simulation interface the tuning engine needs.

Why is this file needed?
------------------------
The engine never integrates anything itself. It only creates particles and
springs, moves them in and out of the simulation's active working set, and
reads positions and rest lengths back. Any integrator that implements these
classes can drive a session.

Classes:
    PhysicsParticle: Scalar position plus a lock flag.
    PhysicsSpring: Two particles, a rest length and a strength.
    PhysicsAdapter: The active working set and the integration step.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection


class PhysicsParticle(ABC):
    """A point on the pitch axis."""

    @property
    @abstractmethod
    def position(self) -> float:
        pass

    @position.setter
    @abstractmethod
    def position(self, value: float) -> None:
        pass

    @property
    @abstractmethod
    def is_locked(self) -> bool:
        pass

    @abstractmethod
    def lock(self) -> None:
        """Fix the particle in space; the integrator must not move it."""
        pass

    @abstractmethod
    def unlock(self) -> None:
        """Hand the particle back to the integrator."""
        pass


class PhysicsSpring(ABC):
    """
    A directed spring: it rests when `a` sits `rest_length` above `b`.
    """
    a: PhysicsParticle
    b: PhysicsParticle

    @abstractmethod
    def get_rest_length(self) -> float:
        pass

    @abstractmethod
    def set_rest_length(self, length: float) -> None:
        pass

    @abstractmethod
    def get_strength(self) -> float:
        pass

    @abstractmethod
    def set_strength(self, strength: float) -> None:
        pass


class PhysicsAdapter(ABC):
    """
    Abstract particle/spring simulation.

    `particles` and `springs` are the active working set; entities outside it
    still exist but take no part in :meth:`step`.
    """

    @abstractmethod
    def create_particle(self, position: float) -> PhysicsParticle:
        """Create a particle without adding it to the active set."""
        pass

    @abstractmethod
    def create_spring(
        self,
        a: PhysicsParticle,
        b: PhysicsParticle,
        rest_length: float,
        strength: float,
    ) -> PhysicsSpring:
        """Create a spring without adding it to the active set."""
        pass

    @property
    @abstractmethod
    def particles(self) -> Collection[PhysicsParticle]:
        pass

    @property
    @abstractmethod
    def springs(self) -> Collection[PhysicsSpring]:
        pass

    @abstractmethod
    def add_particle(self, particle: PhysicsParticle) -> None:
        pass

    @abstractmethod
    def remove_particle(self, particle: PhysicsParticle) -> None:
        pass

    @abstractmethod
    def add_spring(self, spring: PhysicsSpring) -> None:
        pass

    @abstractmethod
    def remove_spring(self, spring: PhysicsSpring) -> None:
        pass

    @abstractmethod
    def step(self) -> None:
        """Advance the simulation by one tick."""
        pass

    def distance(self, a: PhysicsParticle, b: PhysicsParticle) -> float:
        return abs(b.position - a.position)

    def has_particle(self, particle: PhysicsParticle) -> bool:
        return particle in self.particles

    def has_spring(self, spring: PhysicsSpring) -> bool:
        return spring in self.springs
