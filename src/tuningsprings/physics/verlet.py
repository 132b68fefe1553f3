"""
Verlet Particle/Spring Solver
=============================
Reference implementation of the physics adapter on a single axis.

Particles are integrated with position Verlet (velocity is the difference to
the previous position, scaled by drag). Springs are solved by iterative
position projection: each pass moves both ends so that a fraction `strength`
of the signed length error is removed, split by inverse particle weight.
"""
from __future__ import annotations

import logging

from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsParticle, PhysicsSpring

logger = logging.getLogger(__name__)


class VerletParticle(PhysicsParticle):
    """
    Represents a particle on the pitch axis.
    """
    def __init__(self, position: float, weight: float = 1.0) -> None:
        """
        Args:
            position: Initial position on the axis.
            weight: Particle mass; heavier particles move less per correction.
        """
        if weight <= 0:
            raise ValueError("Particle weight must be positive.")
        self._position = float(position)
        self.previous = float(position)
        self.weight = weight
        self.inv_weight = 1.0 / weight
        self._locked = False

    def __repr__(self) -> str:
        state = "locked" if self._locked else "free"
        return f"{self.__class__.__name__}(x={self._position:.3f}, {state})"

    @property
    def position(self) -> float:
        return self._position

    @position.setter
    def position(self, value: float) -> None:
        self._position = float(value)

    @property
    def velocity(self) -> float:
        return self._position - self.previous

    @property
    def is_locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self.clear_velocity()
        self._locked = False

    def clear_velocity(self) -> None:
        self.previous = self._position

    def update(self, drag: float) -> None:
        if self._locked:
            self.clear_velocity()
            return
        current = self._position
        self._position += (self._position - self.previous) * (1.0 - drag)
        self.previous = current


class VerletSpring(PhysicsSpring):
    """
    Directed distance constraint: `a` rests `rest_length` above `b`.
    """
    def __init__(
        self,
        a: VerletParticle,
        b: VerletParticle,
        rest_length: float,
        strength: float,
    ) -> None:
        if a is b:
            raise ValueError("A spring needs two distinct particles.")
        self.a = a
        self.b = b
        self._rest_length = float(rest_length)
        self._strength = float(strength)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(rest={self._rest_length:.3f}, "
            f"strength={self._strength:.4f})"
        )

    def get_rest_length(self) -> float:
        return self._rest_length

    def set_rest_length(self, length: float) -> None:
        self._rest_length = float(length)

    def get_strength(self) -> float:
        return self._strength

    def set_strength(self, strength: float) -> None:
        self._strength = float(strength)

    def update(self) -> None:
        # signed: a crossed pair is pushed back apart, never mirrored
        error = (self.a.position - self.b.position) - self._rest_length
        norm = error / (self.a.inv_weight + self.b.inv_weight) * self._strength
        if not self.a.is_locked:
            self.a.position -= norm * self.a.inv_weight
        if not self.b.is_locked:
            self.b.position += norm * self.b.inv_weight


class VerletPhysics(PhysicsAdapter):
    """
    One dimensional Verlet world.

    The active sets are insertion-ordered dicts used as ordered sets, so
    membership tests stay O(1) with hundreds of springs.
    """
    def __init__(self, iterations: int = 50, drag: float = 0.0) -> None:
        """
        Args:
            iterations: Spring projection passes per step.
            drag: Fraction of velocity removed per step (0 = none).
        """
        if iterations < 1:
            raise ValueError("At least one spring iteration is required.")
        if not 0.0 <= drag < 1.0:
            raise ValueError("Drag must lie in [0, 1).")
        self.iterations = iterations
        self.drag = drag
        self._particles: dict[VerletParticle, None] = {}
        self._springs: dict[VerletSpring, None] = {}

    def create_particle(self, position: float) -> VerletParticle:
        return VerletParticle(position)

    def create_spring(
        self,
        a: VerletParticle,
        b: VerletParticle,
        rest_length: float,
        strength: float,
    ) -> VerletSpring:
        return VerletSpring(a, b, rest_length, strength)

    @property
    def particles(self):
        return self._particles.keys()

    @property
    def springs(self):
        return self._springs.keys()

    def add_particle(self, particle: VerletParticle) -> None:
        self._particles[particle] = None

    def remove_particle(self, particle: VerletParticle) -> None:
        self._particles.pop(particle, None)

    def add_spring(self, spring: VerletSpring) -> None:
        self._springs[spring] = None

    def remove_spring(self, spring: VerletSpring) -> None:
        self._springs.pop(spring, None)

    def step(self) -> None:
        for particle in self._particles:
            particle.update(self.drag)
        for _ in range(self.iterations):
            for spring in self._springs:
                spring.update()

    def relax(self, steps: int) -> None:
        """Run `steps` integration ticks."""
        for _ in range(steps):
            self.step()
