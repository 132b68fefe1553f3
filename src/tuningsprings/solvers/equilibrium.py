"""
Weighted Equilibrium Solver
===========================
Exact static equilibrium of the active spring network for arbitrary spring
strengths, tethers and locked particles.

Why is this file needed?
------------------------
The closed-form predictor assumes uniform strengths and no tethers. Once the
user re-weights intervals or tethers notes, the expected resting place of
each note is the solution of a sparse linear force balance::

    sum_s k_s * (x_a - x_b - L_s) = 0    for every free particle

where `a` is the upper end of each directed spring. Locked particles
are fixed; every connected group without a locked particle is pinned at its
first particle, since the network is otherwise free to translate.

Note: This module should be pure NumPy/SciPy and should NOT import PySide6.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import scipy as sp
from scipy.sparse.csgraph import connected_components

if TYPE_CHECKING:
    import numpy.typing as npt

    from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsParticle

logger = logging.getLogger(__name__)

spsolve = sp.sparse.linalg.spsolve


class EquilibriumSolver:
    """
    Solves the linear force balance of the physics working set.
    """

    def __init__(self, physics: PhysicsAdapter) -> None:
        """
        Args:
            physics: The simulation whose active particles and springs are solved.
        """
        self.physics = physics

    def _assemble(
        self,
        particles: list[PhysicsParticle],
    ) -> tuple[sp.sparse.csr_matrix, npt.NDArray[np.float64]]:
        """
        Assemble the stiffness matrix [K] and the load vector {f}.
        """
        index = {p: i for i, p in enumerate(particles)}
        n = len(particles)

        row: list[int] = []
        col: list[int] = []
        data: list[float] = []
        rhs = np.zeros(n, dtype=np.float64)

        for spring in self.physics.springs:
            k = spring.get_strength()
            if k <= 0:
                continue
            i, j = index[spring.a], index[spring.b]
            length = spring.get_rest_length()

            row += [i, i, j, j]
            col += [i, j, i, j]
            data += [k, -k, -k, k]
            rhs[i] += k * length
            rhs[j] -= k * length

        # COO sums duplicate entries on conversion
        stiffness = sp.sparse.coo_matrix(
            (np.asarray(data, dtype=np.float64), (row, col)),
            shape=(n, n),
        ).tocsr()
        return stiffness, rhs

    def solve(self) -> dict[PhysicsParticle, float]:
        """
        Equilibrium position of every active particle.

        Returns:
            Mapping particle -> position. Locked and pinned particles keep
            their current position.
        """
        particles = list(self.physics.particles)
        n = len(particles)
        if n == 0:
            return {}

        stiffness, rhs = self._assemble(particles)
        current = np.array([p.position for p in particles], dtype=np.float64)

        fixed = np.array([p.is_locked for p in particles], dtype=bool)
        n_groups, labels = connected_components(stiffness, directed=False)
        for group in range(n_groups):
            members = np.flatnonzero(labels == group)
            if not fixed[members].any():
                fixed[members[0]] = True

        free = ~fixed
        positions = current.copy()
        if free.any():
            k_ff = stiffness[free][:, free]
            k_fc = stiffness[free][:, fixed]
            load = rhs[free] - k_fc.dot(current[fixed])
            positions[free] = np.atleast_1d(spsolve(k_ff.tocsc(), load))

        logger.debug(
            f"Equilibrium solved for {int(free.sum())} free of {n} particles "
            f"in {n_groups} group(s)."
        )
        return {p: float(x) for p, x in zip(particles, positions)}
