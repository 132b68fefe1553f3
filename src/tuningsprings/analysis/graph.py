"""
Spring Graph Builder
====================
Builds the complete interval-spring network (one spring per unordered note
pair) and one tether spring per note, and re-tunes rest lengths in place.

Why is this file needed?
------------------------
1. Topology: The graph is built once; activation only moves springs in and
   out of the physics working set, it never creates or destroys them.
2. Tuning: Rest lengths are derived from the active tuning table. A tuning
   switch rewrites them without touching topology or membership.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator, Mapping, TYPE_CHECKING

from tuningsprings.model.intervals import Interval

if TYPE_CHECKING:
    from tuningsprings.analysis.registry import Note, NoteRegistry
    from tuningsprings.model.pitch_axis import PitchAxis
    from tuningsprings.model.stiffness import StiffnessCurve
    from tuningsprings.model.tunings import TuningTable
    from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsSpring

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class IntervalSpring:
    """
    A spring between two distinct notes.

    `upper` is the note with the higher chromatic index. `allowed` is the user
    controlled inclusion flag; it is independent of whether the spring is
    currently realized in the physics working set.
    """
    spring: PhysicsSpring
    upper: Note
    lower: Note
    interval: Interval
    allowed: bool = True

    @property
    def distance(self) -> int:
        """Semitones between the two endpoints."""
        return self.upper.index - self.lower.index

    @property
    def labels(self) -> frozenset[str]:
        """Unordered pair of endpoint labels."""
        return frozenset((self.upper.label, self.lower.label))

    def touches(self, note: Note) -> bool:
        return note is self.upper or note is self.lower

    def other(self, note: Note) -> Note:
        return self.lower if note is self.upper else self.upper


@dataclass(eq=False)
class TetherSpring:
    """Zero-length spring from a note's particle to its equal-tempered anchor."""
    spring: PhysicsSpring
    note: Note


class SpringGraph:
    """
    All interval and tether springs of a registry.
    """
    def __init__(
        self,
        physics: PhysicsAdapter,
        registry: NoteRegistry,
        table: TuningTable,
        axis: PitchAxis,
        curve: StiffnessCurve,
    ) -> None:
        self.physics = physics
        self.registry = registry
        self.table = table
        self.axis = axis
        self.curve = curve

        self.interval_springs: list[IntervalSpring] = []
        self.tethers: dict[str, TetherSpring] = {}
        self._by_interval: dict[Interval, list[IntervalSpring]] = {}
        self._by_note: dict[str, list[IntervalSpring]] = {}

    def rest_length(self, distance: int) -> float:
        """
        Spatial rest length of an interval spanning `distance` semitones.

        Whole octaves above the first add 1200 cents each.
        """
        return self.axis.length_of(self.table.cents_at(distance))

    def build_springs(
        self,
        interval_weights: Mapping[Interval, float],
        tether_weight: float,
    ) -> None:
        """
        Create every interval spring and every tether spring.

        Args:
            interval_weights: Weight per interval kind, mapped through the curve.
            tether_weight: Initial weight of every tether.
        """
        self.interval_springs = []
        self.tethers = {}
        self._by_interval = {interval: [] for interval in Interval}
        self._by_note = {note.label: [] for note in self.registry}

        notes = self.registry.notes
        for i, upper in enumerate(notes):
            for lower in notes[:i]:
                distance = i - lower.index
                interval = Interval.from_distance(distance)
                spring = self.physics.create_spring(
                    upper.particle,
                    lower.particle,
                    self.rest_length(distance),
                    self.curve.weight_to_stiffness(interval_weights[interval]),
                )
                record = IntervalSpring(spring=spring, upper=upper, lower=lower, interval=interval)
                self.interval_springs.append(record)
                self._by_interval[interval].append(record)
                self._by_note[upper.label].append(record)
                self._by_note[lower.label].append(record)

            tether = self.physics.create_spring(
                upper.particle,
                upper.anchor,
                0.0,
                self.curve.weight_to_stiffness(tether_weight),
            )
            self.tethers[upper.label] = TetherSpring(spring=tether, note=upper)

        logger.info(
            f"Spring graph built: {len(self.interval_springs)} interval springs, "
            f"{len(self.tethers)} tethers (tuning '{self.table.name}')."
        )

    def retune_springs(self) -> None:
        """Overwrite every rest length from the active tuning table."""
        for record in self.interval_springs:
            record.spring.set_rest_length(self.rest_length(record.distance))
        logger.debug(f"Re-tuned {len(self.interval_springs)} springs to '{self.table.name}'.")

    def __len__(self) -> int:
        return len(self.interval_springs)

    def __iter__(self) -> Iterator[IntervalSpring]:
        return iter(self.interval_springs)

    def springs_of_interval(self, interval: Interval) -> list[IntervalSpring]:
        return self._by_interval[interval]

    def springs_of_note(self, note: Note) -> list[IntervalSpring]:
        return self._by_note[note.label]

    def tether_of(self, note: Note) -> TetherSpring:
        return self.tethers[note.label]
