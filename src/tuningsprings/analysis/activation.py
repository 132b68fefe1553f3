"""
Note Activation Engine
======================
The state machine deciding which notes are sounding and which springs are
realized in the physics working set.

Why is this file needed?
------------------------
1. Consistency: A spring may only be in the physics working set while both of
   its endpoint particles are. Every transition here preserves that rule.
2. User control: Interval springs carry an "allowed" flag and a weight;
   tethers carry a per-note weight. These survive note on/off cycles.

Every public operation is idempotent and either fully applies or is rejected
before anything is mutated.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Mapping, TYPE_CHECKING, Union

from tuningsprings.config import AMPLITUDE_RAMP_SECONDS, PLAY_AMPLITUDE
from tuningsprings.model.intervals import Interval
from tuningsprings.model.stiffness import MAX_WEIGHT, MIN_WEIGHT, validate_weight

if TYPE_CHECKING:
    from tuningsprings.analysis.graph import IntervalSpring, SpringGraph
    from tuningsprings.analysis.registry import Note, NoteRegistry
    from tuningsprings.model.stiffness import StiffnessCurve
    from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsSpring

logger = logging.getLogger(__name__)

NoteRef = Union["Note", str]


class NoteState(Enum):
    IDLE = "idle"
    SOUNDING = "sounding"


class NoteActivationEngine:
    """
    Adds and removes notes, interval springs and tethers from the physics
    working set.
    """
    def __init__(
        self,
        physics: PhysicsAdapter,
        registry: NoteRegistry,
        graph: SpringGraph,
        curve: StiffnessCurve,
        interval_weights: Mapping[Interval, float],
        tether_weight: float,
        tethering: bool = True,
    ) -> None:
        """
        Args:
            physics: The simulation the engine adds entities to.
            registry: All notes, each owning a particle and an anchor.
            graph: The prebuilt interval and tether springs.
            curve: Weight -> strength mapping.
            interval_weights: Initial weight per interval kind.
            tether_weight: Initial tether weight of every note.
            tethering: Whether sounding notes are tethered to their anchors.
        """
        self.physics = physics
        self.registry = registry
        self.graph = graph
        self.curve = curve
        self.tethering = tethering

        self.interval_weights: dict[Interval, float] = {
            interval: validate_weight(interval_weights[interval]) for interval in Interval
        }
        self.tether_weights: dict[str, float] = {
            note.label: validate_weight(tether_weight) for note in registry
        }
        self.states: dict[str, NoteState] = {note.label: NoteState.IDLE for note in registry}
        # Notes locked by a tether weight of 1, as opposed to locked by the user
        self.pinned: set[str] = set()

        # Intervals created at weight 0 start disallowed
        for interval, weight in self.interval_weights.items():
            if weight == MIN_WEIGHT:
                for record in self.graph.springs_of_interval(interval):
                    record.allowed = False

        # Tethers created at weight 1 start pinned
        for note in registry:
            if self.tether_weights[note.label] == MAX_WEIGHT:
                self._pin(note)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _resolve(self, note: NoteRef) -> Note:
        if isinstance(note, str):
            return self.registry[note]
        return note

    def is_sounding(self, note: NoteRef) -> bool:
        return self.states[self._resolve(note).label] is NoteState.SOUNDING

    def sounding_notes(self) -> list[Note]:
        """Sounding notes in ascending chromatic order."""
        return [n for n in self.registry if self.states[n.label] is NoteState.SOUNDING]

    def active_interval_springs(self) -> list[IntervalSpring]:
        return [r for r in self.graph if self.physics.has_spring(r.spring)]

    def available_intervals(self) -> list[Interval]:
        """Interval kinds with at least one spring between two sounding notes."""
        found = {
            r.interval for r in self.graph
            if self._endpoints_active(r.spring)
        }
        return sorted(found)

    def tether_enabled(self, note: Note) -> bool:
        """A tether acts only while tethering is on and its weight is strictly inside (0, 1)."""
        weight = self.tether_weights[note.label]
        return self.tethering and MIN_WEIGHT < weight < MAX_WEIGHT

    # ------------------------------------------------------------------
    # Working set primitives
    # ------------------------------------------------------------------
    def _endpoints_active(self, spring: PhysicsSpring) -> bool:
        return self.physics.has_particle(spring.a) and self.physics.has_particle(spring.b)

    def _realize(self, spring: PhysicsSpring) -> None:
        if self.physics.has_spring(spring):
            return
        if self._endpoints_active(spring) and spring.get_strength() > 0:
            self.physics.add_spring(spring)

    def _unrealize(self, spring: PhysicsSpring) -> None:
        if self.physics.has_spring(spring):
            self.physics.remove_spring(spring)

    def _attach_anchor(self, note: Note) -> None:
        if not self.physics.has_particle(note.anchor):
            self.physics.add_particle(note.anchor)
        note.anchor.lock()

    def _detach_anchor(self, note: Note) -> None:
        self._unrealize(self.graph.tether_of(note).spring)
        if self.physics.has_particle(note.anchor):
            self.physics.remove_particle(note.anchor)

    def _pin(self, note: Note) -> None:
        note.particle.position = note.anchor.position
        note.particle.lock()
        self.pinned.add(note.label)

    def _unpin(self, note: Note) -> None:
        note.particle.unlock()
        self.pinned.discard(note.label)

    @staticmethod
    def _play(note: Note) -> None:
        if note.voice is not None:
            note.voice.set_amplitude(PLAY_AMPLITUDE, AMPLITUDE_RAMP_SECONDS)

    @staticmethod
    def _mute(note: Note) -> None:
        if note.voice is not None:
            note.voice.set_amplitude(0.0, AMPLITUDE_RAMP_SECONDS)

    # ------------------------------------------------------------------
    # Note transitions
    # ------------------------------------------------------------------
    def activate(self, note: NoteRef) -> None:
        """
        Idle -> Sounding.

        Adds the particle (and the locked anchor when tethering), starts the
        voice and realizes every allowed spring whose other end is sounding.

        Raises:
            InvalidNoteLabel: If `note` is an unknown label.
        """
        note = self._resolve(note)
        if self.states[note.label] is NoteState.SOUNDING:
            return

        self.physics.add_particle(note.particle)
        if self.tethering:
            self._attach_anchor(note)
        self.states[note.label] = NoteState.SOUNDING
        self._play(note)

        for record in self.graph.springs_of_note(note):
            if record.allowed:
                self._realize(record.spring)
        if self.tether_enabled(note):
            self._realize(self.graph.tether_of(note).spring)

        logger.debug(f"Note {note.label} activated.")

    def deactivate(self, note: NoteRef) -> None:
        """
        Sounding -> Idle.

        Removes the particle, its anchor and every incident spring. The
        springs keep their "allowed" flag for the next activation.

        Raises:
            InvalidNoteLabel: If `note` is an unknown label.
        """
        note = self._resolve(note)
        if self.states[note.label] is NoteState.IDLE:
            return

        for record in self.graph.springs_of_note(note):
            self._unrealize(record.spring)
        self._detach_anchor(note)
        if self.physics.has_particle(note.particle):
            self.physics.remove_particle(note.particle)
        self.states[note.label] = NoteState.IDLE
        self._mute(note)

        logger.debug(f"Note {note.label} deactivated.")

    def toggle(self, note: NoteRef) -> bool:
        """Flip a note; returns True when it is sounding afterwards."""
        note = self._resolve(note)
        if self.is_sounding(note):
            self.deactivate(note)
            return False
        self.activate(note)
        return True

    # ------------------------------------------------------------------
    # Interval springs
    # ------------------------------------------------------------------
    def enable_interval(self, interval: Interval) -> None:
        """Allow every spring of `interval`, realizing those between sounding notes."""
        for record in self.graph.springs_of_interval(interval):
            record.allowed = True
            self._realize(record.spring)
        logger.debug(f"Interval '{interval.label}' enabled.")

    def disable_interval(self, interval: Interval) -> None:
        """Disallow every spring of `interval` and remove it from the working set."""
        for record in self.graph.springs_of_interval(interval):
            record.allowed = False
            self._unrealize(record.spring)
        logger.debug(f"Interval '{interval.label}' disabled.")

    def set_interval_weight(self, interval: Interval, weight: float) -> None:
        """
        Re-weight all springs of `interval`.

        Weight 0 disables the interval; any other weight enables it.
        """
        weight = validate_weight(weight)
        strength = self.curve.weight_to_stiffness(weight)
        for record in self.graph.springs_of_interval(interval):
            record.spring.set_strength(strength)
        self.interval_weights[interval] = weight

        if weight == MIN_WEIGHT:
            self.disable_interval(interval)
        else:
            self.enable_interval(interval)
        logger.debug(f"Interval '{interval.label}' weight {weight:.2f} -> strength {strength:.5f}.")

    # ------------------------------------------------------------------
    # Tethers
    # ------------------------------------------------------------------
    def set_tether_weight(self, note: NoteRef, weight: float) -> None:
        """
        Re-weight the tether of one note.

        Weight 0 drops the tether. Weight 1 drops it too and pins the note at
        its equal-tempered position. Anything in between releases such a pin
        and realizes the tether while the note is sounding. Locks placed by
        anyone else (pointer drag, calibration) are left alone.
        """
        note = self._resolve(note)
        weight = validate_weight(weight)
        tether = self.graph.tether_of(note).spring
        tether.set_strength(self.curve.weight_to_stiffness(weight))
        self.tether_weights[note.label] = weight

        if note.label in self.pinned and weight != MAX_WEIGHT:
            self._unpin(note)

        if weight == MAX_WEIGHT:
            self._unrealize(tether)
            self._pin(note)
        elif weight == MIN_WEIGHT:
            self._unrealize(tether)
        elif self.tether_enabled(note):
            self._realize(tether)

    def set_tether_weight_all(self, weight: float) -> None:
        weight = validate_weight(weight)
        for note in self.registry:
            self.set_tether_weight(note, weight)

    def set_tethering(self, enabled: bool) -> None:
        """Attach or detach the anchors and tethers of every sounding note."""
        if enabled == self.tethering:
            return
        self.tethering = enabled
        for note in self.sounding_notes():
            if enabled:
                self._attach_anchor(note)
                if self.tether_enabled(note):
                    self._realize(self.graph.tether_of(note).spring)
            else:
                self._detach_anchor(note)
        logger.info(f"Tethering {'enabled' if enabled else 'disabled'}.")
