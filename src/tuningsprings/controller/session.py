"""
Tuning Session
==============
The single object that owns a running simulation.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root of the engine. It:
1. Builds the pitch axis, tuning table, note registry and spring graph from a
   :class:`SessionConfig`.
2. Owns the physics adapter, the activation engine and the note voices.
3. Runs the tick: integrate, then push every sounding note's live pitch to
   its voice. UI, MIDI and pointer actions are applied synchronously between
   ticks.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Union

from tuningsprings.analysis.activation import NoteActivationEngine
from tuningsprings.analysis.graph import IntervalSpring, SpringGraph
from tuningsprings.analysis.registry import Note, NoteRegistry
from tuningsprings.config import FREQUENCY_RAMP_SECONDS
from tuningsprings.controller.audio import SilentVoice, Voice
from tuningsprings.controller.midi import MidiNoteMapper
from tuningsprings.controller.pointer import PointerDrag
from tuningsprings.exceptions import DegenerateEquilibriumInput
from tuningsprings.model.intervals import Interval
from tuningsprings.model.state import SessionConfig, Waveform
from tuningsprings.model.tunings import TuningLibrary, TuningTable
from tuningsprings.physics.adapter import PhysicsAdapter
from tuningsprings.physics.verlet import VerletPhysics
from tuningsprings.solvers.equilibrium import EquilibriumSolver
from tuningsprings.solvers.predictor import EquilibriumPrediction, EquilibriumPredictor
from tuningsprings.utils import cents_to_frequency, round_two

logger = logging.getLogger(__name__)

NoteRef = Union[Note, str]
IntervalRef = Union[Interval, str]


def _resolve_interval(interval: IntervalRef) -> Interval:
    if isinstance(interval, Interval):
        return interval
    return Interval.from_label(interval)


class TuningSession:
    """
    Pass this instance to front-ends (Qt store, CLI, MIDI listener).
    """
    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        physics: Optional[PhysicsAdapter] = None,
        library: Optional[TuningLibrary] = None,
        voice_factory: Callable[[], Voice] = SilentVoice,
    ) -> None:
        """
        Args:
            config: Configuration surface; defaults are used when omitted.
            physics: Particle/spring simulation; a Verlet world when omitted.
            library: Tuning catalogue; the built-in tunings when omitted.
            voice_factory: Creates one audio voice per note.

        Raises:
            UnknownTuningName: If the configured tuning is not in the library.
        """
        self.config = config if config is not None else SessionConfig()
        self.physics = physics if physics is not None else VerletPhysics()
        self.axis = self.config.axis
        self.table = TuningTable(library, self.config.tuning_name)

        self.registry = NoteRegistry(
            physics=self.physics,
            axis=self.axis,
            octaves=self.config.octaves,
            reference_frequency=self.config.reference_frequency,
        )
        for note in self.registry:
            note.voice = voice_factory()
            note.voice.set_waveform(self.config.waveform)
            note.voice.set_frequency(round_two(note.frequency))
            note.voice.set_amplitude(0.0)
            note.voice.start()

        self.graph = SpringGraph(
            physics=self.physics,
            registry=self.registry,
            table=self.table,
            axis=self.axis,
            curve=self.config.stiffness_curve,
        )
        self.graph.build_springs(self.config.interval_weights, self.config.tether_weight)

        self.engine = NoteActivationEngine(
            physics=self.physics,
            registry=self.registry,
            graph=self.graph,
            curve=self.config.stiffness_curve,
            interval_weights=self.config.interval_weights,
            tether_weight=self.config.tether_weight,
            tethering=self.config.tethering,
        )
        self.predictor = EquilibriumPredictor(self.table)
        self.solver = EquilibriumSolver(self.physics)
        self.pointer = PointerDrag(self.physics, self.registry)
        self.midi = MidiNoteMapper(self, offset=self.config.midi_note_offset)

        logger.info(
            f"Session ready: {len(self.registry)} notes, tuning '{self.table.name}', "
            f"tethering {'on' if self.engine.tethering else 'off'}."
        )

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------
    def activate(self, note: NoteRef) -> None:
        self.engine.activate(note)

    def deactivate(self, note: NoteRef) -> None:
        self.engine.deactivate(note)

    def toggle(self, note: NoteRef) -> bool:
        return self.engine.toggle(note)

    def sounding_notes(self) -> list[Note]:
        return self.engine.sounding_notes()

    def available_intervals(self) -> list[Interval]:
        return self.engine.available_intervals()

    def note_cents(self, note: NoteRef) -> float:
        """Live cents (from C4) of a note's particle."""
        if isinstance(note, str):
            note = self.registry[note]
        return float(self.axis.position_to_cents(note.particle.position))

    def current_cents(self) -> dict[str, float]:
        return {note.label: self.note_cents(note) for note in self.sounding_notes()}

    # ------------------------------------------------------------------
    # Tuning
    # ------------------------------------------------------------------
    def select_tuning(self, name: str) -> None:
        """
        Switch the active tuning and re-tune every spring.

        Raises:
            UnknownTuningName: Nothing changes.
        """
        self.table.select(name)
        self.retune_springs()
        self.config.tuning_name = self.table.name

    def retune_springs(self) -> None:
        self.graph.retune_springs()

    def tuning_names(self) -> list[str]:
        return self.table.library.get_names()

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------
    def enable_interval(self, interval: IntervalRef) -> None:
        self.engine.enable_interval(_resolve_interval(interval))

    def disable_interval(self, interval: IntervalRef) -> None:
        self.engine.disable_interval(_resolve_interval(interval))

    def set_interval_weight(self, interval: IntervalRef, weight: float) -> None:
        interval = _resolve_interval(interval)
        self.engine.set_interval_weight(interval, weight)
        self.config.interval_weights[interval] = self.engine.interval_weights[interval]

    def set_tether_weight(self, note: NoteRef, weight: float) -> None:
        self.engine.set_tether_weight(note, weight)

    def set_tether_weight_all(self, weight: float) -> None:
        self.engine.set_tether_weight_all(weight)
        self.config.tether_weight = weight

    def set_tethering(self, enabled: bool) -> None:
        self.engine.set_tethering(enabled)
        self.config.tethering = enabled

    def set_waveform(self, waveform: Union[Waveform, str]) -> None:
        waveform = Waveform(waveform)
        for note in self.registry:
            if note.voice is not None:
                note.voice.set_waveform(waveform)
        self.config.waveform = waveform

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def update_frequencies(self) -> None:
        """Push every sounding note's live pitch to its voice."""
        for note in self.sounding_notes():
            if note.voice is None:
                continue
            hz = cents_to_frequency(self.note_cents(note), self.config.reference_frequency)
            note.voice.set_frequency(round_two(hz), FREQUENCY_RAMP_SECONDS)

    def tick(self) -> None:
        self.physics.step()
        self.update_frequencies()

    def relax(self, steps: int) -> None:
        for _ in range(steps):
            self.tick()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def predict(self) -> EquilibriumPrediction:
        """
        Closed-form equilibrium of the sounding notes against their live cents.

        Raises:
            DegenerateEquilibriumInput: If no note is sounding.
        """
        notes = self.sounding_notes()
        if not notes:
            raise DegenerateEquilibriumInput()
        return self.predictor.compare(
            labels=[n.label for n in notes],
            indices=[n.index for n in notes],
            current_cents=[self.note_cents(n) for n in notes],
        )

    def log_notes(self) -> dict[str, tuple[float, float]]:
        """Log and return predicted vs current cents, rounded to two decimals."""
        rounded = self.predict().rounded()
        for label, (predicted, current) in rounded.items():
            logger.info(f"{label}: predicted {predicted:.2f} c, current {current:.2f} c")
        return rounded

    def solve_equilibrium(self) -> dict[str, float]:
        """Exact weighted equilibrium cents of every sounding note."""
        positions = self.solver.solve()
        return {
            note.label: float(self.axis.position_to_cents(positions[note.particle]))
            for note in self.sounding_notes()
        }

    def spring_extension_percent(self, record: IntervalSpring) -> float:
        """How far a spring is stretched (+) or compressed (-) relative to rest."""
        rest = record.spring.get_rest_length()
        current = self.physics.distance(record.spring.a, record.spring.b)
        if rest == 0:
            return 0.0 if current == 0 else math.inf
        return 100.0 * current / rest - 100.0
