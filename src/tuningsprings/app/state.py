from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from tuningsprings.controller.session import TuningSession
    from tuningsprings.model.intervals import Interval
    from tuningsprings.model.state import Waveform


class SessionStore(QObject):
    """Central state store with signals for view/audio sync."""
    notes_changed = Signal(object)
    tuning_changed = Signal(str)
    weights_changed = Signal(object)
    tethering_changed = Signal(bool)
    waveform_changed = Signal(str)
    ticked = Signal()

    def __init__(self, session: TuningSession) -> None:
        super().__init__()
        self.session = session

    def sounding_labels(self) -> list[str]:
        return [note.label for note in self.session.sounding_notes()]

    def _emit_notes(self) -> None:
        self.notes_changed.emit(self.sounding_labels())

    def activate(self, label: str) -> None:
        self.session.activate(label)
        self._emit_notes()

    def deactivate(self, label: str) -> None:
        self.session.deactivate(label)
        self._emit_notes()

    def toggle(self, label: str) -> bool:
        sounding = self.session.toggle(label)
        self._emit_notes()
        return sounding

    def handle_midi(self, message) -> None:
        if self.session.midi.handle(message) is not None:
            self._emit_notes()

    def select_tuning(self, name: str) -> None:
        self.session.select_tuning(name)
        self.tuning_changed.emit(name)

    def set_interval_weight(self, interval: Union[Interval, str], weight: float) -> None:
        self.session.set_interval_weight(interval, weight)
        self.weights_changed.emit(dict(self.session.engine.interval_weights))

    def set_tether_weight(self, label: str, weight: float) -> None:
        self.session.set_tether_weight(label, weight)
        self.weights_changed.emit(dict(self.session.engine.tether_weights))

    def set_tethering(self, enabled: bool) -> None:
        if enabled != self.session.engine.tethering:
            self.session.set_tethering(enabled)
            self.tethering_changed.emit(enabled)

    def set_waveform(self, waveform: Union[Waveform, str]) -> None:
        self.session.set_waveform(waveform)
        self.waveform_changed.emit(self.session.config.waveform.value)

    def tick(self) -> None:
        self.session.tick()
        self.ticked.emit()
