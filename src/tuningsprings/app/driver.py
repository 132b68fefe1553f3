"""
Simulation Driver
=================
Ticks a :class:`SessionStore` from a QTimer, polling an optional MIDI input
port before each tick so note changes land before the next integration step.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import QObject, QTimer

if TYPE_CHECKING:
    import mido

    from tuningsprings.app.state import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 16


class SimulationDriver(QObject):
    def __init__(
        self,
        store: SessionStore,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        midi_port: Optional[mido.ports.BaseInput] = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.midi_port = midi_port
        self.ticks = 0

        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.step)

    @property
    def is_running(self) -> bool:
        return self.timer.isActive()

    def start(self) -> None:
        logger.info(f"Simulation driver started ({self.timer.interval()} ms per tick).")
        self.timer.start()

    def stop(self) -> None:
        self.timer.stop()
        logger.info(f"Simulation driver stopped after {self.ticks} ticks.")

    def step(self) -> None:
        if self.midi_port is not None:
            for message in self.midi_port.iter_pending():
                self.store.handle_midi(message)
        self.store.tick()
        self.ticks += 1
