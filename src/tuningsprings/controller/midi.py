"""
MIDI Note Input
===============
Maps MIDI note on/off messages onto the note registry.

Only the note number and velocity are used. A note_on with velocity 0 is a
note_off. Note numbers are shifted by a fixed offset so that the first
registry note (C3 by default) is MIDI note 48.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

import mido

if TYPE_CHECKING:
    from tuningsprings.controller.session import TuningSession

logger = logging.getLogger(__name__)


class MidiNoteMapper:
    """
    Routes MIDI messages to a session.
    """
    def __init__(self, session: TuningSession, offset: int) -> None:
        self.session = session
        self.offset = offset

    def handle(self, message: mido.Message) -> Optional[str]:
        """
        Apply one message.

        Returns:
            The label of the note that was switched, or None if the message
            was ignored.
        """
        if message.type not in ("note_on", "note_off"):
            return None

        index = message.note - self.offset
        registry = self.session.registry
        if not 0 <= index < len(registry):
            logger.warning(f"MIDI note {message.note} is outside the note range, ignored.")
            return None

        note = registry.by_index(index)
        if message.type == "note_on" and message.velocity > 0:
            self.session.activate(note.label)
        else:
            self.session.deactivate(note.label)
        logger.debug(f"MIDI {message.type} {message.note} (vel {message.velocity}) -> {note.label}")
        return note.label

    def handle_bytes(self, data: Sequence[int]) -> Optional[str]:
        """
        Apply a raw message. A velocity byte missing from a note message
        is read as 0.
        """
        data = list(data)
        if len(data) == 2 and data[0] & 0xF0 in (0x80, 0x90):
            data.append(0)
        return self.handle(mido.Message.from_bytes(data))

    def poll(self, port: mido.ports.BaseInput) -> list[str]:
        """Apply every pending message of an open input port without blocking."""
        switched = []
        for message in port.iter_pending():
            label = self.handle(message)
            if label is not None:
                switched.append(label)
        return switched


def open_input(port_name: Optional[str] = None) -> mido.ports.BaseInput:
    """
    Open a MIDI input port, the first available one when no name is given.
    """
    names = mido.get_input_names()
    if not names:
        raise IOError("No MIDI input ports available.")
    name = port_name if port_name is not None else names[0]
    logger.info(f"Opening MIDI input '{name}'.")
    return mido.open_input(name)
