"""
Pointer Drag
============
Transient grab of a note particle: while dragged, the particle is locked and
follows the pointer; on release it is handed back to the integrator.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from tuningsprings.config import GRAB_RADIUS

if TYPE_CHECKING:
    from tuningsprings.analysis.registry import Note, NoteRegistry
    from tuningsprings.physics.adapter import PhysicsAdapter, PhysicsParticle

logger = logging.getLogger(__name__)


class PointerDrag:
    def __init__(
        self,
        physics: PhysicsAdapter,
        registry: NoteRegistry,
        radius: float = GRAB_RADIUS,
    ) -> None:
        self.physics = physics
        self.registry = registry
        self.radius = radius
        self.grabbed: Optional[PhysicsParticle] = None

    @property
    def grabbed_note(self) -> Optional[Note]:
        if self.grabbed is None:
            return None
        return self.registry.note_for_particle(self.grabbed)

    def grab(self, position: float) -> Optional[Note]:
        """
        Pick the first free active particle within reach of `position`.

        Locked particles (anchors, pinned notes) cannot be grabbed.
        """
        self.grabbed = next(
            (
                p for p in self.physics.particles
                if abs(p.position - position) < self.radius and not p.is_locked
            ),
            None,
        )
        note = self.grabbed_note
        if note is not None:
            logger.debug(f"Grabbed {note.label}.")
        return note

    def drag_to(self, position: float) -> None:
        if self.grabbed is None:
            return
        self.grabbed.lock()
        self.grabbed.position = position

    def release(self) -> None:
        if self.grabbed is None:
            return
        self.grabbed.unlock()
        logger.debug("Released grabbed particle.")
        self.grabbed = None
