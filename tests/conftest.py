import matplotlib

matplotlib.use("Agg")

import pytest

from tuningsprings.controller.session import TuningSession
from tuningsprings.model.state import SessionConfig


def find_spring(session, label_a, label_b):
    pair = frozenset((label_a, label_b))
    return next(r for r in session.graph if r.labels == pair)


def assert_consistent(session):
    """No spring may be active while either of its endpoints is not."""
    particles = set(session.physics.particles)
    for spring in session.physics.springs:
        assert spring.a in particles
        assert spring.b in particles


@pytest.fixture
def session():
    return TuningSession()


@pytest.fixture
def untethered():
    return TuningSession(SessionConfig(tethering=False))


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication
    return QCoreApplication.instance() or QCoreApplication([])
