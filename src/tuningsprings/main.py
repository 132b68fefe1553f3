"""
Application Initialization
==========================
This module builds a session from command-line options and runs it.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Instantiates the configuration and the session.
3. Either relaxes the simulation headless for a fixed number of ticks, or
   starts a Qt event loop that ticks the session in real time (optionally fed
   by a MIDI input port).
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

import mido
from PySide6.QtCore import QCoreApplication, QTimer

from tuningsprings.app.driver import SimulationDriver
from tuningsprings.app.state import SessionStore
from tuningsprings.controller.midi import open_input
from tuningsprings.controller.session import TuningSession
from tuningsprings.logging_config import setup_logging
from tuningsprings.model.state import SessionConfig, Waveform
from tuningsprings.model.tunings import DEFAULT_TUNING

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuningsprings",
        description="Relax a set of notes on a just-intonation spring network.",
    )
    parser.add_argument("notes", nargs="*", help="Notes to sound, e.g. C4 E4 G4")
    parser.add_argument("--tuning", default=DEFAULT_TUNING, help="Tuning name")
    parser.add_argument("--tuning-file", help="JSON file with extra tunings")
    parser.add_argument("--steps", type=int, default=2000, help="Ticks to relax headless")
    parser.add_argument("--no-tethers", action="store_true", help="Disable tether springs")
    parser.add_argument("--tether-weight", type=float, default=0.2)
    parser.add_argument("--waveform", choices=[w.value for w in Waveform], default=Waveform.SAWTOOTH.value)
    parser.add_argument("--realtime", type=float, metavar="SECONDS",
                        help="Run the Qt tick loop for SECONDS instead of relaxing headless")
    parser.add_argument("--midi", nargs="?", const="", metavar="PORT",
                        help="Listen to a MIDI input port (first available if no name)")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file")
    return parser


def run_headless(session: TuningSession, steps: int) -> None:
    session.relax(steps)
    if not session.sounding_notes():
        logger.info("No notes sounding, nothing to compare.")
        return
    session.log_notes()
    for label, cents in session.solve_equilibrium().items():
        logger.info(f"{label}: weighted equilibrium {cents:.2f} c")


def run_realtime(
    session: TuningSession,
    seconds: float,
    port: Optional[mido.ports.BaseInput] = None,
) -> int:
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    store = SessionStore(session)

    driver = SimulationDriver(store, midi_port=port)
    store.notes_changed.connect(lambda labels: logger.info(f"Sounding: {', '.join(labels) or '-'}"))
    driver.start()
    QTimer.singleShot(int(seconds * 1000), app.quit)
    code = app.exec()

    driver.stop()
    if port is not None:
        port.close()
    if session.sounding_notes():
        session.log_notes()
    return code


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level.upper(), logging.INFO), log_file=args.log_file)

    try:
        # 2. Initialize the configuration and the session
        config = SessionConfig(
            tethering=not args.no_tethers,
            tether_weight=args.tether_weight,
            waveform=Waveform(args.waveform),
        )
        session = TuningSession(config)
        if args.tuning_file:
            session.table.library.load_file(args.tuning_file)
        session.select_tuning(args.tuning)

        for label in args.notes:
            session.activate(label)

        # An empty --midi means the first available port
        port = None
        if args.realtime is not None and args.midi is not None:
            port = open_input(args.midi or None)
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 2

    # 3. Run
    if args.realtime is not None:
        return run_realtime(session, args.realtime, port)
    run_headless(session, args.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
