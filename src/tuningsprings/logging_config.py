"""
Logging Configuration
=====================
Routes the 'tuningsprings' loggers to stdout and, on request, to a file.

The CLI calls :func:`setup_logging` once; library users that configure
logging themselves never need to.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Third-party loggers that flood DEBUG output (font lookup, port scans)
NOISY_LOGGERS = ("matplotlib", "PIL", "mido")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach handlers to the package logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, truncated on open. Console only when None.
    """
    logger = logging.getLogger("tuningsprings")
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
