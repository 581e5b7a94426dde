"""
Logging configuration for the alaraprep namespace.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
driver decides where messages go by calling :func:`setup_logging` once.
"""

import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``alaraprep`` logger.

    Parameters
    ----------
    level : int, optional
        Logging level, e.g. ``logging.DEBUG`` or ``logging.INFO``.
    log_file : str, optional
        Path to also write the log to.

    Returns
    -------
    logging.Logger
        The configured ``alaraprep`` logger.
    """
    logger = logging.getLogger("alaraprep")
    logger.setLevel(level)

    # Re-running setup (tests, repeated CLI calls) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def level_from_verbosity(verbosity: int) -> int:
    """Map a repeated ``-v`` count onto a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG
