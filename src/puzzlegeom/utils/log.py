"""
Logging setup for scripts using puzzlegeom.

Library modules only create loggers (`logging.getLogger(__name__)`); they
never configure handlers. Scripts call `setup_logging` once at startup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import logging
import sys

PACKAGE_LOGGER = "puzzlegeom"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the `puzzlegeom` logger namespace.

    Parameters
    ----------
    level:
        Logging level (e.g. logging.DEBUG, logging.INFO).
    log_file:
        Optional path; if given, logs are also written there.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling twice must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


__all__ = [
    "PACKAGE_LOGGER",
    "setup_logging",
]
