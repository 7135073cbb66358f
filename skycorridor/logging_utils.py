"""Mini README: Application-wide logging helpers for SkyCorridor.

Structure:
    * configure_root_logger - install a single formatted stream handler.
    * get_logger - factory returning module loggers with baseline setup.
    * log_duration - context manager reporting elapsed wall time.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)``. Entry points may call
    ``configure_root_logger`` with an explicit level at any time; the handler
    is installed only once so output is never duplicated.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the shared handler once and apply ``level`` to the root logger.

    Without a level the root logger keeps its current level (INFO on first
    use), so module-level ``get_logger`` calls never undo an explicit level
    set by an entry point.
    """

    global _LOGGER_INITIALISED
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)


@contextmanager
def log_duration(logger: logging.Logger, label: str) -> Iterator[None]:
    """Log how long the wrapped block took, in milliseconds."""

    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("%s took %.1fms", label, elapsed_ms)
