"""Logging setup for OldNav.

Every module obtains its logger through get_logger(__name__) so that all
records end up under the "oldnav" logger hierarchy. Applications (the CLI)
call initialize_logging() once at startup; library users may configure the
standard logging module themselves instead.

Typical usage:
    from oldnav.core.logging_system import get_logger, initialize_logging

    initialize_logging("DEBUG")
    logger = get_logger(__name__)
    logger.info("Loaded %d fixes", count)
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "oldnav"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_initialized = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger within the oldnav hierarchy.

    Args:
        name: Logger name, usually the module's __name__.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def initialize_logging(level: str | int = "INFO", log_file: Path | str | None = None) -> None:
    """Configure the oldnav root logger.

    Safe to call more than once: handlers are only installed the first time,
    later calls just adjust the level.

    Args:
        level: Logging level name or number.
        log_file: Optional file to also write records to.
    """
    global _initialized

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if _initialized:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _initialized = True
