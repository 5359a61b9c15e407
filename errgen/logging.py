"""Logging setup shared by the errgen CLI and library modules."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "errgen"
_CONSOLE_FORMAT = "[errgen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``errgen`` or a child logger such as ``errgen.probe``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the errgen logger.

    stdout stays untouched: it carries cargo directives and JSON models.
    Calling this again replaces the handlers installed by a previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [_handler(logging.StreamHandler(sys.stderr), _CONSOLE_FORMAT)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # The file records DEBUG regardless of --verbose.
        handlers.append(_handler(logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT))
        handlers[0].setLevel(level)
        logger.setLevel(logging.DEBUG)

    for handler in handlers:
        logger.addHandler(handler)
    return logger


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
