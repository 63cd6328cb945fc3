"""Logging setup shared by the moddoc CLI and server."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "moddoc"
CONSOLE_FORMAT = "[moddoc] %(levelname)s %(message)s"
# Server rebuilds run on executor threads, so the file sink records which one.
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the `moddoc` hierarchy, e.g. `moddoc.corpus`."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send moddoc logs to stderr, and to `log_file` when given.

    Calling this again replaces the handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(), level, CONSOLE_FORMAT)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
    return logger


def adopt_logger(name: str, *, level: int = logging.WARNING) -> logging.Logger:
    """Route a third-party logger (e.g. `uvicorn.error`) through moddoc's handlers.

    The adopted logger keeps its own `level` but shares the sinks, and so the
    format, of the `moddoc` logger as configured at call time.
    """
    owner = logging.getLogger(_LOGGER_NAME)
    adopted = logging.getLogger(name)
    for handler in list(adopted.handlers):
        adopted.removeHandler(handler)
    for handler in owner.handlers:
        adopted.addHandler(handler)
    adopted.setLevel(level)
    adopted.propagate = False
    return adopted


__all__ = ["CONSOLE_FORMAT", "FILE_FORMAT", "adopt_logger", "configure_logging", "get_logger"]
