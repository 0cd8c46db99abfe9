"""Opt-in log output for the stackprobe package."""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from stackprobe.config.settings import LoggingSettings

PACKAGE_LOGGER = "stackprobe"


def _console_handler(settings: LoggingSettings) -> logging.Handler:
    if settings.use_rich:
        return RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.format))
    return handler


def setup_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Attach handlers to the ``stackprobe`` logger and return it.

    Only the package's own logger is touched, so an embedding application's
    root configuration is left alone. Calling this again replaces the
    handlers from the previous call.
    """
    settings = settings or LoggingSettings()

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(settings.level)
    logger.propagate = False

    logger.addHandler(_console_handler(settings))

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(settings.format))
        logger.addHandler(file_handler)

    logger.debug("Logging configured at %s", settings.level)
    return logger
