"""Diagnostic logging setup: stderr only, stdout carries the protocol."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "mimcp"
PLAIN_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO", *, rich: bool = True) -> logging.Logger:
    """Attach a single stderr handler to the ``mimcp`` logger.

    Calling it again replaces the handler instead of stacking another one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()  # stderr
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    # Never propagate to root, which might have stdout handlers.
    logger.propagate = False
    return logger
