"""Logging setup shared by the service and persistence layers."""

import logging

from src.core import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Attach a stream handler to the root logger (once) and set the level for the application loggers."""
    resolved = level if level is not None else config.LOG_LEVEL
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    logging.getLogger("src").setLevel(resolved)
