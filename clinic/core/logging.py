"""Logging bootstrap for the API process."""
from __future__ import annotations

import logging

from .settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the ``clinic`` logger hierarchy."""

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger("clinic")
    root.setLevel(level)
    if not any(getattr(handler, "_clinic_handler", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._clinic_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
