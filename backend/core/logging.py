"""Logging helpers (tiny wrapper around stdlib logging)."""

from __future__ import annotations

import logging
from typing import Optional

from .config import Settings, get_settings

_configured = False

# Driver chatter that drowns request logs at DEBUG.
_NOISY_LOGGERS = ("pymongo", "multipart")


def setup_logging(level: Optional[str] = None, settings: Optional[Settings] = None) -> None:
    """Configure root logging once; an explicit level or settings re-applies the level."""
    global _configured
    explicit = level is not None or settings is not None
    if _configured and not explicit:
        return

    settings = settings or get_settings()
    log_level = (level or settings.log_level or "INFO").upper()

    if not _configured:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        _configured = True

    logging.getLogger().setLevel(log_level)
    noisy_level = logging.INFO if log_level == "DEBUG" else logging.NOTSET
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
