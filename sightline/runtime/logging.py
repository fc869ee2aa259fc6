"""Logging initialization."""

from __future__ import annotations

import os
import logging

from sightline.config.logging import (
    LOG_FORMAT,
    ENV_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    TRANSPORT_LOGGERS,
    ENV_SHOW_TRANSPORT_LOGS,
)


def configure_logging() -> None:
    # websockets/httpx log every frame and request. Keep them tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_TRANSPORT_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    level = (os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["configure_logging"]
