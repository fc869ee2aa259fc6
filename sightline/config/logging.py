"""Logging configuration (env names and defaults only)."""

from __future__ import annotations

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SHOW_TRANSPORT_LOGS = "SHOW_TRANSPORT_LOGS"

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Libraries that log every frame/request at INFO or DEBUG.
TRANSPORT_LOGGERS = ("websockets", "websockets.client", "httpx", "httpcore")

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "ENV_LOG_LEVEL",
    "ENV_SHOW_TRANSPORT_LOGS",
    "LOG_FORMAT",
    "TRANSPORT_LOGGERS",
]
