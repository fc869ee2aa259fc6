"""Reconnection policy configuration (env names and defaults only)."""

from __future__ import annotations

ENV_RECONNECT_MAX_ATTEMPTS = "RECONNECT_MAX_ATTEMPTS"
ENV_RECONNECT_BASE_DELAY_MS = "RECONNECT_BASE_DELAY_MS"
ENV_RECONNECT_BACKOFF = "RECONNECT_BACKOFF"
ENV_RECONNECT_MAX_DELAY_MS = "RECONNECT_MAX_DELAY_MS"

BACKOFF_LINEAR = "linear"
BACKOFF_EXPONENTIAL = "exponential"
BACKOFF_MODES = frozenset({BACKOFF_LINEAR, BACKOFF_EXPONENTIAL})

DEFAULT_RECONNECT_MAX_ATTEMPTS: int = 3
DEFAULT_RECONNECT_BASE_DELAY_MS: int = 2000
DEFAULT_RECONNECT_BACKOFF: str = BACKOFF_LINEAR
DEFAULT_RECONNECT_MAX_DELAY_MS: int = 30000

__all__ = [
    "BACKOFF_EXPONENTIAL",
    "BACKOFF_LINEAR",
    "BACKOFF_MODES",
    "DEFAULT_RECONNECT_BACKOFF",
    "DEFAULT_RECONNECT_BASE_DELAY_MS",
    "DEFAULT_RECONNECT_MAX_ATTEMPTS",
    "DEFAULT_RECONNECT_MAX_DELAY_MS",
    "ENV_RECONNECT_BACKOFF",
    "ENV_RECONNECT_BASE_DELAY_MS",
    "ENV_RECONNECT_MAX_ATTEMPTS",
    "ENV_RECONNECT_MAX_DELAY_MS",
]
