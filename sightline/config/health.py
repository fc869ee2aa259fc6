"""Connection health monitoring configuration (env names and defaults only)."""

from __future__ import annotations

ENV_HEALTH_CHECK_INTERVAL_MS = "HEALTH_CHECK_INTERVAL_MS"
ENV_HEALTH_INACTIVITY_THRESHOLD_MS = "HEALTH_INACTIVITY_THRESHOLD_MS"

DEFAULT_HEALTH_CHECK_INTERVAL_MS: int = 30_000
DEFAULT_HEALTH_INACTIVITY_THRESHOLD_MS: int = 300_000

__all__ = [
    "DEFAULT_HEALTH_CHECK_INTERVAL_MS",
    "DEFAULT_HEALTH_INACTIVITY_THRESHOLD_MS",
    "ENV_HEALTH_CHECK_INTERVAL_MS",
    "ENV_HEALTH_INACTIVITY_THRESHOLD_MS",
]
