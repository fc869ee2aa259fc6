"""Ephemeral credential configuration (env names and defaults only)."""

from __future__ import annotations

ENV_CREDENTIAL_ISSUER_URL = "CREDENTIAL_ISSUER_URL"
ENV_CREDENTIAL_API_KEY = "CREDENTIAL_API_KEY"
ENV_CREDENTIAL_REFRESH_LEAD_MS = "CREDENTIAL_REFRESH_LEAD_MS"
ENV_CREDENTIAL_SAFETY_BUFFER_MS = "CREDENTIAL_SAFETY_BUFFER_MS"
ENV_CREDENTIAL_REQUEST_TIMEOUT_S = "CREDENTIAL_REQUEST_TIMEOUT_S"

# Refresh three minutes ahead; never hand out a token with under a minute left.
DEFAULT_CREDENTIAL_REFRESH_LEAD_MS: int = 180_000
DEFAULT_CREDENTIAL_SAFETY_BUFFER_MS: int = 60_000
DEFAULT_CREDENTIAL_REQUEST_TIMEOUT_S: float = 10.0

ISSUER_API_KEY_HEADER = "x-api-key"

# Accepted response keys, in lookup order.
ISSUER_TOKEN_KEYS = ("token", "name")
ISSUER_EXPIRY_KEYS = ("expiresAt", "expireTime", "expires_at")

# Epoch values above this are milliseconds rather than seconds.
EPOCH_MS_THRESHOLD: float = 1e12

__all__ = [
    "DEFAULT_CREDENTIAL_REFRESH_LEAD_MS",
    "DEFAULT_CREDENTIAL_REQUEST_TIMEOUT_S",
    "DEFAULT_CREDENTIAL_SAFETY_BUFFER_MS",
    "ENV_CREDENTIAL_API_KEY",
    "ENV_CREDENTIAL_ISSUER_URL",
    "ENV_CREDENTIAL_REFRESH_LEAD_MS",
    "ENV_CREDENTIAL_REQUEST_TIMEOUT_S",
    "ENV_CREDENTIAL_SAFETY_BUFFER_MS",
    "EPOCH_MS_THRESHOLD",
    "ISSUER_API_KEY_HEADER",
    "ISSUER_EXPIRY_KEYS",
    "ISSUER_TOKEN_KEYS",
]
