"""Configuration module exports (env names and defaults only)."""

from .audio import DEFAULT_AUDIO_SAMPLE_RATE_HZ
from .session import DEFAULT_SESSION_MODEL

__all__ = [
    "DEFAULT_AUDIO_SAMPLE_RATE_HZ",
    "DEFAULT_SESSION_MODEL",
]
