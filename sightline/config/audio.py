"""Audio capture configuration (env names and defaults only)."""

from __future__ import annotations

ENV_AUDIO_SAMPLE_RATE_HZ = "AUDIO_SAMPLE_RATE_HZ"
ENV_AUDIO_CHANNELS = "AUDIO_CHANNELS"
ENV_AUDIO_BIT_DEPTH = "AUDIO_BIT_DEPTH"
ENV_AUDIO_CHUNK_PERIOD_MS = "AUDIO_CHUNK_PERIOD_MS"

# The realtime endpoint expects PCM16 mono @ 16kHz.
DEFAULT_AUDIO_SAMPLE_RATE_HZ: int = 16000
DEFAULT_AUDIO_CHANNELS: int = 1
DEFAULT_AUDIO_BIT_DEPTH: int = 16

# One chunk per second paces the whole pipeline.
DEFAULT_AUDIO_CHUNK_PERIOD_MS: int = 1000

AUDIO_PCM_MIME_PREFIX = "audio/pcm"

# Model audio arrives as PCM16 mono; 24kHz unless the MIME type says otherwise.
DEFAULT_RESPONSE_AUDIO_SAMPLE_RATE_HZ: int = 24000

PCM16_MAX_POSITIVE: int = 0x7FFF
PCM16_MAX_NEGATIVE: int = 0x8000

__all__ = [
    "AUDIO_PCM_MIME_PREFIX",
    "DEFAULT_AUDIO_BIT_DEPTH",
    "DEFAULT_AUDIO_CHANNELS",
    "DEFAULT_AUDIO_CHUNK_PERIOD_MS",
    "DEFAULT_AUDIO_SAMPLE_RATE_HZ",
    "DEFAULT_RESPONSE_AUDIO_SAMPLE_RATE_HZ",
    "ENV_AUDIO_BIT_DEPTH",
    "ENV_AUDIO_CHANNELS",
    "ENV_AUDIO_CHUNK_PERIOD_MS",
    "ENV_AUDIO_SAMPLE_RATE_HZ",
    "PCM16_MAX_NEGATIVE",
    "PCM16_MAX_POSITIVE",
]
