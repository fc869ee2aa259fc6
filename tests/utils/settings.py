"""Settings builders with small, test-friendly values."""

from __future__ import annotations

from dataclasses import replace

from sightline.config.reconnect import BACKOFF_LINEAR
from sightline.state.settings import (
    AudioSettings,
    VideoSettings,
    HealthSettings,
    SessionSettings,
    ReconnectSettings,
)

AUDIO = AudioSettings(sample_rate_hz=16000, channels=1, bit_depth=16, chunk_period_ms=1000)
VIDEO = VideoSettings(width=640, height=480, frame_rate=2.0, max_frame_age_ms=0)
RECONNECT = ReconnectSettings(max_attempts=3, base_delay_ms=2000, backoff=BACKOFF_LINEAR, max_delay_ms=30000)
HEALTH = HealthSettings(check_interval_ms=30_000, inactivity_threshold_ms=300_000)
SESSION = SessionSettings(
    endpoint_url="ws://127.0.0.1:1/ws",
    model="models/test-model",
    system_instruction="describe the scene",
    response_modalities=("AUDIO",),
    token_query_param="access_token",
    connect_timeout_s=5.0,
    close_timeout_s=1.0,
    go_away_margin_ms=10_000,
    busy_timeout_ms=10_000,
    send_failure_limit=3,
)


def session_settings(**overrides) -> SessionSettings:
    return replace(SESSION, **overrides)


def reconnect_settings(**overrides) -> ReconnectSettings:
    return replace(RECONNECT, **overrides)


__all__ = ["AUDIO", "HEALTH", "RECONNECT", "SESSION", "VIDEO", "reconnect_settings", "session_settings"]
