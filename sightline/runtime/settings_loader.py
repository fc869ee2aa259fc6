"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from sightline.errors import ConfigurationError
from sightline.state.settings import (
    AppSettings,
    AudioSettings,
    VideoSettings,
    HealthSettings,
    SessionSettings,
    ReconnectSettings,
    CredentialSettings,
)
from sightline.config.video import (
    ENV_VIDEO_WIDTH,
    ENV_VIDEO_HEIGHT,
    DEFAULT_VIDEO_WIDTH,
    DEFAULT_VIDEO_HEIGHT,
    ENV_VIDEO_FRAME_RATE,
    DEFAULT_VIDEO_FRAME_RATE,
    ENV_VIDEO_MAX_FRAME_AGE_MS,
    DEFAULT_VIDEO_MAX_FRAME_AGE_MS,
)
from sightline.config.audio import (
    ENV_AUDIO_CHANNELS,
    ENV_AUDIO_BIT_DEPTH,
    DEFAULT_AUDIO_CHANNELS,
    DEFAULT_AUDIO_BIT_DEPTH,
    ENV_AUDIO_SAMPLE_RATE_HZ,
    ENV_AUDIO_CHUNK_PERIOD_MS,
    DEFAULT_AUDIO_SAMPLE_RATE_HZ,
    DEFAULT_AUDIO_CHUNK_PERIOD_MS,
)
from sightline.config.health import (
    ENV_HEALTH_CHECK_INTERVAL_MS,
    DEFAULT_HEALTH_CHECK_INTERVAL_MS,
    ENV_HEALTH_INACTIVITY_THRESHOLD_MS,
    DEFAULT_HEALTH_INACTIVITY_THRESHOLD_MS,
)
from sightline.config.reconnect import (
    BACKOFF_MODES,
    ENV_RECONNECT_BACKOFF,
    DEFAULT_RECONNECT_BACKOFF,
    ENV_RECONNECT_MAX_ATTEMPTS,
    ENV_RECONNECT_BASE_DELAY_MS,
    ENV_RECONNECT_MAX_DELAY_MS,
    DEFAULT_RECONNECT_MAX_ATTEMPTS,
    DEFAULT_RECONNECT_BASE_DELAY_MS,
    DEFAULT_RECONNECT_MAX_DELAY_MS,
)
from sightline.config.credential import (
    ENV_CREDENTIAL_API_KEY,
    ENV_CREDENTIAL_ISSUER_URL,
    ENV_CREDENTIAL_REFRESH_LEAD_MS,
    ENV_CREDENTIAL_SAFETY_BUFFER_MS,
    ENV_CREDENTIAL_REQUEST_TIMEOUT_S,
    DEFAULT_CREDENTIAL_REFRESH_LEAD_MS,
    DEFAULT_CREDENTIAL_SAFETY_BUFFER_MS,
    DEFAULT_CREDENTIAL_REQUEST_TIMEOUT_S,
)
from sightline.config.session import (
    ENV_SESSION_MODEL,
    DEFAULT_SESSION_MODEL,
    ENV_SESSION_ENDPOINT_URL,
    ENV_SESSION_BUSY_TIMEOUT_MS,
    ENV_SESSION_CLOSE_TIMEOUT_S,
    DEFAULT_SESSION_ENDPOINT_URL,
    ENV_SESSION_GO_AWAY_MARGIN_MS,
    ENV_SESSION_TOKEN_QUERY_PARAM,
    ENV_SESSION_CONNECT_TIMEOUT_S,
    DEFAULT_SESSION_BUSY_TIMEOUT_MS,
    DEFAULT_SESSION_CLOSE_TIMEOUT_S,
    ENV_SESSION_SEND_FAILURE_LIMIT,
    ENV_SESSION_SYSTEM_INSTRUCTION,
    DEFAULT_SESSION_GO_AWAY_MARGIN_MS,
    DEFAULT_SESSION_TOKEN_QUERY_PARAM,
    DEFAULT_SESSION_CONNECT_TIMEOUT_S,
    ENV_SESSION_RESPONSE_MODALITIES,
    DEFAULT_SESSION_SEND_FAILURE_LIMIT,
    DEFAULT_SESSION_SYSTEM_INSTRUCTION,
    DEFAULT_SESSION_RESPONSE_MODALITIES,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(part.strip().upper() for part in raw.split(",") if part.strip())


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {value}")


def _load_audio_settings() -> AudioSettings:
    settings = AudioSettings(
        sample_rate_hz=_int_env(ENV_AUDIO_SAMPLE_RATE_HZ, DEFAULT_AUDIO_SAMPLE_RATE_HZ),
        channels=_int_env(ENV_AUDIO_CHANNELS, DEFAULT_AUDIO_CHANNELS),
        bit_depth=_int_env(ENV_AUDIO_BIT_DEPTH, DEFAULT_AUDIO_BIT_DEPTH),
        chunk_period_ms=_int_env(ENV_AUDIO_CHUNK_PERIOD_MS, DEFAULT_AUDIO_CHUNK_PERIOD_MS),
    )
    _require_positive(ENV_AUDIO_SAMPLE_RATE_HZ, settings.sample_rate_hz)
    _require_positive(ENV_AUDIO_CHANNELS, settings.channels)
    _require_positive(ENV_AUDIO_CHUNK_PERIOD_MS, settings.chunk_period_ms)
    if settings.bit_depth != 16:
        raise ConfigurationError(f"{ENV_AUDIO_BIT_DEPTH} must be 16 (PCM16), got {settings.bit_depth}")
    return settings


def _load_video_settings() -> VideoSettings:
    settings = VideoSettings(
        width=_int_env(ENV_VIDEO_WIDTH, DEFAULT_VIDEO_WIDTH),
        height=_int_env(ENV_VIDEO_HEIGHT, DEFAULT_VIDEO_HEIGHT),
        frame_rate=_float_env(ENV_VIDEO_FRAME_RATE, DEFAULT_VIDEO_FRAME_RATE),
        max_frame_age_ms=max(0, _int_env(ENV_VIDEO_MAX_FRAME_AGE_MS, DEFAULT_VIDEO_MAX_FRAME_AGE_MS)),
    )
    _require_positive(ENV_VIDEO_WIDTH, settings.width)
    _require_positive(ENV_VIDEO_HEIGHT, settings.height)
    _require_positive(ENV_VIDEO_FRAME_RATE, settings.frame_rate)
    return settings


def _load_reconnect_settings() -> ReconnectSettings:
    backoff = _str_env(ENV_RECONNECT_BACKOFF, DEFAULT_RECONNECT_BACKOFF).lower()
    if backoff not in BACKOFF_MODES:
        raise ConfigurationError(f"{ENV_RECONNECT_BACKOFF} must be one of {sorted(BACKOFF_MODES)}, got {backoff!r}")

    settings = ReconnectSettings(
        max_attempts=_int_env(ENV_RECONNECT_MAX_ATTEMPTS, DEFAULT_RECONNECT_MAX_ATTEMPTS),
        base_delay_ms=max(0, _int_env(ENV_RECONNECT_BASE_DELAY_MS, DEFAULT_RECONNECT_BASE_DELAY_MS)),
        backoff=backoff,
        max_delay_ms=_int_env(ENV_RECONNECT_MAX_DELAY_MS, DEFAULT_RECONNECT_MAX_DELAY_MS),
    )
    _require_positive(ENV_RECONNECT_MAX_ATTEMPTS, settings.max_attempts)
    _require_positive(ENV_RECONNECT_MAX_DELAY_MS, settings.max_delay_ms)
    return settings


def _load_credential_settings() -> CredentialSettings:
    settings = CredentialSettings(
        issuer_url=_str_env(ENV_CREDENTIAL_ISSUER_URL, ""),
        api_key=(os.getenv(ENV_CREDENTIAL_API_KEY) or "").strip(),
        refresh_lead_ms=_int_env(ENV_CREDENTIAL_REFRESH_LEAD_MS, DEFAULT_CREDENTIAL_REFRESH_LEAD_MS),
        safety_buffer_ms=max(0, _int_env(ENV_CREDENTIAL_SAFETY_BUFFER_MS, DEFAULT_CREDENTIAL_SAFETY_BUFFER_MS)),
        request_timeout_s=_float_env(ENV_CREDENTIAL_REQUEST_TIMEOUT_S, DEFAULT_CREDENTIAL_REQUEST_TIMEOUT_S),
    )
    _require_positive(ENV_CREDENTIAL_REQUEST_TIMEOUT_S, settings.request_timeout_s)
    if settings.refresh_lead_ms <= settings.safety_buffer_ms:
        # Otherwise the proactive refresh would fire after the token is already unusable.
        raise ConfigurationError(
            f"{ENV_CREDENTIAL_REFRESH_LEAD_MS} ({settings.refresh_lead_ms}) must exceed"
            f" {ENV_CREDENTIAL_SAFETY_BUFFER_MS} ({settings.safety_buffer_ms})"
        )
    return settings


def _load_health_settings() -> HealthSettings:
    settings = HealthSettings(
        check_interval_ms=_int_env(ENV_HEALTH_CHECK_INTERVAL_MS, DEFAULT_HEALTH_CHECK_INTERVAL_MS),
        inactivity_threshold_ms=_int_env(ENV_HEALTH_INACTIVITY_THRESHOLD_MS, DEFAULT_HEALTH_INACTIVITY_THRESHOLD_MS),
    )
    _require_positive(ENV_HEALTH_CHECK_INTERVAL_MS, settings.check_interval_ms)
    _require_positive(ENV_HEALTH_INACTIVITY_THRESHOLD_MS, settings.inactivity_threshold_ms)
    return settings


def _load_session_settings() -> SessionSettings:
    settings = SessionSettings(
        endpoint_url=_str_env(ENV_SESSION_ENDPOINT_URL, DEFAULT_SESSION_ENDPOINT_URL),
        model=_str_env(ENV_SESSION_MODEL, DEFAULT_SESSION_MODEL),
        system_instruction=_str_env(ENV_SESSION_SYSTEM_INSTRUCTION, DEFAULT_SESSION_SYSTEM_INSTRUCTION),
        response_modalities=_csv_env(ENV_SESSION_RESPONSE_MODALITIES, DEFAULT_SESSION_RESPONSE_MODALITIES),
        token_query_param=_str_env(ENV_SESSION_TOKEN_QUERY_PARAM, DEFAULT_SESSION_TOKEN_QUERY_PARAM),
        connect_timeout_s=_float_env(ENV_SESSION_CONNECT_TIMEOUT_S, DEFAULT_SESSION_CONNECT_TIMEOUT_S),
        close_timeout_s=_float_env(ENV_SESSION_CLOSE_TIMEOUT_S, DEFAULT_SESSION_CLOSE_TIMEOUT_S),
        go_away_margin_ms=max(0, _int_env(ENV_SESSION_GO_AWAY_MARGIN_MS, DEFAULT_SESSION_GO_AWAY_MARGIN_MS)),
        busy_timeout_ms=max(0, _int_env(ENV_SESSION_BUSY_TIMEOUT_MS, DEFAULT_SESSION_BUSY_TIMEOUT_MS)),
        send_failure_limit=_int_env(ENV_SESSION_SEND_FAILURE_LIMIT, DEFAULT_SESSION_SEND_FAILURE_LIMIT),
    )
    if not settings.endpoint_url.startswith(("ws://", "wss://")):
        raise ConfigurationError(f"{ENV_SESSION_ENDPOINT_URL} must use a ws:// or wss:// scheme")
    _require_positive(ENV_SESSION_CONNECT_TIMEOUT_S, settings.connect_timeout_s)
    _require_positive(ENV_SESSION_CLOSE_TIMEOUT_S, settings.close_timeout_s)
    _require_positive(ENV_SESSION_SEND_FAILURE_LIMIT, settings.send_failure_limit)
    return settings


def load_settings() -> AppSettings:
    return AppSettings(
        audio=_load_audio_settings(),
        video=_load_video_settings(),
        reconnect=_load_reconnect_settings(),
        credential=_load_credential_settings(),
        health=_load_health_settings(),
        session=_load_session_settings(),
    )


__all__ = ["load_settings"]
