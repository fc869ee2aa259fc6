"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from sightline.config.audio import AUDIO_PCM_MIME_PREFIX


@dataclass(frozen=True, slots=True)
class AudioSettings:
    sample_rate_hz: int
    channels: int
    bit_depth: int
    chunk_period_ms: int

    @property
    def mime_type(self) -> str:
        return f"{AUDIO_PCM_MIME_PREFIX};rate={self.sample_rate_hz}"

    @property
    def samples_per_chunk(self) -> int:
        return int(self.sample_rate_hz * self.chunk_period_ms / 1000)


@dataclass(frozen=True, slots=True)
class VideoSettings:
    width: int
    height: int
    frame_rate: float
    max_frame_age_ms: int

    @property
    def frame_period_ms(self) -> float:
        return 1000.0 / self.frame_rate


@dataclass(frozen=True, slots=True)
class ReconnectSettings:
    max_attempts: int
    base_delay_ms: int
    backoff: str
    max_delay_ms: int


@dataclass(frozen=True, slots=True)
class CredentialSettings:
    issuer_url: str
    api_key: str
    refresh_lead_ms: int
    safety_buffer_ms: int
    request_timeout_s: float


@dataclass(frozen=True, slots=True)
class HealthSettings:
    check_interval_ms: int
    inactivity_threshold_ms: int


@dataclass(frozen=True, slots=True)
class SessionSettings:
    endpoint_url: str
    model: str
    system_instruction: str
    response_modalities: tuple[str, ...]
    token_query_param: str
    connect_timeout_s: float
    close_timeout_s: float
    go_away_margin_ms: int
    busy_timeout_ms: int
    send_failure_limit: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    audio: AudioSettings
    video: VideoSettings
    reconnect: ReconnectSettings
    credential: CredentialSettings
    health: HealthSettings
    session: SessionSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "CredentialSettings",
    "HealthSettings",
    "ReconnectSettings",
    "SessionSettings",
    "VideoSettings",
]
