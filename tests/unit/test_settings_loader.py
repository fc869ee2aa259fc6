from __future__ import annotations

import pytest

from sightline.errors import ConfigurationError
from sightline.runtime.settings_loader import load_settings
from sightline.config.session import DEFAULT_SESSION_MODEL, DEFAULT_SESSION_ENDPOINT_URL


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CREDENTIAL_ISSUER_URL", "RECONNECT_BACKOFF", "SESSION_ENDPOINT_URL", "AUDIO_SAMPLE_RATE_HZ"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()
    assert settings.audio.sample_rate_hz == 16000
    assert settings.audio.mime_type == "audio/pcm;rate=16000"
    assert settings.audio.samples_per_chunk == 16000
    assert settings.video.frame_period_ms == 500.0
    assert settings.reconnect.max_attempts == 3
    assert settings.reconnect.backoff == "linear"
    assert settings.credential.refresh_lead_ms == 180_000
    assert settings.health.inactivity_threshold_ms == 300_000
    assert settings.session.model == DEFAULT_SESSION_MODEL
    assert settings.session.endpoint_url == DEFAULT_SESSION_ENDPOINT_URL
    assert settings.session.response_modalities == ("AUDIO",)


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUDIO_CHUNK_PERIOD_MS", "500")
    monkeypatch.setenv("RECONNECT_BACKOFF", "Exponential")
    monkeypatch.setenv("SESSION_RESPONSE_MODALITIES", "audio, text")
    monkeypatch.setenv("CREDENTIAL_ISSUER_URL", "https://issuer.test/token")

    settings = load_settings()
    assert settings.audio.samples_per_chunk == 8000
    assert settings.reconnect.backoff == "exponential"
    assert settings.session.response_modalities == ("AUDIO", "TEXT")
    assert settings.credential.issuer_url == "https://issuer.test/token"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("AUDIO_SAMPLE_RATE_HZ", "abc"),
        ("AUDIO_BIT_DEPTH", "24"),
        ("VIDEO_FRAME_RATE", "0"),
        ("RECONNECT_BACKOFF", "fibonacci"),
        ("RECONNECT_MAX_ATTEMPTS", "0"),
        ("CREDENTIAL_REFRESH_LEAD_MS", "30000"),
        ("SESSION_ENDPOINT_URL", "https://not-a-websocket"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        load_settings()
