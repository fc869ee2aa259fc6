"""Collect model audio from inbound messages and save it as WAV."""

from __future__ import annotations

import logging

import numpy as np
import soundfile as sf

from sightline.state.inbound import InboundMessage
from sightline.config.audio import DEFAULT_RESPONSE_AUDIO_SAMPLE_RATE_HZ

logger = logging.getLogger(__name__)


def parse_pcm_rate(mime_type: str | None, default: int = DEFAULT_RESPONSE_AUDIO_SAMPLE_RATE_HZ) -> int:
    """Extract `rate=N` from a MIME tag like `audio/pcm;rate=24000`."""
    if not mime_type:
        return default
    for param in mime_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "rate":
            try:
                rate = int(value.strip())
            except ValueError:
                return default
            return rate if rate > 0 else default
    return default


class ResponseAudioRecorder:
    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._sample_rate_hz: int | None = None
        self.transcript: list[str] = []

    @property
    def has_audio(self) -> bool:
        return bool(self._chunks)

    @property
    def sample_rate_hz(self) -> int:
        return self._sample_rate_hz or DEFAULT_RESPONSE_AUDIO_SAMPLE_RATE_HZ

    def on_message(self, message: InboundMessage) -> None:
        if message.audio:
            if self._sample_rate_hz is None:
                self._sample_rate_hz = parse_pcm_rate(message.audio_mime_type)
            self._chunks.extend(message.audio)
        if message.text:
            self.transcript.append(message.text)
            logger.info("model: %s", message.text)

    def write_wav(self, path: str) -> float:
        """Write collected audio; returns its duration in seconds."""
        pcm = b"".join(self._chunks)
        samples = np.frombuffer(pcm[: len(pcm) - (len(pcm) % 2)], dtype="<i2")
        sf.write(path, samples, self.sample_rate_hz, subtype="PCM_16")
        duration_s = len(samples) / float(self.sample_rate_hz)
        logger.info("wrote %.1fs of model audio to %s", duration_s, path)
        return duration_s


__all__ = ["ResponseAudioRecorder", "parse_pcm_rate"]
