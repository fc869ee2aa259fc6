"""PCM16 helpers for captured audio."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from sightline.config.audio import PCM16_MAX_NEGATIVE, PCM16_MAX_POSITIVE


def float_to_pcm16(samples: np.ndarray) -> bytes:
    """Convert float samples in [-1, 1] to little-endian PCM16 bytes (clipped)."""
    x = np.clip(np.asarray(samples, dtype=np.float32), -1.0, 1.0)
    # Asymmetric scale so -1.0 maps to -32768 and 1.0 to 32767.
    scaled = np.where(x < 0, x * PCM16_MAX_NEGATIVE, x * PCM16_MAX_POSITIVE)
    return scaled.astype("<i2").tobytes()


def pcm16_duration_ms(data: bytes, *, sample_rate_hz: int, channels: int = 1) -> float:
    if sample_rate_hz <= 0 or channels <= 0:
        raise ValueError("sample_rate_hz and channels must be > 0")
    frames = len(data) // (2 * channels)
    return frames * 1000.0 / sample_rate_hz


def pcm16_level(data: bytes) -> float:
    """RMS level of a PCM16 buffer on a 0-100 scale."""
    if len(data) < 2:
        return 0.0
    pcm = np.frombuffer(data[: len(data) - (len(data) % 2)], dtype="<i2").astype(np.float32)
    rms = float(np.sqrt(np.mean(np.square(pcm / PCM16_MAX_NEGATIVE))))
    return min(100.0, rms * 100.0)


def iter_pcm16_chunks(pcm_bytes: bytes, *, chunk_bytes: int) -> Iterator[bytes]:
    if chunk_bytes <= 0:
        raise ValueError("chunk_bytes must be > 0")
    for i in range(0, len(pcm_bytes), chunk_bytes):
        yield pcm_bytes[i : i + chunk_bytes]


__all__ = ["float_to_pcm16", "iter_pcm16_chunks", "pcm16_duration_ms", "pcm16_level"]
