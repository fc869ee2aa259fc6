"""Capture source backed by an audio file and a directory of JPEG frames."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import soxr
import soundfile as sf

from sightline.errors import ConfigurationError
from sightline.state.settings import AudioSettings
from sightline.config.video import VIDEO_FRAME_EXTS

from .pcm import float_to_pcm16, iter_pcm16_chunks

logger = logging.getLogger(__name__)


def load_pcm16(path: str, *, sample_rate_hz: int, channels: int = 1) -> bytes:
    """Decode any soundfile-readable file to PCM16 at the target rate."""
    x, sr = sf.read(path, dtype="float32", always_2d=True)
    mono = x.mean(axis=1)
    if int(sr) != sample_rate_hz:
        # soxr expects float32 for best results.
        mono = soxr.resample(mono.astype(np.float32, copy=False), int(sr), sample_rate_hz)
    if channels > 1:
        mono = np.repeat(mono[:, None], channels, axis=1).reshape(-1)
    return float_to_pcm16(mono)


def find_frame_files(frames_dir: str) -> list[Path]:
    root = Path(frames_dir)
    if not root.is_dir():
        raise ConfigurationError(f"frames directory not found: {frames_dir}")
    return sorted(p for p in root.iterdir() if p.suffix.lower() in VIDEO_FRAME_EXTS)


class FileCaptureSource:
    """Replay a recording as if it were live capture.

    Audio is decoded once up front and served chunk by chunk. Frames are read
    from disk on demand, in name order. With `loop=True` both wrap around instead
    of running dry.
    """

    def __init__(
        self,
        *,
        audio: AudioSettings,
        audio_path: str | None = None,
        frames_dir: str | None = None,
        loop: bool = False,
    ) -> None:
        if audio_path is None and frames_dir is None:
            raise ConfigurationError("file capture needs an audio file, a frames directory, or both")
        self._loop = loop
        self._chunks: list[bytes] = []
        self._chunk_index = 0
        self._frames: list[Path] = []
        self._frame_index = 0

        if audio_path is not None:
            try:
                pcm = load_pcm16(audio_path, sample_rate_hz=audio.sample_rate_hz, channels=audio.channels)
            except (OSError, RuntimeError, ValueError) as exc:
                raise ConfigurationError(f"cannot read audio file {audio_path}: {exc}") from exc
            chunk_bytes = audio.samples_per_chunk * 2 * audio.channels
            self._chunks = list(iter_pcm16_chunks(pcm, chunk_bytes=chunk_bytes))
            logger.info("loaded %s: %d chunks of %d ms", audio_path, len(self._chunks), audio.chunk_period_ms)

        if frames_dir is not None:
            self._frames = find_frame_files(frames_dir)
            if not self._frames:
                raise ConfigurationError(f"no JPEG frames found in {frames_dir}")
            logger.info("loaded %d frames from %s", len(self._frames), frames_dir)

    @property
    def has_audio(self) -> bool:
        return bool(self._chunks)

    @property
    def has_video(self) -> bool:
        return bool(self._frames)

    async def read_audio_chunk(self) -> bytes | None:
        if not self._chunks:
            return None
        if self._chunk_index >= len(self._chunks):
            if not self._loop:
                return None
            self._chunk_index = 0
        chunk = self._chunks[self._chunk_index]
        self._chunk_index += 1
        return chunk

    async def read_video_frame(self) -> bytes | None:
        if not self._frames:
            return None
        if self._frame_index >= len(self._frames):
            if not self._loop:
                return None
            self._frame_index = 0
        path = self._frames[self._frame_index]
        self._frame_index += 1
        return path.read_bytes()

    def close(self) -> None:
        self._chunks = []
        self._frames = []


__all__ = ["FileCaptureSource", "find_frame_files", "load_pcm16"]
