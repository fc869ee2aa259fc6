"""Captured media units and the paired send unit."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AudioUnit:
    data: bytes
    mime_type: str
    captured_at: float
    duration_ms: float = 0.0


@dataclass(frozen=True, slots=True)
class VideoUnit:
    data: bytes
    mime_type: str
    width: int
    height: int
    captured_at: float


@dataclass(frozen=True, slots=True)
class MultimodalInput:
    audio: AudioUnit | None
    video: VideoUnit | None
    timestamp: float

    @property
    def has_audio(self) -> bool:
        return self.audio is not None


__all__ = ["AudioUnit", "MultimodalInput", "VideoUnit"]
