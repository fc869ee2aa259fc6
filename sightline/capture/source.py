"""Capture collaborator interface consumed by the sampler."""

from __future__ import annotations

from typing import Protocol


class CaptureSource(Protocol):
    """Raw media provider.

    `read_audio_chunk` returns PCM16 bytes covering one chunk period and
    `read_video_frame` returns one encoded (JPEG) frame. Either returns None
    once the source is exhausted.
    """

    @property
    def has_audio(self) -> bool: ...

    @property
    def has_video(self) -> bool: ...

    async def read_audio_chunk(self) -> bytes | None: ...

    async def read_video_frame(self) -> bytes | None: ...

    def close(self) -> None: ...


__all__ = ["CaptureSource"]
