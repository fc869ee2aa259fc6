"""Single-slot holder for the latest captured video frame."""

from __future__ import annotations

from sightline.state.media import VideoUnit


class LatestFrameSlot:
    """Arena-of-one: `put` overwrites, nothing is ever queued.

    Frames that are replaced before an audio chunk reads them are simply
    lost. Video is context for the audio, not a backlog to drain.
    """

    def __init__(self) -> None:
        self._frame: VideoUnit | None = None
        self._overwritten = 0

    def __len__(self) -> int:
        return 0 if self._frame is None else 1

    @property
    def overwritten(self) -> int:
        return self._overwritten

    def put(self, frame: VideoUnit) -> None:
        if self._frame is not None:
            self._overwritten += 1
        self._frame = frame

    def peek(self) -> VideoUnit | None:
        return self._frame

    def clear(self) -> None:
        self._frame = None


__all__ = ["LatestFrameSlot"]
