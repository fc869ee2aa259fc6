"""Video sampling configuration (env names and defaults only)."""

from __future__ import annotations

ENV_VIDEO_WIDTH = "VIDEO_WIDTH"
ENV_VIDEO_HEIGHT = "VIDEO_HEIGHT"
ENV_VIDEO_FRAME_RATE = "VIDEO_FRAME_RATE"
ENV_VIDEO_MAX_FRAME_AGE_MS = "VIDEO_MAX_FRAME_AGE_MS"

DEFAULT_VIDEO_WIDTH: int = 640
DEFAULT_VIDEO_HEIGHT: int = 480

# Video is best-effort context; 2 FPS is plenty for scene description.
DEFAULT_VIDEO_FRAME_RATE: float = 2.0

# 0 disables the staleness bound (any latest frame may be paired).
DEFAULT_VIDEO_MAX_FRAME_AGE_MS: int = 0

VIDEO_FRAME_MIME = "image/jpeg"
VIDEO_FRAME_EXTS = (".jpg", ".jpeg")

__all__ = [
    "DEFAULT_VIDEO_FRAME_RATE",
    "DEFAULT_VIDEO_HEIGHT",
    "DEFAULT_VIDEO_MAX_FRAME_AGE_MS",
    "DEFAULT_VIDEO_WIDTH",
    "ENV_VIDEO_FRAME_RATE",
    "ENV_VIDEO_HEIGHT",
    "ENV_VIDEO_MAX_FRAME_AGE_MS",
    "ENV_VIDEO_WIDTH",
    "VIDEO_FRAME_EXTS",
    "VIDEO_FRAME_MIME",
]
