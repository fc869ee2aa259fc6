from .slot import LatestFrameSlot
from .source import CaptureSource
from .pairing import PairingBuffer
from .sampler import CaptureSampler
from .file_source import FileCaptureSource

__all__ = ["CaptureSampler", "CaptureSource", "FileCaptureSource", "LatestFrameSlot", "PairingBuffer"]
