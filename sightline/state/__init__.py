from .runtime import SessionRuntime
from .send import SendResult
from .session import SessionState
from .settings import AppSettings
from .inbound import InboundMessage
from .credential import Credential
from .media import AudioUnit, VideoUnit, MultimodalInput

__all__ = [
    "AppSettings",
    "AudioUnit",
    "Credential",
    "InboundMessage",
    "MultimodalInput",
    "SendResult",
    "SessionRuntime",
    "SessionState",
    "VideoUnit",
]
