from .connection import RealtimeConnection
from .dialer import Dialer, dial_websocket
from .failures import classify_close, is_auth_failure

__all__ = ["Dialer", "RealtimeConnection", "classify_close", "dial_websocket", "is_auth_failure"]
