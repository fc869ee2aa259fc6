from .health import HealthMonitor
from .manager import SessionLifecycleManager

__all__ = ["HealthMonitor", "SessionLifecycleManager"]
