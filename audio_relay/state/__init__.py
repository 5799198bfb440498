from .runtime import RuntimeDeps
from .settings import AppSettings
from .session import RelayState, SessionState, RelayCounters

__all__ = ["AppSettings", "RelayCounters", "RelayState", "RuntimeDeps", "SessionState"]
