"""WebSocket endpoint configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

DEFAULT_WS_ENDPOINT_PATH = "/"
DEFAULT_WS_IDLE_TIMEOUT_S = 150.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 0.0

# Close codes
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_BUSY_REASON = "server at capacity"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration reached"

__all__ = [
    "DEFAULT_WS_ENDPOINT_PATH",
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_ENDPOINT_PATH",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_BUSY_REASON",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
]
