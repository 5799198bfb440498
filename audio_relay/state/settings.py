"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RemoteSettings:
    url: str
    api_key: str
    model: str
    encoding: str
    channels: int
    punctuation: bool
    interim_results: bool
    open_timeout_s: float
    extra_query: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    max_pending_frames: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    endpoint_path: str
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    remote: RemoteSettings
    server: ServerSettings
    limits: LimitsSettings
    websocket: WebSocketSettings


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "RemoteSettings",
    "ServerSettings",
    "WebSocketSettings",
]
