"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
from urllib.parse import parse_qsl

from audio_relay.errors import MissingCredentialError
from audio_relay.config.secrets import ENV_DEEPGRAM_API_KEY
from audio_relay.config.server import (
    ENV_RELAY_HOST,
    ENV_RELAY_PORT,
    DEFAULT_RELAY_HOST,
    DEFAULT_RELAY_PORT,
)
from audio_relay.state.settings import (
    AppSettings,
    LimitsSettings,
    RemoteSettings,
    ServerSettings,
    WebSocketSettings,
)
from audio_relay.config.limits import (
    ENV_RELAY_MAX_PENDING_FRAMES,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_RELAY_MAX_PENDING_FRAMES,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
)
from audio_relay.config.websocket import (
    ENV_WS_ENDPOINT_PATH,
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_ENDPOINT_PATH,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from audio_relay.config.remote import (
    ENV_REMOTE_URL,
    ENV_REMOTE_MODEL,
    DEFAULT_REMOTE_URL,
    ENV_REMOTE_CHANNELS,
    ENV_REMOTE_ENCODING,
    DEFAULT_REMOTE_MODEL,
    ENV_REMOTE_EXTRA_QUERY,
    DEFAULT_REMOTE_CHANNELS,
    DEFAULT_REMOTE_ENCODING,
    ENV_REMOTE_PUNCTUATION,
    ENV_REMOTE_OPEN_TIMEOUT_S,
    DEFAULT_REMOTE_PUNCTUATION,
    ENV_REMOTE_INTERIM_RESULTS,
    DEFAULT_REMOTE_OPEN_TIMEOUT_S,
    DEFAULT_REMOTE_INTERIM_RESULTS,
)

_FALSE_VALUES = {"0", "false", "no", "n", "off"}
_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    v = raw.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    return default


def _query_env(name: str) -> dict[str, str]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return {}
    return dict(parse_qsl(raw.lstrip("?"), keep_blank_values=True))


def _normalize_path(path: str) -> str:
    path = path.strip() or DEFAULT_WS_ENDPOINT_PATH
    return path if path.startswith("/") else f"/{path}"


def load_remote_settings() -> RemoteSettings:
    api_key = (os.getenv(ENV_DEEPGRAM_API_KEY) or "").strip()
    if not api_key:
        raise MissingCredentialError(ENV_DEEPGRAM_API_KEY)

    return RemoteSettings(
        url=_str_env(ENV_REMOTE_URL, DEFAULT_REMOTE_URL),
        api_key=api_key,
        model=_str_env(ENV_REMOTE_MODEL, DEFAULT_REMOTE_MODEL),
        encoding=_str_env(ENV_REMOTE_ENCODING, DEFAULT_REMOTE_ENCODING),
        channels=max(1, _int_env(ENV_REMOTE_CHANNELS, DEFAULT_REMOTE_CHANNELS)),
        punctuation=_bool_env(ENV_REMOTE_PUNCTUATION, DEFAULT_REMOTE_PUNCTUATION),
        interim_results=_bool_env(ENV_REMOTE_INTERIM_RESULTS, DEFAULT_REMOTE_INTERIM_RESULTS),
        open_timeout_s=max(0.0, _float_env(ENV_REMOTE_OPEN_TIMEOUT_S, DEFAULT_REMOTE_OPEN_TIMEOUT_S)),
        extra_query=_query_env(ENV_REMOTE_EXTRA_QUERY),
    )


def load_server_settings() -> ServerSettings:
    port = _int_env(ENV_RELAY_PORT, DEFAULT_RELAY_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_RELAY_PORT
    return ServerSettings(host=_str_env(ENV_RELAY_HOST, DEFAULT_RELAY_HOST), port=port)


def load_limits_settings() -> LimitsSettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    max_pending = _int_env(ENV_RELAY_MAX_PENDING_FRAMES, DEFAULT_RELAY_MAX_PENDING_FRAMES)
    return LimitsSettings(
        max_concurrent_connections=max(1, max_connections),
        max_pending_frames=max(0, max_pending),
    )


def load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        endpoint_path=_normalize_path(_str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)),
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=max(0.01, _float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S)),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def load_settings() -> AppSettings:
    """Resolve all settings from the environment.

    Raises ``MissingCredentialError`` when the transcription API key is absent.
    """
    return AppSettings(
        remote=load_remote_settings(),
        server=load_server_settings(),
        limits=load_limits_settings(),
        websocket=load_websocket_settings(),
    )


__all__ = [
    "load_limits_settings",
    "load_remote_settings",
    "load_server_settings",
    "load_settings",
    "load_websocket_settings",
]
