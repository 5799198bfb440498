"""Configuration module exports (env names and defaults only)."""

from .secrets import ENV_DEEPGRAM_API_KEY
from .server import DEFAULT_RELAY_PORT, DEFAULT_RELAY_HOST
from .limits import DEFAULT_MAX_CONCURRENT_CONNECTIONS

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_RELAY_HOST",
    "DEFAULT_RELAY_PORT",
    "ENV_DEEPGRAM_API_KEY",
]
