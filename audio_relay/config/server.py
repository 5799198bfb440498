"""Listening endpoint configuration (env names and defaults only)."""

from __future__ import annotations

ENV_RELAY_HOST = "RELAY_HOST"
ENV_RELAY_PORT = "RELAY_PORT"

DEFAULT_RELAY_HOST = "0.0.0.0"
DEFAULT_RELAY_PORT = 3001

__all__ = [
    "DEFAULT_RELAY_HOST",
    "DEFAULT_RELAY_PORT",
    "ENV_RELAY_HOST",
    "ENV_RELAY_PORT",
]
