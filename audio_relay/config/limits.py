"""Admission control and buffering limits (env names and defaults only)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_RELAY_MAX_PENDING_FRAMES = "RELAY_MAX_PENDING_FRAMES"

DEFAULT_MAX_CONCURRENT_CONNECTIONS = 100

# Frames buffered while the remote handshake is in flight. 0 keeps the queue unbounded.
DEFAULT_RELAY_MAX_PENDING_FRAMES = 0

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_RELAY_MAX_PENDING_FRAMES",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_RELAY_MAX_PENDING_FRAMES",
]
