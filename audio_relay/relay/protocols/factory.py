"""Source of remote handles for relay sessions."""

from __future__ import annotations

from typing import Protocol

from .handle import RemoteHandle
from .listener import RemoteListener


class RemoteFactory(Protocol):
    def open(self, listener: RemoteListener) -> RemoteHandle:
        """Start connecting and return immediately; readiness arrives via ``listener.on_remote_open``."""
        ...


__all__ = ["RemoteFactory"]
