"""Builds relay sessions for newly connected producers."""

from __future__ import annotations

from .session import SessionRelay
from .protocols import ProducerSink, RemoteFactory


class RelayBridge:
    def __init__(self, *, remote_factory: RemoteFactory, max_pending_frames: int = 0) -> None:
        self._remote_factory = remote_factory
        self._max_pending_frames = max(0, int(max_pending_frames))

    def new_session(self, producer: ProducerSink, *, session_id: str | None = None) -> SessionRelay:
        """Start a session in IDLE for a producer that just connected; no remote connection is made yet."""
        return SessionRelay(
            producer,
            self._remote_factory,
            session_id=session_id,
            max_pending_frames=self._max_pending_frames,
        )


__all__ = ["RelayBridge"]
