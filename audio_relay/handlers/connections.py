"""Producer admission control and the registry of live relay sessions."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from audio_relay.relay.session import SessionRelay


class ConnectionManager:
    """Caps concurrent producers and remembers which session serves each one.

    A slot is taken by ``admit`` before the socket is accepted; the session is
    attached once it exists so shutdown can end sessions that are still live.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._slots: dict[int, SessionRelay | None] = {}

    @property
    def max_connections(self) -> int:
        return self._max

    async def admit(self, ws: Any) -> bool:
        async with self._lock:
            if len(self._slots) >= self._max:
                return False
            self._slots[id(ws)] = None
            return True

    def attach(self, ws: Any, session: SessionRelay) -> None:
        key = id(ws)
        if key in self._slots:
            self._slots[key] = session

    async def release(self, ws: Any) -> SessionRelay | None:
        async with self._lock:
            return self._slots.pop(id(ws), None)

    def sessions(self) -> list[SessionRelay]:
        return [session for session in self._slots.values() if session is not None]

    def close_all(self) -> int:
        """Run the producer-disconnect transition for every attached session."""
        live = self.sessions()
        for session in live:
            session.on_producer_disconnect()
        return len(live)

    def get_connection_count(self) -> int:
        return len(self._slots)


__all__ = ["ConnectionManager"]
