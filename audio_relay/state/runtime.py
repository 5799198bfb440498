"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from audio_relay.relay.bridge import RelayBridge
    from audio_relay.state.settings import AppSettings
    from audio_relay.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionManager
    relay_bridge: RelayBridge
    settings: AppSettings

    async def shutdown(self) -> None:
        closed = self.connections.close_all()
        if closed:
            logger.info("runtime shutdown closed %s active relay sessions", closed)


__all__ = ["RuntimeDeps"]
