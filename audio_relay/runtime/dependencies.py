"""Runtime dependency construction (remote factory + admission control)."""

from __future__ import annotations

import logging

from audio_relay.state import RuntimeDeps
from audio_relay.relay.bridge import RelayBridge
from audio_relay.state.settings import AppSettings
from audio_relay.relay.factory import RemoteConnectionFactory
from audio_relay.handlers.connections import ConnectionManager

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    remote_factory = RemoteConnectionFactory(settings.remote)
    relay_bridge = RelayBridge(
        remote_factory=remote_factory,
        max_pending_frames=settings.limits.max_pending_frames,
    )
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    logger.info(
        "runtime: remote=%s max_connections=%s max_pending_frames=%s",
        settings.remote.url,
        settings.limits.max_concurrent_connections,
        settings.limits.max_pending_frames or "unbounded",
    )
    return RuntimeDeps(
        connections=connections,
        relay_bridge=relay_bridge,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
