"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from audio_relay.state import RuntimeDeps
from audio_relay.relay.session import SessionRelay
from audio_relay.config.websocket import WS_CLOSE_BUSY_CODE, WS_CLOSE_BUSY_REASON

from .producer import ProducerChannel
from .errors import reject_connection
from .lifecycle import WebSocketLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.connections.admit(ws):
        logger.warning(
            "rejecting producer: %s active connections (max %s)",
            runtime_deps.connections.get_connection_count(),
            runtime_deps.connections.max_connections,
        )
        await reject_connection(ws, close_code=WS_CLOSE_BUSY_CODE, reason=WS_CLOSE_BUSY_REASON)
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.release(ws)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    lifecycle: WebSocketLifecycle | None = None
    producer: ProducerChannel | None = None
    session: SessionRelay | None = None
    admitted = False
    try:
        if not await _prepare_connection(ws, runtime_deps):
            return
        admitted = True

        producer = ProducerChannel(ws)
        producer.start()
        session = runtime_deps.relay_bridge.new_session(producer)
        runtime_deps.connections.attach(ws, session)

        ws_settings = runtime_deps.settings.websocket
        lifecycle = WebSocketLifecycle(
            ws,
            idle_timeout_s=ws_settings.idle_timeout_s,
            watchdog_tick_s=ws_settings.watchdog_tick_s,
            max_connection_duration_s=ws_settings.max_connection_duration_s,
        )
        lifecycle.start()

        logger.info(
            "producer connected session_id=%s. Active: %s",
            session.session_id,
            runtime_deps.connections.get_connection_count(),
        )
        await run_message_loop(ws, lifecycle, session)
    finally:
        if session is not None:
            session.on_producer_disconnect()

        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()

        if producer is not None:
            with contextlib.suppress(Exception):
                await producer.stop()

        if admitted:
            with contextlib.suppress(Exception):
                await runtime_deps.connections.release(ws)
            logger.info(
                "producer disconnected session_id=%s. Active: %s",
                session.session_id if session is not None else None,
                runtime_deps.connections.get_connection_count(),
            )


__all__ = ["handle_websocket_connection"]
