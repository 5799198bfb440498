"""Producer receive loop: routes every inbound frame into the relay session."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from audio_relay.relay.session import SessionRelay

from .lifecycle import WebSocketLifecycle

logger = logging.getLogger(__name__)


async def _recv_with_watchdog(ws: WebSocket, lifecycle: WebSocketLifecycle) -> tuple[dict[str, Any] | None, bool]:
    try:
        message = await asyncio.wait_for(
            ws.receive(),
            timeout=lifecycle.watchdog_tick_s * 2,
        )
        return message, False
    except TimeoutError:
        return None, lifecycle.should_close()


async def run_message_loop(ws: WebSocket, lifecycle: WebSocketLifecycle, session: SessionRelay) -> None:
    """Feed producer frames to ``session`` until the producer goes away.

    Binary frames carry audio; text frames are passed along too and ignored by
    the session. Returning means the producer is gone and the caller runs the
    disconnect transition.
    """
    try:
        while True:
            message, should_exit = await _recv_with_watchdog(ws, lifecycle)
            if should_exit:
                return
            if message is None:
                continue

            if message.get("type") == "websocket.disconnect":
                logger.debug("session %s: producer disconnected code=%s", session.session_id, message.get("code"))
                return

            lifecycle.touch()

            data = message.get("bytes")
            if data is not None:
                session.on_producer_frame(data)
                continue
            text = message.get("text")
            if text is not None:
                session.on_producer_frame(text)
    except WebSocketDisconnect:
        return
    except Exception as exc:
        if lifecycle.should_close():
            return
        session.on_producer_error(exc)


__all__ = ["run_message_loop"]
