"""Best-effort send and rejection helpers for producer WebSockets."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def reject_connection(ws: WebSocket, *, close_code: int, reason: str) -> None:
    # Accept so the close code and reason reach the client.
    try:
        await ws.accept()
    except Exception:
        return
    try:
        await ws.close(code=close_code, reason=reason)
    except Exception:
        return


__all__ = ["reject_connection", "safe_send_text"]
