"""WebSocket handle to the remote transcription backend."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed

from .protocols import RemoteListener

logger = logging.getLogger(__name__)

_CLOSE = object()


class RemoteConnection:
    """One streaming connection to the transcription backend.

    The handshake starts as soon as the handle is built (a running event loop
    is required) and its outcome is reported to ``listener``. ``send`` and
    ``close`` never block: outbound frames go through a FIFO drained by a
    single writer task, so a close always follows every frame queued before it.
    """

    def __init__(
        self,
        url: str,
        *,
        listener: RemoteListener,
        headers: list[tuple[str, str]] | None = None,
        open_timeout_s: float | None = None,
    ) -> None:
        self._url = url
        self._listener = listener
        self._headers = list(headers or [])
        self._open_timeout_s = open_timeout_s if open_timeout_s and open_timeout_s > 0 else None
        self._outbound: asyncio.Queue[Any] = asyncio.Queue()
        self._open = False
        self._closing = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    @property
    def is_open(self) -> bool:
        return self._open and not self._closing

    def send(self, data: bytes | str) -> bool:
        if self._closing:
            logger.debug("remote send after close ignored (%s bytes)", len(data))
            return False
        self._outbound.put_nowait(data)
        return True

    def close(self) -> None:
        if self._closing:
            return
        self._closing = True
        if not self._open:
            # Handshake still in flight; abandon it.
            self._task.cancel()
            return
        self._outbound.put_nowait(_CLOSE)

    async def wait_closed(self) -> None:
        await asyncio.wait({self._task})

    async def _run(self) -> None:
        try:
            async with websockets.connect(
                self._url,
                additional_headers=self._headers,
                open_timeout=self._open_timeout_s,
            ) as ws:
                if self._closing:
                    return
                self._open = True
                self._listener.on_remote_open(self)

                writer = asyncio.create_task(self._write_loop(ws))
                try:
                    async for message in ws:
                        self._listener.on_remote_message(self, message)
                finally:
                    writer.cancel()
                    await asyncio.wait({writer})
        except asyncio.CancelledError:
            logger.debug("remote connection cancelled")
            raise
        except Exception as exc:
            logger.debug("remote connection failed", exc_info=True)
            self._listener.on_remote_error(self, exc)
        finally:
            self._open = False
            self._closing = True
            self._listener.on_remote_close(self)

    async def _write_loop(self, ws: Any) -> None:
        try:
            while True:
                item = await self._outbound.get()
                if item is _CLOSE:
                    await ws.close()
                    return
                await ws.send(item)
        except ConnectionClosed:
            return
        except Exception:
            logger.debug("remote writer failed", exc_info=True)
            await ws.close()


__all__ = ["RemoteConnection"]
