"""Ordered, non-blocking outbound text channel to a producer WebSocket."""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from .errors import safe_send_text

logger = logging.getLogger(__name__)


class ProducerChannel:
    """Queue text frames for the producer and write them from a single task.

    ``send_text`` is synchronous so relay sessions can forward remote messages
    without awaiting. Frames are written in the order they were queued.
    """

    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._write_loop())
        return self._task

    def send_text(self, text: str) -> None:
        if self._closed:
            return
        self._queue.put_nowait(text)

    async def stop(self) -> None:
        self._closed = True
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.wait({self._task})
        self._task = None
        if not self._queue.empty():
            logger.debug("producer channel stopped with %s unsent frames", self._queue.qsize())

    async def _write_loop(self) -> None:
        while True:
            text = await self._queue.get()
            if not await safe_send_text(self._ws, text):
                self._closed = True
                return


__all__ = ["ProducerChannel"]
