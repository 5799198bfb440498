"""Callbacks a remote handle reports its lifecycle to."""

from __future__ import annotations

from typing import Protocol

from .handle import RemoteHandle


class RemoteListener(Protocol):
    def on_remote_open(self, remote: RemoteHandle) -> None: ...

    def on_remote_message(self, remote: RemoteHandle, message: str | bytes) -> None: ...

    def on_remote_error(self, remote: RemoteHandle, exc: BaseException) -> None: ...

    def on_remote_close(self, remote: RemoteHandle) -> None: ...


__all__ = ["RemoteListener"]
