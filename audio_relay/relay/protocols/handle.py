"""Handle to one connection with the transcription backend."""

from __future__ import annotations

from typing import Protocol


class RemoteHandle(Protocol):
    def send(self, data: bytes | str) -> bool:
        """Queue ``data`` for the backend; ``False`` when the handle no longer accepts frames."""
        ...

    def close(self) -> None: ...


__all__ = ["RemoteHandle"]
