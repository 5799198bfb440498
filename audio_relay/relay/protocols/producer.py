"""Outbound side of the producer connection as seen by a relay session."""

from __future__ import annotations

from typing import Protocol


class ProducerSink(Protocol):
    def send_text(self, text: str) -> None: ...


__all__ = ["ProducerSink"]
