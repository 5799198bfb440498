"""Shared error types for the audio relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MissingCredentialError(Exception):
    """Raised at startup when a required credential is absent from the environment."""

    env_name: str

    def __str__(self) -> str:
        return f"missing required credential: set {self.env_name} in the environment or .env file"


@dataclass(slots=True)
class PendingQueueOverflowError(Exception):
    """Reported to a session when frames buffered during the handshake exceed the configured bound."""

    limit: int

    def __str__(self) -> str:
        return f"pending frame queue exceeded {self.limit} frames before the remote connection opened"


__all__ = ["MissingCredentialError", "PendingQueueOverflowError"]
