"""Per-session relay state (dataclasses and enums only)."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from audio_relay.relay.protocols import RemoteHandle


class RelayState(enum.Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


@dataclass(slots=True)
class RelayCounters:
    frames_received: int = 0
    frames_forwarded: int = 0
    frames_queued: int = 0
    frames_dropped: int = 0
    frames_ignored: int = 0
    messages_relayed: int = 0


@dataclass(slots=True)
class SessionState:
    session_id: str
    state: RelayState = RelayState.IDLE
    remote: RemoteHandle | None = None
    remote_ready: bool = False
    pending: deque[bytes] = field(default_factory=deque)
    counters: RelayCounters = field(default_factory=RelayCounters)


__all__ = ["RelayCounters", "RelayState", "SessionState"]
