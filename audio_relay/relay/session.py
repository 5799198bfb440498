"""Per-producer relay session: lazy remote connect, handshake buffering, pass-through."""

from __future__ import annotations

import uuid
import logging

import orjson

from audio_relay.errors import PendingQueueOverflowError
from audio_relay.config.remote import REMOTE_CLOSE_STREAM_MESSAGE
from audio_relay.state.session import RelayState, SessionState, RelayCounters

from .protocols import ProducerSink, RemoteHandle, RemoteFactory

logger = logging.getLogger(__name__)

CLOSE_STREAM_TEXT: str = orjson.dumps(REMOTE_CLOSE_STREAM_MESSAGE).decode("utf-8")

_BINARY_TYPES = (bytes, bytearray, memoryview)


class SessionRelay:
    """Buffering/forwarding state machine for one producer connection.

    IDLE -> CONNECTING on the first binary frame (the remote connection is
    requested and the frame is queued), CONNECTING -> STREAMING when the remote
    reports open (the queue is flushed in arrival order), and any state ->
    CLOSED when the producer goes away.

    All methods are synchronous. Events for one session are delivered by a
    single event loop, so the queue and the ready flag are never mutated
    concurrently. A remote handle that errors or closes is cleared and never
    recreated; audio arriving afterwards is counted and discarded.
    """

    def __init__(
        self,
        producer: ProducerSink,
        remote_factory: RemoteFactory,
        *,
        session_id: str | None = None,
        max_pending_frames: int = 0,
    ) -> None:
        self._producer = producer
        self._remote_factory = remote_factory
        self._max_pending_frames = max(0, int(max_pending_frames))
        self._s = SessionState(session_id=session_id or uuid.uuid4().hex)

    @property
    def session_id(self) -> str:
        return self._s.session_id

    @property
    def state(self) -> RelayState:
        return self._s.state

    @property
    def remote(self) -> RemoteHandle | None:
        return self._s.remote

    @property
    def remote_ready(self) -> bool:
        return self._s.remote_ready

    @property
    def pending_count(self) -> int:
        return len(self._s.pending)

    @property
    def counters(self) -> RelayCounters:
        return self._s.counters

    # Producer side

    def on_producer_frame(self, frame: bytes | bytearray | memoryview | str) -> None:
        s = self._s
        if s.state is RelayState.CLOSED:
            return
        if not isinstance(frame, _BINARY_TYPES):
            s.counters.frames_ignored += 1
            return

        data = bytes(frame)
        s.counters.frames_received += 1

        if s.state is RelayState.IDLE:
            self._start_remote()

        remote = s.remote
        if remote is None:
            s.counters.frames_dropped += 1
            return

        if s.state is RelayState.CONNECTING:
            self._enqueue(data)
            return

        self._forward(remote, data)

    def on_producer_disconnect(self) -> None:
        s = self._s
        if s.state is RelayState.CLOSED:
            return

        previous = s.state
        remote = s.remote
        s.state = RelayState.CLOSED
        s.remote = None
        s.counters.frames_dropped += len(s.pending)
        s.pending.clear()

        if remote is not None:
            if previous is RelayState.STREAMING:
                remote.send(CLOSE_STREAM_TEXT)
            remote.close()

        c = s.counters
        logger.info(
            "session %s closed (was %s): received=%s forwarded=%s queued=%s dropped=%s ignored=%s relayed=%s",
            s.session_id,
            previous.value,
            c.frames_received,
            c.frames_forwarded,
            c.frames_queued,
            c.frames_dropped,
            c.frames_ignored,
            c.messages_relayed,
        )

    def on_producer_error(self, exc: BaseException) -> None:
        logger.warning("session %s: producer transport error: %s", self._s.session_id, exc)

    # Remote side

    def on_remote_open(self, remote: RemoteHandle) -> None:
        s = self._s
        if remote is not s.remote or s.state is not RelayState.CONNECTING:
            return

        s.remote_ready = True
        s.state = RelayState.STREAMING
        backlog = len(s.pending)
        while s.pending:
            self._forward(remote, s.pending.popleft())
        logger.info("session %s: remote connection open, flushed %s queued frames", s.session_id, backlog)

    def on_remote_message(self, remote: RemoteHandle, message: str | bytes) -> None:
        s = self._s
        if remote is not s.remote or s.state is RelayState.CLOSED:
            return
        if isinstance(message, str):
            text = message
        else:
            text = bytes(message).decode("utf-8", errors="replace")
        self._producer.send_text(text)
        s.counters.messages_relayed += 1

    def on_remote_error(self, remote: RemoteHandle, exc: BaseException) -> None:
        s = self._s
        if remote is not s.remote:
            return
        logger.warning("session %s: remote connection error (%s): %s", s.session_id, s.state.value, exc)
        self._detach_remote()

    def on_remote_close(self, remote: RemoteHandle) -> None:
        s = self._s
        if remote is not s.remote:
            return
        logger.info("session %s: remote connection closed (%s)", s.session_id, s.state.value)
        self._detach_remote()

    # Internals

    def _start_remote(self) -> None:
        s = self._s
        s.state = RelayState.CONNECTING
        logger.info("session %s: opening remote transcription connection", s.session_id)
        try:
            s.remote = self._remote_factory.open(self)
        except Exception:
            logger.exception("session %s: remote connection could not be created", s.session_id)
            s.remote = None

    def _enqueue(self, data: bytes) -> None:
        s = self._s
        if self._max_pending_frames and len(s.pending) >= self._max_pending_frames:
            remote = s.remote
            logger.warning("session %s: %s", s.session_id, PendingQueueOverflowError(self._max_pending_frames))
            s.counters.frames_dropped += 1
            self._detach_remote()
            if remote is not None:
                remote.close()
            return
        s.pending.append(data)
        s.counters.frames_queued += 1

    def _forward(self, remote: RemoteHandle, data: bytes) -> None:
        if remote.send(data):
            self._s.counters.frames_forwarded += 1
        else:
            self._s.counters.frames_dropped += 1

    def _detach_remote(self) -> None:
        s = self._s
        s.remote = None
        s.counters.frames_dropped += len(s.pending)
        s.pending.clear()


__all__ = ["CLOSE_STREAM_TEXT", "SessionRelay"]
