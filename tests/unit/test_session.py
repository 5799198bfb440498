from __future__ import annotations

from dataclasses import fields

import pytest

from audio_relay.relay import CLOSE_STREAM_TEXT, RelayBridge, RelayState, SessionRelay
from audio_relay.relay.protocols import ProducerSink, RemoteFactory, RemoteHandle, RemoteListener
from audio_relay.state import SessionState
from tests.unit.fakes import FakeFactory, FakeProducer


def _session(factory: FakeFactory | None = None, **kwargs) -> tuple[SessionRelay, FakeFactory, FakeProducer]:
    factory = factory or FakeFactory()
    producer = FakeProducer()
    return SessionRelay(producer, factory, session_id="s1", **kwargs), factory, producer


def test_close_stream_marker_is_compact_json() -> None:
    assert CLOSE_STREAM_TEXT == '{"type":"CloseStream"}'


def test_new_session_is_idle_without_remote() -> None:
    session, factory, _ = _session()
    assert session.state is RelayState.IDLE
    assert session.remote is None
    assert session.remote_ready is False
    assert factory.opened == []


def test_disconnect_without_frames_never_opens_remote() -> None:
    session, factory, _ = _session()
    session.on_producer_disconnect()
    assert session.state is RelayState.CLOSED
    assert factory.opened == []


def test_first_binary_frame_opens_remote_and_queues_frame() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")

    assert session.state is RelayState.CONNECTING
    assert len(factory.opened) == 1
    assert factory.last.sent == []
    assert session.pending_count == 1


def test_frames_before_open_are_flushed_in_order_then_passed_through() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    remote = factory.last
    assert remote.sent == []

    remote.fire_open()
    assert session.state is RelayState.STREAMING
    assert session.remote_ready is True
    assert session.pending_count == 0
    assert remote.sent == [b"F1", b"F2"]

    session.on_producer_frame(b"F3")
    assert remote.sent == [b"F1", b"F2", b"F3"]


def test_ordering_holds_for_many_frames() -> None:
    session, factory, _ = _session()
    before = [f"pre-{i}".encode() for i in range(50)]
    after = [f"post-{i}".encode() for i in range(50)]
    for frame in before:
        session.on_producer_frame(frame)
    factory.last.fire_open()
    for frame in after:
        session.on_producer_frame(frame)

    assert factory.last.sent == before + after
    assert session.counters.frames_received == 100
    assert session.counters.frames_forwarded == 100
    assert session.counters.frames_queued == 50


def test_only_one_remote_per_session() -> None:
    session, factory, _ = _session()
    for i in range(5):
        session.on_producer_frame(bytes([i]))
    factory.last.fire_open()
    for i in range(5):
        session.on_producer_frame(bytes([i]))
    assert len(factory.opened) == 1


def test_repeated_open_does_not_resend_frames() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    factory.last.fire_open()
    factory.last.fire_open()
    assert factory.last.sent == [b"F1", b"F2"]


def test_binary_like_frames_are_normalized_to_bytes() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(bytearray(b"ab"))
    session.on_producer_frame(memoryview(b"cd"))
    factory.last.fire_open()
    assert factory.last.sent == [b"ab", b"cd"]
    assert all(type(item) is bytes for item in factory.last.sent)


def test_text_frames_are_ignored_in_every_state() -> None:
    session, factory, _ = _session()
    session.on_producer_frame("hello")
    assert session.state is RelayState.IDLE
    assert factory.opened == []

    session.on_producer_frame(b"F1")
    session.on_producer_frame("control")
    assert session.pending_count == 1

    factory.last.fire_open()
    session.on_producer_frame('{"type":"noop"}')
    assert factory.last.sent == [b"F1"]
    assert session.counters.frames_ignored == 3


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ('{"channel":{"alternatives":[{"transcript":"hi"}]},"is_final":true}',
         '{"channel":{"alternatives":[{"transcript":"hi"}]},"is_final":true}'),
        ('{ "spacing" :  "kept" }', '{ "spacing" :  "kept" }'),
        (b'{"type":"Metadata"}', '{"type":"Metadata"}'),
    ],
)
def test_remote_messages_are_forwarded_verbatim(message: str | bytes, expected: str) -> None:
    session, factory, producer = _session()
    session.on_producer_frame(b"F1")
    factory.last.fire_open()
    factory.last.fire_message(message)
    assert producer.sent == [expected]
    assert session.counters.messages_relayed == 1


def test_disconnect_while_streaming_sends_close_stream_then_closes() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    remote = factory.last
    remote.fire_open()

    session.on_producer_disconnect()

    assert session.state is RelayState.CLOSED
    assert remote.sent == [b"F1", CLOSE_STREAM_TEXT]
    assert remote.close_calls == 1
    assert session.remote is None


def test_disconnect_is_idempotent() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    remote = factory.last
    remote.fire_open()

    session.on_producer_disconnect()
    session.on_producer_disconnect()

    assert remote.sent.count(CLOSE_STREAM_TEXT) == 1
    assert remote.close_calls == 1


def test_disconnect_while_connecting_discards_queue_without_close_stream() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    remote = factory.last

    session.on_producer_disconnect()

    assert remote.sent == []
    assert remote.close_calls == 1
    assert session.pending_count == 0
    assert session.counters.frames_dropped == 2

    # A late open from the abandoned handshake must not flush anything.
    remote.fire_open()
    assert remote.sent == []
    assert session.state is RelayState.CLOSED


def test_frames_after_disconnect_are_ignored() -> None:
    session, factory, _ = _session()
    session.on_producer_disconnect()
    session.on_producer_frame(b"late")
    assert factory.opened == []
    assert session.counters.frames_received == 0


def test_remote_messages_after_disconnect_are_not_forwarded() -> None:
    session, factory, producer = _session()
    session.on_producer_frame(b"F1")
    remote = factory.last
    remote.fire_open()
    session.on_producer_disconnect()

    remote.fire_message('{"is_final":true}')
    assert producer.sent == []


def test_remote_error_while_streaming_drops_later_frames() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    remote = factory.last
    remote.fire_open()

    remote.fire_error(ConnectionResetError("reset by peer"))
    assert session.remote is None
    assert session.state is RelayState.STREAMING
    assert session.remote_ready is True

    session.on_producer_frame(b"F2")
    assert remote.sent == [b"F1"]
    assert session.counters.frames_dropped == 1
    assert len(factory.opened) == 1

    session.on_producer_disconnect()
    assert CLOSE_STREAM_TEXT not in remote.sent
    assert remote.close_calls == 0


def test_remote_close_before_open_discards_queue_and_never_reconnects() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    remote = factory.last

    remote.fire_close()
    assert session.state is RelayState.CONNECTING
    assert session.remote is None
    assert session.pending_count == 0

    session.on_producer_frame(b"F3")
    assert len(factory.opened) == 1
    assert session.pending_count == 0
    assert session.counters.frames_dropped == 3


def test_error_then_close_from_same_handle_is_handled_once() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    remote = factory.last
    remote.fire_error(TimeoutError("handshake timed out"))
    remote.fire_close()
    assert session.remote is None
    assert session.counters.frames_dropped == 1


def test_factory_failure_leaves_session_accepting_frames() -> None:
    session, factory, _ = _session(FakeFactory(fail=True))
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    assert session.state is RelayState.CONNECTING
    assert session.remote is None
    assert session.counters.frames_dropped == 2

    session.on_producer_disconnect()
    assert session.state is RelayState.CLOSED


def test_pending_bound_abandons_handshake_when_exceeded() -> None:
    session, factory, _ = _session(max_pending_frames=2)
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    remote = factory.last
    assert remote.close_calls == 0

    session.on_producer_frame(b"F3")
    assert remote.close_calls == 1
    assert session.remote is None
    assert session.pending_count == 0
    assert session.counters.frames_dropped == 3

    remote.fire_open()
    assert remote.sent == []


def test_pending_bound_does_not_limit_streaming() -> None:
    session, factory, _ = _session(max_pending_frames=1)
    session.on_producer_frame(b"F1")
    factory.last.fire_open()
    for i in range(10):
        session.on_producer_frame(bytes([i]))
    assert len(factory.last.sent) == 11


def test_producer_error_does_not_close_session() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_error(OSError("broken pipe"))
    assert session.state is RelayState.CONNECTING
    assert session.remote is factory.last


def test_bridge_builds_idle_sessions_with_shared_factory() -> None:
    factory = FakeFactory()
    bridge = RelayBridge(remote_factory=factory, max_pending_frames=1)
    first = bridge.new_session(FakeProducer())
    second = bridge.new_session(FakeProducer(), session_id="named")

    assert first.state is RelayState.IDLE
    assert second.session_id == "named"
    assert first.session_id != second.session_id

    first.on_producer_frame(b"a")
    second.on_producer_frame(b"b")
    assert len(factory.opened) == 2
    assert factory.opened[0] is not factory.opened[1]

    first.on_producer_frame(b"c")
    assert first.remote is None
    assert second.remote is factory.opened[1]


def test_frames_refused_by_closing_remote_count_as_dropped() -> None:
    session, factory, _ = _session()
    session.on_producer_frame(b"F1")
    session.on_producer_frame(b"F2")
    remote = factory.last
    remote.accepting = False

    remote.fire_open()
    session.on_producer_frame(b"F3")

    assert remote.sent == []
    assert session.counters.frames_forwarded == 0
    assert session.counters.frames_dropped == 3


def test_session_state_tracks_only_handle_ready_flag_and_queue() -> None:
    names = [f.name for f in fields(SessionState)]
    assert names == ["session_id", "state", "remote", "remote_ready", "pending", "counters"]


def test_relay_interfaces_live_in_their_own_modules() -> None:
    assert {cls.__module__ for cls in (ProducerSink, RemoteHandle, RemoteListener, RemoteFactory)} == {
        "audio_relay.relay.protocols.producer",
        "audio_relay.relay.protocols.handle",
        "audio_relay.relay.protocols.listener",
        "audio_relay.relay.protocols.factory",
    }
