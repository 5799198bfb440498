from audio_relay.state import RelayState

from .bridge import RelayBridge
from .session import SessionRelay, CLOSE_STREAM_TEXT
from .remote import RemoteConnection
from .factory import RemoteConnectionFactory, build_remote_url

__all__ = [
    "CLOSE_STREAM_TEXT",
    "RelayBridge",
    "RelayState",
    "RemoteConnection",
    "RemoteConnectionFactory",
    "SessionRelay",
    "build_remote_url",
]
