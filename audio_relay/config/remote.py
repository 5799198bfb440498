"""Remote transcription backend configuration (env names and defaults only)."""

from __future__ import annotations

ENV_REMOTE_URL = "REMOTE_URL"
ENV_REMOTE_MODEL = "REMOTE_MODEL"
ENV_REMOTE_ENCODING = "REMOTE_ENCODING"
ENV_REMOTE_CHANNELS = "REMOTE_CHANNELS"
ENV_REMOTE_PUNCTUATION = "REMOTE_PUNCTUATION"
ENV_REMOTE_INTERIM_RESULTS = "REMOTE_INTERIM_RESULTS"
ENV_REMOTE_OPEN_TIMEOUT_S = "REMOTE_OPEN_TIMEOUT_S"
# Extra query parameters appended to the URL, "key=value&key2=value2".
ENV_REMOTE_EXTRA_QUERY = "REMOTE_EXTRA_QUERY"

DEFAULT_REMOTE_URL = "wss://api.deepgram.com/v1/listen"
DEFAULT_REMOTE_MODEL = "nova-2"
DEFAULT_REMOTE_ENCODING = "opus"
DEFAULT_REMOTE_CHANNELS = 1
DEFAULT_REMOTE_PUNCTUATION = True
DEFAULT_REMOTE_INTERIM_RESULTS = True
DEFAULT_REMOTE_OPEN_TIMEOUT_S = 10.0

REMOTE_AUTH_HEADER = "Authorization"
REMOTE_AUTH_SCHEME = "Token"

# Sent once before closing so the backend flushes its final results.
REMOTE_CLOSE_STREAM_MESSAGE = {"type": "CloseStream"}

__all__ = [
    "DEFAULT_REMOTE_CHANNELS",
    "DEFAULT_REMOTE_ENCODING",
    "DEFAULT_REMOTE_INTERIM_RESULTS",
    "DEFAULT_REMOTE_MODEL",
    "DEFAULT_REMOTE_OPEN_TIMEOUT_S",
    "DEFAULT_REMOTE_PUNCTUATION",
    "DEFAULT_REMOTE_URL",
    "ENV_REMOTE_CHANNELS",
    "ENV_REMOTE_ENCODING",
    "ENV_REMOTE_EXTRA_QUERY",
    "ENV_REMOTE_INTERIM_RESULTS",
    "ENV_REMOTE_MODEL",
    "ENV_REMOTE_OPEN_TIMEOUT_S",
    "ENV_REMOTE_PUNCTUATION",
    "ENV_REMOTE_URL",
    "REMOTE_AUTH_HEADER",
    "REMOTE_AUTH_SCHEME",
    "REMOTE_CLOSE_STREAM_MESSAGE",
]
