"""Factory for authenticated connections to the transcription backend."""

from __future__ import annotations

import logging
from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from audio_relay.errors import MissingCredentialError
from audio_relay.state.settings import RemoteSettings
from audio_relay.config.secrets import ENV_DEEPGRAM_API_KEY
from audio_relay.config.remote import REMOTE_AUTH_HEADER, REMOTE_AUTH_SCHEME

from .remote import RemoteConnection
from .protocols import RemoteListener

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_remote_url(settings: RemoteSettings) -> str:
    """Return the backend URL with codec negotiation parameters in the query string.

    Parameters already present on the configured URL are kept unless a setting
    overrides them.
    """
    parsed = urlparse(settings.url)
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    query.update(
        {
            "model": settings.model,
            "punctuation": _flag(settings.punctuation),
            "interim_results": _flag(settings.interim_results),
            "encoding": settings.encoding,
            "channels": str(settings.channels),
        }
    )
    query.update(settings.extra_query)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, parsed.params, urlencode(query), parsed.fragment))


class RemoteConnectionFactory:
    """Opens remote connections with the deployment-wide endpoint and credential."""

    def __init__(self, settings: RemoteSettings) -> None:
        if not settings.api_key:
            raise MissingCredentialError(ENV_DEEPGRAM_API_KEY)
        self._settings = settings
        self._url = build_remote_url(settings)
        self._headers = [(REMOTE_AUTH_HEADER, f"{REMOTE_AUTH_SCHEME} {settings.api_key}")]

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> list[tuple[str, str]]:
        return list(self._headers)

    def open(self, listener: RemoteListener) -> RemoteConnection:
        logger.debug("connecting to %s", self._settings.url)
        return RemoteConnection(
            self._url,
            listener=listener,
            headers=self._headers,
            open_timeout_s=self._settings.open_timeout_s,
        )


__all__ = ["RemoteConnectionFactory", "build_remote_url"]
