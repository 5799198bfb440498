"""Logging initialization."""

from __future__ import annotations

import os
import logging

from audio_relay.config.logging import (
    ENV_LOG_LEVEL,
    ENV_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
    ENV_SHOW_WEBSOCKETS_LOGS,
)


def configure_logging() -> None:
    # The websockets client logs every frame at DEBUG. Keep it tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_WEBSOCKETS_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("websockets").setLevel(logging.WARNING)
    level = (os.getenv(ENV_LOG_LEVEL) or "").strip().upper() or DEFAULT_LOG_LEVEL
    fmt = (os.getenv(ENV_LOG_FORMAT) or "").strip() or DEFAULT_LOG_FORMAT
    logging.basicConfig(level=level, format=fmt)


__all__ = ["configure_logging"]
