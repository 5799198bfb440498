"""Secrets configuration."""

from __future__ import annotations

ENV_DEEPGRAM_API_KEY = "DEEPGRAM_API_KEY"

__all__ = ["ENV_DEEPGRAM_API_KEY"]
