"""Runtime package.

Keep this module dependency-light: importing `audio_relay.runtime.*` in unit
tests should not open any network connection.
"""

__all__: list[str] = []
