"""WebSocket handlers for producer connections."""

__all__: list[str] = []
