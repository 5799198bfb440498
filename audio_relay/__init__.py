"""Session-scoped audio relay between WebSocket producers and a transcription backend."""

__version__ = "0.1.0"

__all__ = ["__version__"]
