"""Structural interfaces shared by the relay session and its collaborators."""

from .handle import RemoteHandle
from .factory import RemoteFactory
from .producer import ProducerSink
from .listener import RemoteListener

__all__ = ["ProducerSink", "RemoteFactory", "RemoteHandle", "RemoteListener"]
