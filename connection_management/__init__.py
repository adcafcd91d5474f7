"""
Connection Management Module

This module provides the connection layer to the remote capture service.

Key capabilities:
- A transport abstraction with an httpx-based HTTP transport
- An in-memory capture backend used for tests and offline examples
- A ConnectionManager that times, logs and forwards every call exactly once
- Specific exception types for transport failures
"""

from .connection_manager import ConnectionManager
from .transport import CaptureTransport, HttpCaptureTransport, encode_wire, decode_wire
from .mock_backend import MockCaptureBackend, MockTransport
from .connection_exceptions import (
    TransportError,
    ConnectionTimeoutError,
    ServerUnavailableError,
    SessionAuthenticationError
)

__all__ = [
    'ConnectionManager',
    'CaptureTransport',
    'HttpCaptureTransport',
    'encode_wire',
    'decode_wire',
    'MockCaptureBackend',
    'MockTransport',
    'TransportError',
    'ConnectionTimeoutError',
    'ServerUnavailableError',
    'SessionAuthenticationError',
]
