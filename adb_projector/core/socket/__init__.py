"""
Socket Communication Package

This package provides the socket layer used to talk to the local ADB
daemon: a single non-blocking stream socket per capture cycle.
"""

# Export types and exceptions
from .types import (
    SocketState,
    SocketConfig,
    SocketError,
    SocketConnectionError,
    SocketReadError,
    SocketWriteError,
    SocketTimeoutError,
)

# Export socket class
from .base import ADBSocket

__all__ = [
    # Types
    "SocketState",
    "SocketConfig",
    # Exceptions
    "SocketError",
    "SocketConnectionError",
    "SocketReadError",
    "SocketWriteError",
    "SocketTimeoutError",
    # Socket
    "ADBSocket",
]
