"""
Socket Types and Configuration

This module defines socket states, configuration, and exceptions
for communication with the ADB daemon.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SocketState(Enum):
    """Socket connection state"""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


@dataclass
class SocketConfig:
    """
    Socket configuration

    Attributes:
        host: ADB daemon host address
        port: ADB daemon port number
        wait_time: Sleep between retries when the socket is not ready (seconds)
        io_timeout: Upper bound for a single read_all/write_all (None = wait forever)
        buffer_size: Maximum bytes requested per recv call
    """

    host: str = "127.0.0.1"
    port: int = 5037
    wait_time: float = 0.005  # 5ms
    io_timeout: Optional[float] = None
    buffer_size: int = 64 * 1024  # 64KB default buffer


class SocketError(Exception):
    """Base exception for socket operations"""

    pass


class SocketConnectionError(SocketError):
    """Exception raised when the daemon cannot be reached"""

    pass


class SocketReadError(SocketError):
    """Exception raised when read operation fails"""

    pass


class SocketWriteError(SocketError):
    """Exception raised when write operation fails"""

    pass


class SocketTimeoutError(SocketError):
    """Exception raised when a read or write exceeds io_timeout"""

    pass
