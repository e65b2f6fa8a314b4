"""
Base Socket Class

This module provides the ADBSocket class that handles low-level
socket operations against the ADB daemon: connection establishment,
exact-length reads and writes over a non-blocking socket, state
management, and error handling.
"""

import socket
import logging
import time
from typing import Optional

from .types import (
    SocketConfig,
    SocketState,
    SocketConnectionError,
    SocketReadError,
    SocketWriteError,
    SocketTimeoutError,
)

logger = logging.getLogger(__name__)


class ADBSocket:
    """
    Non-blocking stream socket to the ADB daemon

    Reads and writes poll the socket and sleep ``config.wait_time``
    whenever it is not ready, until the whole buffer has been
    transferred or the peer closes the connection.

    Example:
        >>> sock = ADBSocket(SocketConfig())
        >>> sock.connect()
        >>> sock.write_all(b"000Cframebuffer:")
        >>> status = sock.read_all(4)
        >>> sock.close()
    """

    def __init__(self, config: Optional[SocketConfig] = None):
        """
        Initialize socket

        Args:
            config: Socket configuration (uses daemon defaults if None)
        """
        self.config = config or SocketConfig()
        self._socket: Optional[socket.socket] = None
        self._state = SocketState.DISCONNECTED
        self._closed = False

    @classmethod
    def from_socket(
        cls, sock: socket.socket, config: Optional[SocketConfig] = None
    ) -> "ADBSocket":
        """
        Wrap an already connected socket.

        Args:
            sock: Connected stream socket
            config: Socket configuration

        Returns:
            ADBSocket in CONNECTED state
        """
        adb_socket = cls(config)
        sock.setblocking(False)
        adb_socket._socket = sock
        adb_socket._state = SocketState.CONNECTED
        return adb_socket

    @property
    def state(self) -> SocketState:
        """Get current socket state"""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if socket is connected"""
        return self._state == SocketState.CONNECTED

    def connect(self) -> "ADBSocket":
        """
        Connect to the ADB daemon and switch the socket to non-blocking mode.

        Returns:
            self, for chaining

        Raises:
            SocketConnectionError: If name resolution or TCP connect fails
        """
        if self._state == SocketState.CONNECTED:
            logger.warning("ADB socket already connected")
            return self

        if self._closed:
            raise SocketConnectionError("Socket is closed")

        self._state = SocketState.CONNECTING
        address = (self.config.host, self.config.port)
        logger.debug(f"Connecting to ADB daemon at {address[0]}:{address[1]}")

        try:
            sock = socket.create_connection(address, timeout=self.config.io_timeout)
        except socket.gaierror as e:
            self._state = SocketState.ERROR
            raise SocketConnectionError(
                f"Cannot resolve ADB host {self.config.host}: {e}"
            ) from e
        except ConnectionRefusedError as e:
            self._state = SocketState.ERROR
            raise SocketConnectionError(
                f"Connection refused by {address[0]}:{address[1]}"
            ) from e
        except OSError as e:
            self._state = SocketState.ERROR
            raise SocketConnectionError(f"Socket error: {e}") from e

        sock.setblocking(False)
        self._socket = sock
        self._state = SocketState.CONNECTED
        logger.debug("ADB socket connected")
        return self

    def _deadline(self) -> Optional[float]:
        if self.config.io_timeout is None:
            return None
        return time.monotonic() + self.config.io_timeout

    def _wait(self, deadline: Optional[float], operation: str) -> None:
        if deadline is not None and time.monotonic() >= deadline:
            self._state = SocketState.ERROR
            raise SocketTimeoutError(
                f"{operation} timed out after {self.config.io_timeout}s"
            )
        time.sleep(self.config.wait_time)

    def read_all(self, length: int) -> bytes:
        """
        Receive exactly ``length`` bytes.

        Args:
            length: Number of bytes to receive

        Returns:
            Received data

        Raises:
            SocketReadError: "EOF" if the peer closes before all bytes arrive
            SocketTimeoutError: If io_timeout is set and exceeded
        """
        if not self._socket or self._state != SocketState.CONNECTED:
            raise SocketReadError("ADB socket not connected")

        buffer = bytearray(length)
        view = memoryview(buffer)
        received = 0
        deadline = self._deadline()

        while received < length:
            chunk = min(length - received, self.config.buffer_size)
            try:
                count = self._socket.recv_into(view[received:], chunk)
            except BlockingIOError:
                self._wait(deadline, "Receive")
                continue
            except (ConnectionResetError, BrokenPipeError) as e:
                self._state = SocketState.ERROR
                raise SocketReadError("EOF") from e
            except OSError as e:
                self._state = SocketState.ERROR
                raise SocketReadError(f"Receive error: {e}") from e

            if count == 0:
                self._state = SocketState.ERROR
                raise SocketReadError("EOF")
            received += count

        return bytes(buffer)

    def write_all(self, data: bytes) -> int:
        """
        Send all of ``data``.

        Args:
            data: Data to send

        Returns:
            Number of bytes sent

        Raises:
            SocketWriteError: "EOF" if the peer has closed the connection
            SocketTimeoutError: If io_timeout is set and exceeded
        """
        if not self._socket or self._state != SocketState.CONNECTED:
            raise SocketWriteError("ADB socket not connected")

        view = memoryview(data)
        total_sent = 0
        deadline = self._deadline()

        while total_sent < len(data):
            try:
                sent = self._socket.send(view[total_sent:])
            except BlockingIOError:
                self._wait(deadline, "Send")
                continue
            except (BrokenPipeError, ConnectionResetError) as e:
                self._state = SocketState.ERROR
                raise SocketWriteError("EOF") from e
            except OSError as e:
                self._state = SocketState.ERROR
                raise SocketWriteError(f"Send error: {e}") from e

            if sent == 0:
                self._wait(deadline, "Send")
                continue
            total_sent += sent

        return total_sent

    def close(self) -> None:
        """Close socket connection. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True
        self._state = SocketState.DISCONNECTED

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass  # Ignore close errors

            self._socket = None
            logger.debug("ADB socket closed")

    def __enter__(self) -> "ADBSocket":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
