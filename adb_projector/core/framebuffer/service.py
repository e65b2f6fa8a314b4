"""
Framebuffer service client.

One capture walks these steps on a fresh daemon connection:

    select_target -> request_framebuffer (header) -> read_payload

Every step takes the socket plus the values produced so far and returns
new immutable values; nothing is kept on the service between captures.
"""

import struct
import logging
from dataclasses import dataclass
from typing import Optional

from adb_projector.core.protocol import (
    HEADER_WORD_SIZE,
    NUDGE,
    SERVICE_FRAMEBUFFER,
    SERVICE_TRANSPORT_USB,
)
from adb_projector.core.request import check_response, send_request
from adb_projector.core.socket import ADBSocket
from adb_projector.core.framebuffer.exceptions import UnsupportedProtocolVersionError
from adb_projector.core.framebuffer.header import FramebufferHeader, HeaderLayoutTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawFrame:
    """A framebuffer header and its pixel payload."""

    header: FramebufferHeader
    pixels: bytes


class FramebufferService:
    """
    ADB framebuffer protocol

    Example:
        >>> service = FramebufferService()
        >>> with ADBSocket().connect() as sock:
        ...     if service.select_target(sock):
        ...         header = service.request_framebuffer(sock)
        ...         if header is not None:
        ...             frame = service.read_payload(sock, header)
    """

    def __init__(
        self,
        layouts: Optional[HeaderLayoutTable] = None,
        strict_response: bool = False,
    ):
        """
        Args:
            layouts: Header layout table (default versions if None)
            strict_response: Require exactly OKAY from the daemon
        """
        self.layouts = layouts or HeaderLayoutTable()
        self.strict_response = strict_response

    def select_target(self, sock: ADBSocket) -> bool:
        """
        Route the connection to the first USB device.

        Returns:
            False if the daemon refused, in which case nothing more is read
        """
        send_request(sock, SERVICE_TRANSPORT_USB)
        return check_response(sock, self.strict_response)

    def request_framebuffer(self, sock: ADBSocket) -> Optional[FramebufferHeader]:
        """
        Ask the device for its framebuffer and read the header.

        Returns:
            The header, or None if the service was refused
        """
        send_request(sock, SERVICE_FRAMEBUFFER)
        if not check_response(sock, self.strict_response):
            return None
        return self.read_header(sock)

    def read_header(self, sock: ADBSocket) -> FramebufferHeader:
        """
        Read the version word and the header words it implies.

        Raises:
            UnsupportedProtocolVersionError: If the version has no layout
        """
        (version,) = struct.unpack("<I", sock.read_all(HEADER_WORD_SIZE))
        word_count = self.layouts.header_size_for_version(version)
        if word_count == 0:
            raise UnsupportedProtocolVersionError(version)

        data = sock.read_all(word_count * HEADER_WORD_SIZE)
        return self.layouts.parse(version, data)

    def read_payload(self, sock: ADBSocket, header: FramebufferHeader) -> RawFrame:
        """Send the nudge and read ``header.size`` bytes of pixels."""
        sock.write_all(NUDGE)
        pixels = sock.read_all(header.size)
        logger.debug(f"Read {len(pixels)} bytes of framebuffer data")
        return RawFrame(header=header, pixels=pixels)
