"""
adb_projector/core/protocol.py

Protocol constants for the ADB host protocol.

This module defines the constants used when talking to the local ADB
daemon: the daemon address, service names, status words and the
framebuffer header versions.
"""

from enum import IntEnum
from typing import Final


# ============================================================================
# Daemon Address
# ============================================================================

ADB_HOST: Final[str] = "127.0.0.1"
ADB_PORT: Final[int] = 5037


# ============================================================================
# Host Services
# ============================================================================

# Route the connection to the first USB-attached device
SERVICE_TRANSPORT_USB: Final[str] = "host:transport-usb"

# Device service returning a framebuffer header followed by raw pixels
SERVICE_FRAMEBUFFER: Final[str] = "framebuffer:"

# Requests are prefixed by their length as 4 hex digits
REQUEST_LENGTH_DIGITS: Final[int] = 4
REQUEST_MAX_LENGTH: Final[int] = 0xFFFF


# ============================================================================
# Responses
# ============================================================================

STATUS_OKAY: Final[bytes] = b"OKAY"
STATUS_LENGTH: Final[int] = 4

# Written once after the header; the daemon sends pixels after it
NUDGE: Final[bytes] = b"\x00"


# ============================================================================
# Framebuffer Header
# ============================================================================

class FramebufferVersion(IntEnum):
    """Framebuffer header versions sent by adbd."""
    COMPAT = 16  # Original protocol: size, width, height; RGB565 implied
    V1 = 1       # bpp, size, width, height, 4 x (offset, length)
    V2 = 2       # As V1 with a color space word after bpp


HEADER_WORD_SIZE: Final[int] = 4  # Every header field is a LE uint32
