"""
adb_projector/core

Core components of the projector:
- socket: non-blocking connection to the ADB daemon
- request: length-prefixed request codec and status check
- framebuffer: header layouts and the framebuffer service client
- image: raw frame to image conversion, rotation and scaling
- capture: the pull-and-display loop
- adb: adb executable wrapper used to respawn the daemon
"""

from .protocol import (
    ADB_HOST,
    ADB_PORT,
    SERVICE_TRANSPORT_USB,
    SERVICE_FRAMEBUFFER,
    FramebufferVersion,
)
from .socket import (
    ADBSocket,
    SocketConfig,
    SocketState,
    SocketError,
    SocketConnectionError,
    SocketReadError,
    SocketWriteError,
    SocketTimeoutError,
)
from .adb import (
    ADBManager,
    ADBDevice,
    ADBError,
    ADBCommandError,
    ADBProtocolError,
    ADBTargetRejectedError,
)
from .request import encode_request, send_request, check_response, is_okay
from .framebuffer import (
    FramebufferError,
    UnsupportedProtocolVersionError,
    ImageConversionError,
    FramebufferHeader,
    HeaderLayout,
    HeaderLayoutTable,
    header_size_for_version,
    FramebufferService,
    RawFrame,
)
from .image import (
    DisplayImage,
    to_display_image,
    rotate90,
    compute_fit_size,
    scale_to_fit,
)
from .capture import CaptureLoop, DisplaySurface

__all__ = [
    # Protocol
    "ADB_HOST",
    "ADB_PORT",
    "SERVICE_TRANSPORT_USB",
    "SERVICE_FRAMEBUFFER",
    "FramebufferVersion",
    # Socket
    "ADBSocket",
    "SocketConfig",
    "SocketState",
    "SocketError",
    "SocketConnectionError",
    "SocketReadError",
    "SocketWriteError",
    "SocketTimeoutError",
    # ADB
    "ADBManager",
    "ADBDevice",
    "ADBError",
    "ADBCommandError",
    "ADBProtocolError",
    "ADBTargetRejectedError",
    # Request codec
    "encode_request",
    "send_request",
    "check_response",
    "is_okay",
    # Framebuffer
    "FramebufferError",
    "UnsupportedProtocolVersionError",
    "ImageConversionError",
    "FramebufferHeader",
    "HeaderLayout",
    "HeaderLayoutTable",
    "header_size_for_version",
    "FramebufferService",
    "RawFrame",
    # Image
    "DisplayImage",
    "to_display_image",
    "rotate90",
    "compute_fit_size",
    "scale_to_fit",
    # Capture
    "CaptureLoop",
    "DisplaySurface",
]
