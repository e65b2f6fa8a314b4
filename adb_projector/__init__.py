"""
adb-projector - Android Screen Projector

Mirrors the screen of a USB-attached Android device into a desktop
window by pulling framebuffer snapshots from the local ADB daemon.

This package provides functionality to:
- Talk to the ADB daemon over its length-prefixed host protocol
- Read versioned framebuffer headers and raw pixel payloads
- Convert any packed pixel layout to RGB, rotate and scale it
- Show the result in a PySide6 window

Example:
    >>> from adb_projector import ProjectorClient, ProjectorConfig
    >>>
    >>> client = ProjectorClient(ProjectorConfig())
    >>> client.run()
"""

from .core import (
    ADBSocket,
    SocketConfig,
    ADBManager,
    # Errors
    SocketError,
    ADBError,
    FramebufferError,
    # Protocol
    encode_request,
    check_response,
    FramebufferHeader,
    HeaderLayoutTable,
    FramebufferService,
    RawFrame,
    # Image
    DisplayImage,
    to_display_image,
    rotate90,
    scale_to_fit,
    # Loop
    CaptureLoop,
)
from .client import (
    ProjectorClient,
    ProjectorConfig,
)

__version__ = "0.1.0"
__all__ = [
    # ADB and Socket
    "ADBSocket",
    "SocketConfig",
    "ADBManager",
    # Errors
    "SocketError",
    "ADBError",
    "FramebufferError",
    # Protocol
    "encode_request",
    "check_response",
    "FramebufferHeader",
    "HeaderLayoutTable",
    "FramebufferService",
    "RawFrame",
    # Image
    "DisplayImage",
    "to_display_image",
    "rotate90",
    "scale_to_fit",
    # Loop
    "CaptureLoop",
    # Client
    "ProjectorClient",
    "ProjectorConfig",
]
