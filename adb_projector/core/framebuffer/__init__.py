"""
adb_projector/core/framebuffer

Framebuffer protocol package: header layouts, the raw frame type and
the service client that walks the ADB framebuffer handshake.
"""

from .exceptions import (
    FramebufferError,
    UnsupportedProtocolVersionError,
    ImageConversionError,
)
from .header import (
    FramebufferHeader,
    HeaderLayout,
    HeaderLayoutTable,
    DEFAULT_HEADER_LAYOUTS,
    channel_mask,
    header_size_for_version,
)
from .service import FramebufferService, RawFrame

__all__ = [
    # Exceptions
    'FramebufferError',
    'UnsupportedProtocolVersionError',
    'ImageConversionError',
    # Header
    'FramebufferHeader',
    'HeaderLayout',
    'HeaderLayoutTable',
    'DEFAULT_HEADER_LAYOUTS',
    'channel_mask',
    'header_size_for_version',
    # Service
    'FramebufferService',
    'RawFrame',
]
