"""
adb_projector/core/framebuffer/exceptions.py

Exception classes for framebuffer errors.
"""


__all__ = [
    'FramebufferError',
    'UnsupportedProtocolVersionError',
    'ImageConversionError',
]


class FramebufferError(Exception):
    """Base exception for framebuffer errors."""
    pass


class UnsupportedProtocolVersionError(FramebufferError):
    """Raised when the header version has no known layout."""

    def __init__(self, version: int):
        super().__init__(f"Unsupported framebuffer protocol version: {version}")
        self.version = version


class ImageConversionError(FramebufferError):
    """Raised when a raw frame cannot be turned into an image."""
    pass
