"""
adb_projector/core/image

Conversion of raw framebuffer payloads into displayable images.
"""

from .converter import (
    DisplayImage,
    SUPPORTED_BPP,
    to_display_image,
    rotate90,
    compute_fit_size,
    scale_to_fit,
)

__all__ = [
    'DisplayImage',
    'SUPPORTED_BPP',
    'to_display_image',
    'rotate90',
    'compute_fit_size',
    'scale_to_fit',
]
