"""
Framebuffer header layouts and parsing.

adbd answers ``framebuffer:`` with a little-endian uint32 version
followed by a version-dependent number of uint32 words. The word order
for each version is kept in a HeaderLayoutTable so new versions can be
registered without touching the protocol code.
"""

import struct
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from adb_projector.core.protocol import FramebufferVersion, HEADER_WORD_SIZE
from adb_projector.core.framebuffer.exceptions import UnsupportedProtocolVersionError

logger = logging.getLogger(__name__)


def channel_mask(length: int, offset: int) -> int:
    """Bit mask of a channel ``length`` bits wide starting at ``offset``."""
    return ((1 << length) - 1) << offset


@dataclass(frozen=True)
class FramebufferHeader:
    """
    Framebuffer metadata as sent by adbd.

    Attributes:
        version: Protocol version the header was read with
        bpp: Bits per pixel
        color_space: Color space id (version 2 only)
        size: Payload size in bytes, trusted from the wire
        width: Width in pixels
        height: Height in pixels
        *_offset, *_length: Bit position and width of each channel
    """

    version: int
    bpp: int = 0
    color_space: int = 0
    size: int = 0
    width: int = 0
    height: int = 0
    red_offset: int = 0
    red_length: int = 0
    blue_offset: int = 0
    blue_length: int = 0
    green_offset: int = 0
    green_length: int = 0
    alpha_offset: int = 0
    alpha_length: int = 0

    @property
    def red_mask(self) -> int:
        return channel_mask(self.red_length, self.red_offset)

    @property
    def green_mask(self) -> int:
        return channel_mask(self.green_length, self.green_offset)

    @property
    def blue_mask(self) -> int:
        return channel_mask(self.blue_length, self.blue_offset)

    @property
    def alpha_mask(self) -> int:
        return channel_mask(self.alpha_length, self.alpha_offset)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bpp >> 3


@dataclass(frozen=True)
class HeaderLayout:
    """
    Wire layout of one header version.

    Attributes:
        fields: FramebufferHeader field names in wire order
        defaults: Values implied by the version and not sent on the wire
    """

    fields: Tuple[str, ...]
    defaults: Mapping[str, int] = field(default_factory=dict)

    @property
    def word_count(self) -> int:
        return len(self.fields)


_CHANNEL_FIELDS = (
    "red_offset",
    "red_length",
    "blue_offset",
    "blue_length",
    "green_offset",
    "green_length",
    "alpha_offset",
    "alpha_length",
)

DEFAULT_HEADER_LAYOUTS: Dict[int, HeaderLayout] = {
    # Original protocol, RGB565 without alpha
    FramebufferVersion.COMPAT: HeaderLayout(
        fields=("size", "width", "height"),
        defaults={
            "bpp": 16,
            "red_offset": 11,
            "red_length": 5,
            "green_offset": 5,
            "green_length": 6,
            "blue_offset": 0,
            "blue_length": 5,
            "alpha_offset": 0,
            "alpha_length": 0,
        },
    ),
    FramebufferVersion.V1: HeaderLayout(
        fields=("bpp", "size", "width", "height") + _CHANNEL_FIELDS,
    ),
    FramebufferVersion.V2: HeaderLayout(
        fields=("bpp", "color_space", "size", "width", "height") + _CHANNEL_FIELDS,
    ),
}


class HeaderLayoutTable:
    """
    Version to layout lookup.

    Example:
        >>> table = HeaderLayoutTable()
        >>> table.header_size_for_version(1)
        12
    """

    def __init__(self, layouts: Optional[Mapping[int, HeaderLayout]] = None):
        self._layouts: Dict[int, HeaderLayout] = dict(
            DEFAULT_HEADER_LAYOUTS if layouts is None else layouts
        )

    def register(self, version: int, layout: HeaderLayout) -> None:
        """Add or replace the layout for ``version``."""
        self._layouts[int(version)] = layout

    def get(self, version: int) -> Optional[HeaderLayout]:
        return self._layouts.get(version)

    def supports(self, version: int) -> bool:
        return version in self._layouts

    def header_size_for_version(self, version: int) -> int:
        """
        Number of header words following the version word.

        Returns:
            Word count, or 0 for an unknown version
        """
        layout = self._layouts.get(version)
        return layout.word_count if layout else 0

    def parse(self, version: int, data: bytes) -> FramebufferHeader:
        """
        Parse the header words that follow the version word.

        Args:
            version: Protocol version read from the wire
            data: Exactly ``header_size_for_version(version) * 4`` bytes

        Returns:
            Parsed FramebufferHeader

        Raises:
            UnsupportedProtocolVersionError: If the version is unknown
            ValueError: If data has the wrong length
        """
        layout = self._layouts.get(version)
        if layout is None:
            raise UnsupportedProtocolVersionError(version)

        expected = layout.word_count * HEADER_WORD_SIZE
        if len(data) != expected:
            raise ValueError(
                f"Header for version {version} needs {expected} bytes, got {len(data)}"
            )

        words = struct.unpack(f"<{layout.word_count}I", data)
        values = dict(layout.defaults)
        values.update(zip(layout.fields, words))
        header = FramebufferHeader(version=version, **values)

        logger.debug(
            f"Framebuffer header v{version}: {header.width}x{header.height}, "
            f"bpp={header.bpp}, size={header.size}"
        )
        return header


def header_size_for_version(version: int) -> int:
    """Word count for ``version`` in the default layout table, 0 if unknown."""
    layout = DEFAULT_HEADER_LAYOUTS.get(version)
    return layout.word_count if layout else 0
