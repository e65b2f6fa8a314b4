"""
Raw framebuffer to image conversion.

Pixels are unpacked as little-endian words of ``bpp // 8`` bytes and
each channel is pulled out with the offset/length pair from the header,
so any packed layout adbd reports (RGB565, RGBA8888, BGRA8888, RGB888,
...) is handled the same way.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from adb_projector.core.framebuffer import (
    FramebufferHeader,
    ImageConversionError,
    RawFrame,
)

logger = logging.getLogger(__name__)

SUPPORTED_BPP = (16, 24, 32)


@dataclass(frozen=True, eq=False)
class DisplayImage:
    """
    A decoded frame ready for display.

    Attributes:
        pixels: uint8 RGB array of shape (height, width, 3)
    """

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height


def _unpack_words(raw: np.ndarray, bytes_per_pixel: int) -> np.ndarray:
    """Combine little-endian byte groups into uint32 pixel words."""
    groups = raw.reshape(-1, bytes_per_pixel).astype(np.uint32)
    words = np.zeros(groups.shape[0], dtype=np.uint32)
    for i in range(bytes_per_pixel):
        words |= groups[:, i] << np.uint32(8 * i)
    return words


def _extract_channel(words: np.ndarray, offset: int, length: int, bpp: int) -> np.ndarray:
    """Pull one channel out of the pixel words and scale it to 0..255."""
    if length == 0:
        return np.zeros(words.shape, dtype=np.uint8)
    if offset + length > bpp:
        raise ImageConversionError(
            f"Channel at offset {offset} length {length} exceeds {bpp} bpp"
        )

    max_value = (1 << length) - 1
    values = (words >> np.uint32(offset)) & np.uint32(max_value)
    return (values.astype(np.uint64) * 255 // max_value).astype(np.uint8)


def to_display_image(frame: RawFrame) -> DisplayImage:
    """
    Decode a raw frame into an RGB image.

    Alpha is dropped; the window shows opaque pixels.

    Args:
        frame: Header and pixel payload

    Returns:
        DisplayImage of ``header.width`` x ``header.height``

    Raises:
        ImageConversionError: Unsupported bpp, bad channel layout or short payload
    """
    header: FramebufferHeader = frame.header
    if header.bpp not in SUPPORTED_BPP:
        raise ImageConversionError(f"Unsupported bits per pixel: {header.bpp}")
    if header.width == 0 or header.height == 0:
        raise ImageConversionError(
            f"Empty framebuffer: {header.width}x{header.height}"
        )

    bytes_per_pixel = header.bytes_per_pixel
    needed = header.width * header.height * bytes_per_pixel
    if len(frame.pixels) < needed:
        raise ImageConversionError(
            f"Framebuffer payload too short: {len(frame.pixels)} < {needed} bytes"
        )

    raw = np.frombuffer(frame.pixels, dtype=np.uint8, count=needed)
    words = _unpack_words(raw, bytes_per_pixel)

    planes = [
        _extract_channel(words, header.red_offset, header.red_length, header.bpp),
        _extract_channel(words, header.green_offset, header.green_length, header.bpp),
        _extract_channel(words, header.blue_offset, header.blue_length, header.bpp),
    ]
    pixels = np.stack(planes, axis=-1).reshape(header.height, header.width, 3)
    return DisplayImage(pixels=pixels)


def rotate90(image: DisplayImage) -> DisplayImage:
    """
    Rotate 90 degrees counter-clockwise.

    Pixel (x, y) moves to (y, width - 1 - x); width and height swap.
    """
    return DisplayImage(pixels=np.ascontiguousarray(np.rot90(image.pixels, k=1)))


def compute_fit_size(
    width: int, height: int, target_width: int, target_height: int
) -> Tuple[int, int]:
    """
    Largest size with the image's aspect ratio that fits the target box.

    The result touches the target height, or the target width when
    matching the height would overflow it.

    Raises:
        ValueError: If any dimension is not positive
    """
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"Invalid target size: {target_width}x{target_height}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size: {width}x{height}")

    # floor(width / (height / target_height)) in integer arithmetic
    dest_width = width * target_height // height
    dest_height = target_height

    if dest_width > target_width:
        dest_width = target_width
        dest_height = height * target_width // width

    return max(dest_width, 1), max(dest_height, 1)


def scale_to_fit(image: DisplayImage, target_width: int, target_height: int) -> DisplayImage:
    """
    Nearest-neighbour resize into the target box, keeping the aspect ratio.

    Raises:
        ValueError: If the target size is not positive
    """
    dest_width, dest_height = compute_fit_size(
        image.width, image.height, target_width, target_height
    )
    if (dest_width, dest_height) == image.size:
        return image

    rows = np.arange(dest_height) * image.height // dest_height
    cols = np.arange(dest_width) * image.width // dest_width
    return DisplayImage(pixels=image.pixels[rows[:, None], cols[None, :]])
