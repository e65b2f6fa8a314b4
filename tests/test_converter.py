"""Tests for raw frame conversion, rotation and scaling."""

import numpy as np
import pytest

from adb_projector.core.framebuffer import FramebufferHeader, ImageConversionError, RawFrame
from adb_projector.core.image import (
    DisplayImage,
    compute_fit_size,
    rotate90,
    scale_to_fit,
    to_display_image,
)


def rgb565_header(width, height):
    return FramebufferHeader(
        version=1, bpp=16, size=width * height * 2, width=width, height=height,
        red_offset=11, red_length=5, green_offset=5, green_length=6,
        blue_offset=0, blue_length=5,
    )


def rgba8888_header(width, height, red_offset=0, blue_offset=16, alpha_length=8):
    return FramebufferHeader(
        version=1, bpp=32, size=width * height * 4, width=width, height=height,
        red_offset=red_offset, red_length=8, green_offset=8, green_length=8,
        blue_offset=blue_offset, blue_length=8, alpha_offset=24, alpha_length=alpha_length,
    )


def numbered_image(width, height):
    pixels = np.arange(width * height * 3, dtype=np.uint32).reshape(height, width, 3)
    return DisplayImage(pixels=(pixels % 256).astype(np.uint8))


# ============================================================================
# Conversion
# ============================================================================

def test_rgb565_two_pixels():
    # red (0xF800) then green (0x07E0), little-endian
    frame = RawFrame(rgb565_header(2, 1), b"\x00\xf8\xe0\x07")
    image = to_display_image(frame)

    assert image.size == (2, 1)
    assert image.pixels.dtype == np.uint8
    assert image.pixels.tolist() == [[[255, 0, 0], [0, 255, 0]]]


def test_rgb565_blue_and_white():
    frame = RawFrame(rgb565_header(2, 1), b"\x1f\x00\xff\xff")
    image = to_display_image(frame)

    assert image.pixels.tolist() == [[[0, 0, 255], [255, 255, 255]]]


def test_rgba8888_uses_header_offsets():
    frame = RawFrame(rgba8888_header(1, 1), bytes([10, 20, 30, 40]))
    assert to_display_image(frame).pixels.tolist() == [[[10, 20, 30]]]


def test_bgra8888_uses_header_offsets():
    frame = RawFrame(rgba8888_header(1, 1, red_offset=16, blue_offset=0), bytes([1, 2, 3, 4]))
    assert to_display_image(frame).pixels.tolist() == [[[3, 2, 1]]]


def test_alpha_channel_is_dropped():
    frame = RawFrame(rgba8888_header(1, 1), bytes([10, 20, 30, 0]))
    image = to_display_image(frame)

    assert image.pixels.shape == (1, 1, 3)
    assert image.pixels.tolist() == [[[10, 20, 30]]]


def test_rgb888():
    header = FramebufferHeader(
        version=1, bpp=24, size=6, width=2, height=1,
        red_offset=16, red_length=8, green_offset=8, green_length=8,
        blue_offset=0, blue_length=8,
    )
    image = to_display_image(RawFrame(header, bytes([1, 2, 3, 4, 5, 6])))

    assert image.pixels.tolist() == [[[3, 2, 1], [6, 5, 4]]]


def test_rows_follow_width():
    header = rgba8888_header(2, 3)
    pixels = bytes(sum(([i, 0, 0, 255] for i in range(6)), []))
    image = to_display_image(RawFrame(header, pixels))

    assert image.size == (2, 3)
    assert image.pixels[:, :, 0].tolist() == [[0, 1], [2, 3], [4, 5]]


def test_extra_payload_is_ignored():
    frame = RawFrame(rgb565_header(1, 1), b"\x00\xf8" + b"\xff" * 6)
    assert to_display_image(frame).size == (1, 1)


def test_short_payload():
    with pytest.raises(ImageConversionError):
        to_display_image(RawFrame(rgb565_header(2, 1), b"\x00\xf8"))


def test_unsupported_bpp():
    header = FramebufferHeader(version=1, bpp=12, size=3, width=2, height=1)
    with pytest.raises(ImageConversionError):
        to_display_image(RawFrame(header, b"\x00" * 3))


def test_channel_outside_pixel():
    header = FramebufferHeader(
        version=1, bpp=16, size=2, width=1, height=1, red_offset=12, red_length=8,
    )
    with pytest.raises(ImageConversionError):
        to_display_image(RawFrame(header, b"\x00\x00"))


def test_empty_frame():
    with pytest.raises(ImageConversionError):
        to_display_image(RawFrame(rgb565_header(0, 4), b""))


# ============================================================================
# Rotation
# ============================================================================

def test_rotate90_moves_pixels():
    image = numbered_image(3, 2)
    rotated = rotate90(image)

    assert rotated.size == (2, 3)
    for y in range(image.height):
        for x in range(image.width):
            # (x, y) -> (y, width - 1 - x)
            assert (rotated.pixels[image.width - 1 - x, y] == image.pixels[y, x]).all()


def test_rotate90_twice_restores_dimensions():
    image = numbered_image(4, 2)
    twice = rotate90(rotate90(image))

    assert twice.size == image.size
    assert (twice.pixels == image.pixels[::-1, ::-1]).all()


def test_rotate90_four_times_is_identity():
    image = numbered_image(4, 2)
    result = image
    for _ in range(4):
        result = rotate90(result)

    assert (result.pixels == image.pixels).all()
    assert result.pixels.flags["C_CONTIGUOUS"]


# ============================================================================
# Scaling
# ============================================================================

def test_fit_matches_height():
    assert compute_fit_size(100, 200, 50, 50) == (25, 50)


def test_fit_falls_back_to_width():
    assert compute_fit_size(200, 100, 50, 50) == (50, 25)


def test_fit_portrait_into_default_window():
    assert compute_fit_size(480, 800, 428, 240) == (144, 240)


@pytest.mark.parametrize("width, height", [(1, 1), (3, 7), (480, 800), (1080, 1920), (1920, 1080), (33, 1)])
@pytest.mark.parametrize("target_width, target_height", [(1, 1), (428, 240), (240, 428), (1000, 999), (7, 3)])
def test_fit_properties(width, height, target_width, target_height):
    dest_width, dest_height = compute_fit_size(width, height, target_width, target_height)

    assert 0 < dest_width <= target_width
    assert 0 < dest_height <= target_height
    assert dest_width == target_width or dest_height == target_height
    # Aspect ratio kept within integer rounding
    assert (
        abs(dest_width - width * dest_height / height) < 1
        or abs(dest_height - height * dest_width / width) < 1
    )


@pytest.mark.parametrize("target", [(0, 10), (10, 0), (-1, 5)])
def test_fit_rejects_empty_target(target):
    with pytest.raises(ValueError):
        compute_fit_size(10, 10, *target)


def test_scale_to_fit_resamples():
    image = numbered_image(4, 2)
    scaled = scale_to_fit(image, 2, 2)

    assert scaled.size == (2, 1)
    assert (scaled.pixels[0, 0] == image.pixels[0, 0]).all()
    assert (scaled.pixels[0, 1] == image.pixels[0, 2]).all()


def test_scale_to_fit_upscales():
    image = numbered_image(2, 1)
    scaled = scale_to_fit(image, 8, 8)

    assert scaled.size == (8, 4)
    assert (scaled.pixels[3, 7] == image.pixels[0, 1]).all()


def test_scale_to_fit_same_size_returns_image():
    image = numbered_image(4, 2)
    assert scale_to_fit(image, 4, 2) is image
