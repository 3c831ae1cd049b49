"""Tests for photo downscaling with Pillow."""

import io

from PIL import Image

from tg_lookup.optimizer import optimize_image


def _jpeg(width, height, quality=95):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def test_large_image_is_downscaled_keeping_aspect_ratio():
    data = _jpeg(1280, 640)
    out = optimize_image(data, max_dimension=320, quality=70)
    assert Image.open(io.BytesIO(out)).size == (320, 160)


def test_undecodable_bytes_are_returned_unchanged():
    assert optimize_image(b"not an image", 320, 80) == b"not an image"


def test_empty_input_is_returned_unchanged():
    assert optimize_image(b"", 320, 80) == b""


def test_result_never_larger_than_input():
    data = _jpeg(100, 100, quality=10)
    out = optimize_image(data, max_dimension=320, quality=95)
    assert len(out) <= len(data)
