"""Tests for image sampling."""

import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image

from candlelens.errors import ImageDecodeError, ImageLoadError, UnsupportedFormatError
from candlelens.imaging import DEFAULT_SAMPLER_CONFIG, ImageSampler, PixelBuffer, SamplerConfig


def _encode(array: np.ndarray, fmt: str) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format=fmt)
    return buf.getvalue()


def _png_chunk(kind: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def _png_header_only(width: int, height: int) -> bytes:
    """A PNG that declares its size but carries no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", b"")
        + _png_chunk(b"IEND", b"")
    )


# ── Config ──


class TestSamplerConfig:
    def test_defaults(self):
        cfg = DEFAULT_SAMPLER_CONFIG
        assert cfg.max_width == 1200
        assert cfg.max_height == 800
        assert "PNG" in cfg.allowed_formats
        assert "JPEG" in cfg.allowed_formats


# ── PixelBuffer ──


class TestPixelBuffer:
    def test_read_only(self):
        buf = PixelBuffer(np.zeros((4, 5, 4), dtype=np.uint8))
        assert buf.pixels.flags.writeable is False
        with pytest.raises(ValueError):
            buf.pixels[0, 0, 0] = 1

    def test_does_not_alias_caller_array(self):
        arr = np.zeros((4, 5, 4), dtype=np.uint8)
        buf = PixelBuffer(arr)
        arr[0, 0, 0] = 99
        assert buf.pixels[0, 0, 0] == 0

    def test_dimensions(self):
        buf = PixelBuffer(np.zeros((4, 5, 4), dtype=np.uint8))
        assert buf.width == 5
        assert buf.height == 4
        assert buf.source_size == (5, 4)
        assert buf.scale == 1.0

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((4, 5, 3), dtype=np.uint8))

    def test_rgb_is_int32(self):
        buf = PixelBuffer(np.full((2, 2, 4), 255, dtype=np.uint8))
        assert buf.rgb.dtype == np.int32
        assert buf.rgb.shape == (2, 2, 3)


# ── Sampler ──


class TestImageSampler:
    def test_from_array_rgb(self):
        arr = np.zeros((10, 20, 3), dtype=np.uint8)
        buf = ImageSampler().from_array(arr)
        assert (buf.width, buf.height) == (20, 10)
        assert buf.pixels.shape == (10, 20, 4)
        assert buf.scale == 1.0

    def test_from_array_rejects_bad_shape(self):
        with pytest.raises(ImageLoadError):
            ImageSampler().from_array(np.zeros((10, 20), dtype=np.uint8))

    def test_downscale_preserves_aspect(self):
        arr = np.zeros((400, 2400, 3), dtype=np.uint8)
        buf = ImageSampler().from_array(arr)
        assert buf.scale == pytest.approx(0.5)
        assert (buf.width, buf.height) == (1200, 200)
        assert buf.source_size == (2400, 400)

    def test_downscale_uses_tighter_bound(self):
        cfg = SamplerConfig(max_width=100, max_height=100)
        buf = ImageSampler(cfg).from_array(np.zeros((400, 200, 3), dtype=np.uint8))
        assert buf.scale == pytest.approx(0.25)
        assert (buf.width, buf.height) == (50, 100)

    def test_from_bytes_png(self):
        arr = np.zeros((8, 12, 3), dtype=np.uint8)
        arr[:, :, 1] = 200
        buf = ImageSampler().from_bytes(_encode(arr, "PNG"))
        assert (buf.width, buf.height) == (12, 8)
        assert buf.pixels[0, 0, 1] == 200
        assert buf.pixels[0, 0, 3] == 255

    def test_load_dispatches_on_source(self, tmp_path):
        arr = np.zeros((8, 12, 3), dtype=np.uint8)
        data = _encode(arr, "PNG")
        path = tmp_path / "chart.png"
        path.write_bytes(data)
        sampler = ImageSampler()

        assert sampler.load(data).width == 12
        assert sampler.load(path).width == 12
        assert sampler.load(str(path)).width == 12
        assert sampler.load(Image.fromarray(arr)).width == 12

    def test_empty_bytes(self):
        with pytest.raises(ImageLoadError):
            ImageSampler().from_bytes(b"")

    def test_garbage_bytes(self):
        with pytest.raises(ImageLoadError):
            ImageSampler().from_bytes(b"definitely not an image")

    def test_oversize_input(self):
        cfg = SamplerConfig(max_input_bytes=10)
        with pytest.raises(ImageLoadError):
            ImageSampler(cfg).from_bytes(b"x" * 11)

    def test_unsupported_format(self):
        data = _encode(np.zeros((8, 8, 3), dtype=np.uint8), "TIFF")
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ImageSampler().from_bytes(data)
        assert exc_info.value.image_format == "TIFF"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageLoadError):
            ImageSampler().from_path(tmp_path / "missing.png")

    def test_decode_errors_share_base(self):
        assert issubclass(ImageLoadError, ImageDecodeError)
        assert issubclass(UnsupportedFormatError, ImageDecodeError)

    def test_decompression_bomb_header(self):
        data = _png_header_only(30000, 30000)
        with pytest.raises(ImageLoadError) as exc_info:
            ImageSampler().from_bytes(data)
        assert "decoder limit" in exc_info.value.message
