"""Image Sampling.

Decodes chart images with Pillow and rasterizes them into a bounded,
read-only RGBA pixel buffer.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from candlelens.errors import ImageLoadError, UnsupportedFormatError
from candlelens.imaging.config import DEFAULT_SAMPLER_CONFIG, SamplerConfig
from candlelens.imaging.models import PixelBuffer

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, Path, Image.Image]


class ImageSampler:
    """Loads an image resource into a PixelBuffer no larger than the configured bounds."""

    def __init__(self, config: Optional[SamplerConfig] = None) -> None:
        self.config = config or DEFAULT_SAMPLER_CONFIG

    def load(self, source: ImageSource) -> PixelBuffer:
        """Decode any supported source into a PixelBuffer.

        Args:
            source: Encoded bytes, a filesystem path, or a Pillow image.

        Returns:
            PixelBuffer with the downscale factor applied.

        Raises:
            ImageLoadError: The resource cannot be read or decoded.
            UnsupportedFormatError: The decoded format is not allowed.
        """
        if isinstance(source, Image.Image):
            return self.from_image(source)
        if isinstance(source, (bytes, bytearray)):
            return self.from_bytes(bytes(source))
        return self.from_path(source)

    def from_path(self, path: Union[str, Path]) -> PixelBuffer:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ImageLoadError(f"Cannot read image file {path}: {exc}") from exc
        return self.from_bytes(data)

    def from_bytes(self, data: bytes) -> PixelBuffer:
        if not data:
            raise ImageLoadError("Image data is empty")
        if len(data) > self.config.max_input_bytes:
            raise ImageLoadError(
                f"Image data is {len(data)} bytes, limit is {self.config.max_input_bytes}"
            )

        try:
            image = Image.open(io.BytesIO(data))
        except UnidentifiedImageError as exc:
            raise ImageLoadError("Image data could not be identified") from exc
        except Image.DecompressionBombError as exc:
            raise ImageLoadError(f"Image dimensions exceed the decoder limit: {exc}") from exc
        except (OSError, ValueError, SyntaxError) as exc:
            raise ImageLoadError(f"Image header could not be parsed: {exc}") from exc

        image_format = (image.format or "").upper()
        if image_format not in self.config.allowed_formats:
            raise UnsupportedFormatError(
                f"Image format {image_format or 'unknown'} is not supported",
                image_format=image_format or None,
            )

        try:
            image.load()
        except Image.DecompressionBombError as exc:
            raise ImageLoadError(f"Image dimensions exceed the decoder limit: {exc}") from exc
        except (OSError, ValueError, SyntaxError) as exc:
            raise ImageLoadError(f"Failed to decode {image_format} image: {exc}") from exc

        return self.from_image(image)

    def from_image(self, image: Image.Image) -> PixelBuffer:
        """Rasterize a Pillow image, downscaling when it exceeds the bounds."""
        width, height = image.size
        if width <= 0 or height <= 0:
            raise ImageLoadError(f"Image has invalid dimensions {width}x{height}")

        try:
            rgba = image.convert("RGBA")
        except (OSError, ValueError) as exc:
            raise ImageLoadError(f"Failed to convert image to RGBA: {exc}") from exc

        scale = 1.0
        if width > self.config.max_width or height > self.config.max_height:
            scale = min(self.config.max_width / width, self.config.max_height / height)
            target = (max(1, int(round(width * scale))), max(1, int(round(height * scale))))
            rgba = rgba.resize(target, Image.Resampling.BILINEAR)
            logger.debug(
                f"Downscaled image {width}x{height} -> {target[0]}x{target[1]}",
                extra={"extra_data": {"scale": round(scale, 4)}},
            )

        pixels = np.asarray(rgba, dtype=np.uint8)
        return PixelBuffer(pixels=pixels, scale=scale, source_size=(width, height))

    def from_array(self, array: np.ndarray) -> PixelBuffer:
        """Wrap an already-decoded RGB or RGBA uint8 array."""
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ImageLoadError(f"Expected an (h, w, 3|4) array, got shape {array.shape}")
        image = Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
        return self.from_image(image)
