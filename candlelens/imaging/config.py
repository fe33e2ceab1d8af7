"""Configuration for image sampling."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SamplerConfig:
    """Image decoding and downscaling settings.

    Attributes:
        max_width: Images wider than this are downscaled.
        max_height: Images taller than this are downscaled.
        allowed_formats: Pillow format names accepted from encoded input.
        max_input_bytes: Upper bound on encoded input size.
    """
    max_width: int = 1200
    max_height: int = 800
    allowed_formats: tuple[str, ...] = ("PNG", "JPEG", "GIF", "BMP", "WEBP")
    max_input_bytes: int = 20 * 1024 * 1024


DEFAULT_SAMPLER_CONFIG = SamplerConfig()
