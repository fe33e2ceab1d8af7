"""Image sampling: decode a chart image into a bounded RGBA pixel buffer."""

from candlelens.imaging.config import DEFAULT_SAMPLER_CONFIG, SamplerConfig
from candlelens.imaging.models import PixelBuffer
from candlelens.imaging.sampler import ImageSampler, ImageSource

__all__ = [
    "DEFAULT_SAMPLER_CONFIG",
    "SamplerConfig",
    "PixelBuffer",
    "ImageSampler",
    "ImageSource",
]
