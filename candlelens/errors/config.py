"""Error Configuration.

Defines error codes and the user-facing messages shown when an
analysis run has to be aborted.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for analysis failures."""

    # Image decoding
    IMAGE_LOAD_FAILED = "IMAGE_LOAD_FAILED"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Candle extraction
    NO_CANDLES_DETECTED = "NO_CANDLES_DETECTED"
    NO_VALID_CANDLES = "NO_VALID_CANDLES"

    # Pipeline
    ANALYSIS_TIMEOUT = "ANALYSIS_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.IMAGE_LOAD_FAILED: "The image could not be loaded. Please upload a valid chart image.",
    ErrorCode.UNSUPPORTED_FORMAT: "This image format is not supported. Use PNG, JPEG, GIF, BMP or WEBP.",
    ErrorCode.NO_CANDLES_DETECTED: "No candles detected in chart image.",
    ErrorCode.NO_VALID_CANDLES: "Candles were found but none had a measurable height.",
    ErrorCode.ANALYSIS_TIMEOUT: "Analysis took too long and was stopped. Try a smaller image.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred during analysis.",
}
