"""Custom Exception Hierarchy.

Typed exceptions for the fatal failures of an analysis run. Everything
after candle extraction degrades to neutral data instead of raising,
so the hierarchy only covers decoding, extraction and the run timeout.
"""

from typing import Any, Dict, Optional

from candlelens.errors.config import ErrorCode, USER_MESSAGES


class ChartAnalysisError(Exception):
    """Base exception for all candlelens errors.

    All custom exceptions inherit from this, allowing a single handler
    to catch the entire hierarchy and surface ``user_message``.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.error_code, self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": self.user_message,
            "detail": self.message,
            "details": self.details,
        }


class ImageDecodeError(ChartAnalysisError):
    """Raised when an image resource cannot be turned into pixels."""


class ImageLoadError(ImageDecodeError):
    """Raised when the image cannot be opened or decoded."""

    def __init__(
        self,
        message: str = "Failed to load image",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorCode.IMAGE_LOAD_FAILED, details)


class UnsupportedFormatError(ImageDecodeError):
    """Raised when the decoded image format is not accepted."""

    def __init__(
        self,
        message: str = "Unsupported image format",
        image_format: Optional[str] = None,
    ):
        details = {"format": image_format} if image_format else None
        super().__init__(message, ErrorCode.UNSUPPORTED_FORMAT, details)
        self.image_format = image_format


class ExtractionError(ChartAnalysisError):
    """Raised when no usable chart geometry is found in the pixels."""


class NoCandlesDetectedError(ExtractionError):
    """Raised when no pixel column matches either candle color."""

    def __init__(self, message: str = "No candles detected in chart image"):
        super().__init__(message, ErrorCode.NO_CANDLES_DETECTED)


class NoValidCandlesError(ExtractionError):
    """Raised when every extracted candle was filtered out."""

    def __init__(self, message: str = "No valid candles after filtering", dropped: int = 0):
        super().__init__(message, ErrorCode.NO_VALID_CANDLES, {"dropped": dropped})
        self.dropped = dropped


class AnalysisTimeoutError(ChartAnalysisError):
    """Raised when a run exceeds the caller-level timeout."""

    def __init__(self, timeout_seconds: float):
        super().__init__(
            f"Analysis exceeded {timeout_seconds:.1f}s",
            ErrorCode.ANALYSIS_TIMEOUT,
            {"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds
