"""Error taxonomy for chart analysis.

Fatal failures (undecodable image, no chart geometry, timeout) are
raised as ChartAnalysisError subclasses carrying an ErrorCode and a
single user-facing message.
"""

from candlelens.errors.config import ErrorCode, USER_MESSAGES
from candlelens.errors.exceptions import (
    AnalysisTimeoutError,
    ChartAnalysisError,
    ExtractionError,
    ImageDecodeError,
    ImageLoadError,
    NoCandlesDetectedError,
    NoValidCandlesError,
    UnsupportedFormatError,
)

__all__ = [
    "ErrorCode",
    "USER_MESSAGES",
    "ChartAnalysisError",
    "ImageDecodeError",
    "ImageLoadError",
    "UnsupportedFormatError",
    "ExtractionError",
    "NoCandlesDetectedError",
    "NoValidCandlesError",
    "AnalysisTimeoutError",
]
