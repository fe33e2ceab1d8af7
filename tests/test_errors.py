"""Tests for the error taxonomy."""

import pytest

from candlelens.errors import (
    USER_MESSAGES,
    AnalysisTimeoutError,
    ChartAnalysisError,
    ErrorCode,
    ExtractionError,
    ImageDecodeError,
    ImageLoadError,
    NoCandlesDetectedError,
    NoValidCandlesError,
    UnsupportedFormatError,
)


class TestErrorCodes:
    def test_every_code_has_user_message(self):
        for code in ErrorCode:
            assert USER_MESSAGES[code]

    def test_no_candles_message(self):
        assert NoCandlesDetectedError().user_message == "No candles detected in chart image."


class TestHierarchy:
    @pytest.mark.parametrize("error, parent", [
        (ImageLoadError(), ImageDecodeError),
        (UnsupportedFormatError(image_format="TIFF"), ImageDecodeError),
        (NoCandlesDetectedError(), ExtractionError),
        (NoValidCandlesError(dropped=3), ExtractionError),
        (AnalysisTimeoutError(5.0), ChartAnalysisError),
    ])
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ChartAnalysisError)

    def test_codes(self):
        assert ImageLoadError().error_code == ErrorCode.IMAGE_LOAD_FAILED
        assert UnsupportedFormatError().error_code == ErrorCode.UNSUPPORTED_FORMAT
        assert NoCandlesDetectedError().error_code == ErrorCode.NO_CANDLES_DETECTED
        assert NoValidCandlesError().error_code == ErrorCode.NO_VALID_CANDLES
        assert AnalysisTimeoutError(1.0).error_code == ErrorCode.ANALYSIS_TIMEOUT

    def test_base_defaults_to_internal_error(self):
        error = ChartAnalysisError("unexpected")
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}
        assert str(error) == "unexpected"


class TestErrorDetails:
    def test_unsupported_format_details(self):
        error = UnsupportedFormatError(image_format="TIFF")
        assert error.image_format == "TIFF"
        assert error.details == {"format": "TIFF"}

    def test_no_valid_candles_dropped(self):
        error = NoValidCandlesError(dropped=4)
        assert error.dropped == 4
        assert error.details == {"dropped": 4}

    def test_timeout_message(self):
        error = AnalysisTimeoutError(2.5)
        assert error.timeout_seconds == 2.5
        assert error.message == "Analysis exceeded 2.5s"

    def test_to_dict(self):
        d = NoCandlesDetectedError().to_dict()
        assert d == {
            "error": "NO_CANDLES_DETECTED",
            "message": "No candles detected in chart image.",
            "detail": "No candles detected in chart image",
            "details": {},
        }
