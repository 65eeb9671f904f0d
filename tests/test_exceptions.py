"""Tests for the vidlink exception hierarchy."""

import pytest

from vidlink.exceptions import (
    INVALID_ADDRESS_MESSAGE,
    NOT_FOUND_MESSAGE,
    AllAttemptsExhausted,
    AttemptError,
    InvalidAddressError,
    MediaDownloadError,
    NoPatternMatch,
    ResolutionError,
    TransportFailure,
    ValidationFailure,
    VidlinkError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_class, parent",
        [
            (TransportFailure, AttemptError),
            (ValidationFailure, AttemptError),
            (InvalidAddressError, ResolutionError),
            (NoPatternMatch, ResolutionError),
            (AllAttemptsExhausted, ResolutionError),
            (AttemptError, VidlinkError),
            (ResolutionError, VidlinkError),
            (MediaDownloadError, VidlinkError),
        ],
    )
    def test_inheritance(self, exc_class, parent):
        assert issubclass(exc_class, parent)

    def test_attempt_errors_are_not_terminal(self):
        assert not issubclass(AttemptError, ResolutionError)


class TestAttemptErrors:
    def test_transport_details(self):
        e = TransportFailure("HTTP 503 from corsproxy", status_code=503)
        assert e.to_dict() == {
            "type": "TransportFailure",
            "message": "HTTP 503 from corsproxy",
            "category": "transport",
            "details": {"status_code": 503},
        }

    def test_timeout_flag(self):
        e = TransportFailure("no response", timed_out=True)
        assert e.timed_out
        assert e.details == {"timed_out": True}

    def test_validation_reason(self):
        e = ValidationFailure("Body too short", reason="too_short", details={"length": 12})
        assert e.reason == "too_short"
        assert e.details == {"length": 12, "reason": "too_short"}


class TestResolutionErrors:
    def test_default_messages(self):
        assert NoPatternMatch().message == NOT_FOUND_MESSAGE
        assert AllAttemptsExhausted().message == NOT_FOUND_MESSAGE
        assert InvalidAddressError().message == INVALID_ADDRESS_MESSAGE

    def test_to_dict_hides_diagnostics(self):
        e = NoPatternMatch(details={"body_length": 4096})
        assert e.to_dict() == {"error": NOT_FOUND_MESSAGE}

    def test_exhausted_keeps_errors_in_order(self):
        errors = [TransportFailure("a"), ValidationFailure("b", reason="login_wall")]
        e = AllAttemptsExhausted(errors=errors)
        assert e.errors == errors
        assert e.details["attempts"] == 2
        assert e.category == "exhausted"


class TestMediaDownloadError:
    def test_url_in_details(self):
        e = MediaDownloadError("HTTP 404 while downloading media", url="https://cdn.example/v.mp4")
        assert e.url == "https://cdn.example/v.mp4"
        assert e.to_dict()["details"] == {"url": "https://cdn.example/v.mp4"}
        assert str(e) == "HTTP 404 while downloading media"
