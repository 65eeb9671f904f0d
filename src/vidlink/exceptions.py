"""
Custom exceptions for vidlink.

All vidlink exceptions inherit from VidlinkError for easy catching.

Two families exist:
- AttemptError: a single retrieval attempt failed. These are absorbed by the
  fetch race and only ever reach diagnostics, never the user.
- ResolutionError: the terminal outcome of a resolve call. These carry the
  user-facing message.
"""

from __future__ import annotations

from typing import Any

# One message for every terminal failure. Whether the page is private or the
# markup changed cannot be told apart from the outside.
NOT_FOUND_MESSAGE = (
    "No downloadable video found. The video may be private, "
    "or the link may be incorrect."
)
INVALID_ADDRESS_MESSAGE = "Please provide a valid video URL."


class VidlinkError(Exception):
    """Base exception for all vidlink errors.

    Attributes:
        message: Human-readable error message
        category: Error classification (e.g., "transport", "no_match")
        details: Additional diagnostic information
    """

    category = "unknown"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for diagnostics."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
            "category": self.category,
        }
        if self.details:
            result["details"] = self.details
        return result


class AttemptError(VidlinkError):
    """A single (variant, channel) retrieval attempt failed."""

    pass


class TransportFailure(AttemptError):
    """Network error, non-success status, or the attempt deadline elapsed."""

    category = "transport"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        timed_out: bool = False,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if timed_out:
            details["timed_out"] = True
        super().__init__(message, details=details)
        self.status_code = status_code
        self.timed_out = timed_out


class ValidationFailure(AttemptError):
    """A body was retrieved but rejected before extraction."""

    category = "validation"

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        details["reason"] = reason
        super().__init__(message, details=details)
        self.reason = reason


class ResolutionError(VidlinkError):
    """Terminal failure of a resolve call.

    The message is safe to show to users. Diagnostic detail stays in
    ``details`` and is left out of ``to_dict()``.
    """

    category = "resolution"

    def __init__(
        self,
        message: str = NOT_FOUND_MESSAGE,
        *,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details)

    def to_dict(self) -> dict[str, Any]:
        """The caller-facing failure contract: ``{"error": message}``."""
        return {"error": self.message}


class InvalidAddressError(ResolutionError):
    """The input was blank or could not be read as an address."""

    category = "invalid_address"

    def __init__(self, message: str = INVALID_ADDRESS_MESSAGE, **kwargs: Any):
        super().__init__(message, **kwargs)


class NoPatternMatch(ResolutionError):
    """A validated page was fetched but no extraction strategy matched."""

    category = "no_match"


class AllAttemptsExhausted(ResolutionError):
    """Every retrieval attempt failed transport or validation.

    Attributes:
        errors: The per-attempt exceptions, in attempt order. Diagnostic only.
    """

    category = "exhausted"

    def __init__(
        self,
        message: str = NOT_FOUND_MESSAGE,
        *,
        errors: list[BaseException] | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.errors = list(errors or [])
        details = details or {}
        details["attempts"] = len(self.errors)
        super().__init__(message, details=details)


class MediaDownloadError(VidlinkError):
    """Error while downloading a resolved media link to disk."""

    category = "download"

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details=details)
        self.url = url
