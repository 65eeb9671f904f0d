"""Concurrent retrieval of page bodies through relay channels."""

from vidlink.fetch.broker import build_attempts, fetch_document, request_headers
from vidlink.fetch.race import first_success, race
from vidlink.fetch.validator import has_public_metadata, is_login_wall, validate_body

__all__ = [
    "build_attempts",
    "fetch_document",
    "first_success",
    "has_public_metadata",
    "is_login_wall",
    "race",
    "request_headers",
    "validate_body",
]
