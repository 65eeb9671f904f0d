"""
Response validation for retrieved page bodies.
"""

from __future__ import annotations

import re

from vidlink.config.defaults import MIN_BODY_LENGTH
from vidlink.exceptions import ValidationFailure

# Markers of the platform's authentication wall
LOGIN_WALL_PATTERNS = [
    re.compile(r'id=["\']login_form["\']', re.IGNORECASE),
    re.compile(r'name=["\']login["\']\s+type=["\']submit["\']', re.IGNORECASE),
    re.compile(r"/login/\?next=", re.IGNORECASE),
    re.compile(r"/login\.php\?next=", re.IGNORECASE),
    re.compile(r"you must log in to continue", re.IGNORECASE),
    re.compile(r"log in or sign up to view", re.IGNORECASE),
]

# Some walled pages still carry Open Graph video metadata for crawlers
_PUBLIC_METADATA_RE = re.compile(
    r"<meta[^>]+(?:property|name)=[\"']og:video(?::url|:secure_url)?[\"']",
    re.IGNORECASE,
)


def is_login_wall(body: str) -> bool:
    """True if the body looks like the platform's login page."""
    return any(p.search(body) for p in LOGIN_WALL_PATTERNS)


def has_public_metadata(body: str) -> bool:
    """True if the body embeds an og:video meta tag."""
    return bool(_PUBLIC_METADATA_RE.search(body))


def validate_body(body: str, min_length: int = MIN_BODY_LENGTH) -> str:
    """Reject bodies that cannot contain usable content.

    Args:
        body: Retrieved document text.
        min_length: Bodies shorter than this are relay or error pages.

    Returns:
        The body, unchanged.

    Raises:
        ValidationFailure: With reason "too_short" or "login_wall".
    """
    if len(body) < min_length:
        raise ValidationFailure(
            f"Body too short ({len(body)} < {min_length} chars)",
            reason="too_short",
            details={"length": len(body)},
        )
    if is_login_wall(body) and not has_public_metadata(body):
        raise ValidationFailure(
            "Login wall without public metadata", reason="login_wall"
        )
    return body
