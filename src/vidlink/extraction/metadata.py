"""
Meta tag lookup, plus thumbnail and title extraction.

Thumbnail and title are extracted independently of the media links and never
decide whether a resolution succeeded.
"""

from __future__ import annotations

import html
import re
from functools import lru_cache

from vidlink.extraction.sanitize import sanitize_url

_TITLE_TAG_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

THUMBNAIL_KEYS = ("og:image", "og:image:url", "og:image:secure_url", "twitter:image")
TITLE_KEYS = ("og:title", "twitter:title")


@lru_cache(maxsize=32)
def _meta_patterns(key: str) -> tuple[re.Pattern, re.Pattern]:
    """Patterns for <meta> with the key before or after the content attribute."""
    k = re.escape(key)
    return (
        re.compile(
            rf"<meta[^>]*?(?:property|name)\s*=\s*[\"']{k}[\"'][^>]*?content\s*=\s*\"([^\"]*)\"",
            re.IGNORECASE,
        ),
        re.compile(
            rf"<meta[^>]*?content\s*=\s*\"([^\"]*)\"[^>]*?(?:property|name)\s*=\s*[\"']{k}[\"']",
            re.IGNORECASE,
        ),
    )


def meta_content(body: str, keys: tuple[str, ...]) -> str | None:
    """Raw content attribute of the first meta tag matching any key, in key order."""
    for key in keys:
        for pattern in _meta_patterns(key):
            match = pattern.search(body)
            if match and match.group(1).strip():
                return match.group(1)
    return None


def extract_thumbnail(body: str) -> str | None:
    """Preview image URL from Open Graph / Twitter card tags."""
    return sanitize_url(meta_content(body, THUMBNAIL_KEYS))


def _clean_text(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", html.unescape(value)).strip()


def extract_title(body: str) -> str | None:
    """Page title from og:title, twitter:title, then the <title> element."""
    raw = meta_content(body, TITLE_KEYS)
    if raw is None:
        match = _TITLE_TAG_RE.search(body)
        raw = match.group(1) if match else None
    if raw is None:
        return None
    return _clean_text(raw) or None
