"""
Decoding of raw matched substrings into clean absolute URLs.

Matched values may carry up to three nested layers of escaping depending on
where they came from: JSON string escapes (``\\/``, ``\\u0026``, doubled
backslashes), percent-encoding, and HTML entities. They are undone in that
order. If the result still does not look like an absolute URL, a fixed chain
of literal substitutions is tried on the raw value before giving up.
"""

from __future__ import annotations

import html
import re
from urllib.parse import unquote, urlsplit

# Any run of backslashes before a \uXXXX escape (nested JSON encodings)
_UNICODE_ESCAPE_RE = re.compile(r"\\+u([0-9a-fA-F]{4})")
# Any run of backslashes before a character that JSON escapes literally
_CHAR_ESCAPE_RE = re.compile(r"\\+([/\"'])")
# Entities with an explicit terminator only; bare "&name" is a query separator
_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
# Leftover markup or JSON punctuation means decoding went wrong
_NON_URL_CHAR_RE = re.compile(r"[\s\"<>{}]")

# Literal replacements for values the decode pipeline could not repair
_FALLBACK_SUBSTITUTIONS = [
    ("\\\\/", "/"),
    ("\\/", "/"),
    ("\\u0025", "%"),
    ("\\u0026", "&"),
    ("\\u003d", "="),
    ("\\u003D", "="),
    ("\\", ""),
    ("u0025", "%"),
    ("u0026", "&"),
    ("u002F", "/"),
    ("u002f", "/"),
    ("u003A", ":"),
    ("u003a", ":"),
    ("%25", "%"),
    ("&amp;", "&"),
    ("%3A", ":"),
    ("%3a", ":"),
    ("%2F", "/"),
    ("%2f", "/"),
]


def unescape_backslashes(value: str) -> str:
    """Resolve backslash and ``\\uXXXX`` escapes, at any nesting depth."""
    value = _UNICODE_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), value)
    return _CHAR_ESCAPE_RE.sub(r"\1", value)


def unescape_entities(value: str) -> str:
    """Decode HTML entities that carry an explicit ";" terminator."""
    return _ENTITY_RE.sub(lambda m: html.unescape(m.group(0)), value)


def is_absolute_url(value: str) -> bool:
    """True if the value has an http(s) scheme, a host, and no characters
    that cannot appear in a URL."""
    if not value.lower().startswith(("http://", "https://")):
        return False
    if _NON_URL_CHAR_RE.search(value):
        return False
    try:
        return bool(urlsplit(value).netloc)
    except ValueError:
        return False


def _decode(value: str) -> str:
    value = unescape_backslashes(value)
    value = unquote(value)
    return unescape_entities(value)


def _substitute(value: str) -> str:
    for old, new in _FALLBACK_SUBSTITUTIONS:
        value = value.replace(old, new)
    return value


def sanitize_url(raw: str | None) -> str | None:
    """Turn a raw matched substring into a clean absolute URL.

    Args:
        raw: Substring captured by an extraction pattern.

    Returns:
        The decoded URL, or None if it cannot be made absolute.
    """
    if not raw:
        return None

    raw = raw.strip().strip("\"'").rstrip("\\")
    decoded = _decode(raw).strip()
    if is_absolute_url(decoded):
        return decoded

    fallback = unescape_entities(_substitute(raw)).strip()
    if is_absolute_url(fallback):
        return fallback
    return None
