"""
Address variant generation.

The platform serves the same video page under several subdomains. The
"lightweight" one returns static markup that is easy to pattern-match; the
"full" one returns the heavy page with embedded JSON blobs. Both are worth
trying since either may be blocked or stripped on a given day.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

PLATFORM_DOMAIN = "facebook.com"

LIGHTWEIGHT_HOST = "mbasic.facebook.com"
FULL_HOST = "www.facebook.com"

# Subdomains known to serve the same resource paths
_PLATFORM_HOST_RE = re.compile(
    r"^(?:(?:www|web|m|mbasic|touch|mobile)\.)?facebook\.com$", re.IGNORECASE
)


def _split(address: str):
    candidate = address.strip()
    if "://" not in candidate:
        candidate = "https://" + candidate
    return urlsplit(candidate)


def is_platform_address(address: str) -> bool:
    """Check whether an address belongs to the platform's domain family."""
    try:
        parts = _split(address)
        parts.port  # raises on a malformed port
    except ValueError:
        return False
    host = (parts.hostname or "").rstrip(".")
    return bool(_PLATFORM_HOST_RE.match(host))


def _with_host(address: str, host: str) -> str:
    parts = _split(address)
    netloc = host if parts.port is None else f"{host}:{parts.port}"
    return urlunsplit(("https", netloc, parts.path, parts.query, parts.fragment))


def generate_variants(address: str) -> list[str]:
    """Derive structurally equivalent forms of a page address.

    Args:
        address: The user-supplied page address.

    Returns:
        The original address first, then the lightweight and full markup
        variants, without duplicates. Addresses outside the platform's
        domain family come back as a single-element list holding the
        original, unmodified.
    """
    if not is_platform_address(address):
        return [address]

    variants = [address]
    for host in (LIGHTWEIGHT_HOST, FULL_HOST):
        variant = _with_host(address, host)
        if variant not in variants:
            variants.append(variant)
    return variants
