"""
Ordered extraction strategies for locating media links in a page body.

Each strategy is an independent ``body -> MediaCandidate | None`` rule. The
pipeline walks them in order and stops at the first non-empty candidate, so
the order is also the confidence ranking:

1. structured_fields - known JSON field aliases per quality tier
2. redirect_link     - lightweight markup's single indirection link
3. data_blob         - serialized attribute blobs with a "src" key
4. open_graph        - og:video / player stream meta tags (SD only)
5. media_scan        - any CDN media URL in the body, longest wins
"""

from __future__ import annotations

import html
import json
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit

from vidlink.extraction.metadata import meta_content
from vidlink.extraction.sanitize import sanitize_url
from vidlink.models.result import MediaCandidate

logger = logging.getLogger(__name__)

# Field names the platform has used for each tier, most specific first
HD_ALIASES = (
    "hd_src",
    "hd_src_no_ratelimit",
    "browser_native_hd_url",
    "playable_url_quality_hd",
)
SD_ALIASES = (
    "sd_src",
    "sd_src_no_ratelimit",
    "browser_native_sd_url",
    "playable_url",
)

VIDEO_META_KEYS = (
    "og:video:secure_url",
    "og:video:url",
    "og:video",
    "twitter:player:stream",
)

MEDIA_HOSTS = ("fbcdn.net", "fbvideo.net", "fbsbx.com")
MEDIA_EXTENSIONS = (".mp4", ".m4v", ".mov", ".webm")

_REDIRECT_RE = re.compile(
    r"href=\"(?:https?://[^/\"]+)?/video_redirect/\?src=([^\"&]+)", re.IGNORECASE
)
_DATA_BLOB_RE = re.compile(r"data-store=\"([^\"]+)\"", re.IGNORECASE)
_URL_TOKEN_RE = re.compile(r"https?(?::|%3A)[^\"'\s<>]+", re.IGNORECASE)
# Quote characters hidden inside a token by entity or JSON encoding
_QUOTE_RE = re.compile(r"&(?:quot|#0*34|#x0*22);|\\+u0022", re.IGNORECASE)
# A double quote as it appears in raw, escaped or entity-encoded markup
_QUOTE = r'(?:\\*"|&quot;|&#0*34;)'


@dataclass(frozen=True)
class ExtractionStrategy:
    """A named extraction rule."""

    name: str
    func: Callable[[str], MediaCandidate | None]

    def __call__(self, body: str) -> MediaCandidate | None:
        return self.func(body)


def _field_pattern(alias: str) -> re.Pattern:
    # Tolerates escaped quotes from JSON embedded inside a JSON string, and
    # entity-encoded quotes from JSON inside an HTML attribute
    return re.compile(rf"{_QUOTE}{re.escape(alias)}{_QUOTE}\s*:\s*{_QUOTE}(.+?){_QUOTE}")


_FIELD_PATTERNS = {alias: _field_pattern(alias) for alias in HD_ALIASES + SD_ALIASES}


def _first_alias(body: str, aliases: Iterable[str]) -> str | None:
    for alias in aliases:
        match = _FIELD_PATTERNS[alias].search(body)
        if not match:
            continue
        url = sanitize_url(match.group(1))
        if url:
            return url
        logger.debug(f"Field {alias} matched but did not decode to a URL")
    return None


def structured_fields(body: str) -> MediaCandidate | None:
    """HD and SD links from known field aliases, each tier independently."""
    hd = _first_alias(body, HD_ALIASES)
    sd = _first_alias(body, SD_ALIASES)
    if hd or sd:
        return MediaCandidate(hd=hd, sd=sd)
    return None


def redirect_link(body: str) -> MediaCandidate | None:
    """The lightweight page's ``/video_redirect/?src=`` link, used for both tiers."""
    match = _REDIRECT_RE.search(body)
    if not match:
        return None
    url = sanitize_url(match.group(1))
    if not url:
        return None
    return MediaCandidate(hd=url, sd=url)


def _blob_source(blob: object) -> str | None:
    if not isinstance(blob, dict):
        return None
    for key in ("src", "source", "playable_url"):
        value = blob.get(key)
        if isinstance(value, str):
            return value
    return None


def data_blob(body: str) -> MediaCandidate | None:
    """A "src" key inside a serialized ``data-store`` attribute blob."""
    for match in _DATA_BLOB_RE.finditer(body):
        try:
            blob = json.loads(html.unescape(match.group(1)))
        except ValueError:
            continue
        url = sanitize_url(_blob_source(blob))
        if url:
            return MediaCandidate(sd=url)
    return None


def open_graph(body: str) -> MediaCandidate | None:
    """og:video and player stream meta tags. Never better than SD."""
    url = sanitize_url(meta_content(body, VIDEO_META_KEYS))
    if url:
        return MediaCandidate(sd=url)
    return None


def _is_media_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    host = (parts.hostname or "").lower()
    if not any(host == h or host.endswith("." + h) for h in MEDIA_HOSTS):
        return False
    return parts.path.lower().endswith(MEDIA_EXTENSIONS)


def find_media_urls(body: str) -> list[str]:
    """Every decodable CDN media URL in the body, in order of appearance."""
    found: list[str] = []
    for match in _URL_TOKEN_RE.finditer(body):
        token = _QUOTE_RE.split(match.group(0), maxsplit=1)[0]
        url = sanitize_url(token)
        if url and _is_media_url(url) and url not in found:
            found.append(url)
    return found


def media_scan(body: str) -> MediaCandidate | None:
    """Last resort: the longest CDN media URL anywhere in the body.

    Longer URLs are more likely to carry the signed query parameters the
    CDN requires. Quality is unknown, so the link is reported as SD.
    """
    urls = find_media_urls(body)
    if not urls:
        return None
    return MediaCandidate(sd=max(urls, key=len))


STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("structured_fields", structured_fields),
    ExtractionStrategy("redirect_link", redirect_link),
    ExtractionStrategy("data_blob", data_blob),
    ExtractionStrategy("open_graph", open_graph),
    ExtractionStrategy("media_scan", media_scan),
)


def run_pipeline(
    body: str,
    strategies: Iterable[ExtractionStrategy] = STRATEGIES,
) -> tuple[str, MediaCandidate] | None:
    """Apply strategies in order; the first non-empty candidate wins.

    Returns:
        (strategy name, candidate), or None if no strategy matched.
    """
    for strategy in strategies:
        candidate = strategy(body)
        if candidate:
            logger.debug(f"Strategy {strategy.name} matched")
            return strategy.name, candidate
        logger.debug(f"Strategy {strategy.name} found nothing")
    return None
