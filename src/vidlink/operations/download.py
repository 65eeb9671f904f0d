"""
Download of resolved media links to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from vidlink.config.defaults import DOWNLOAD_TIMEOUT, USER_AGENT
from vidlink.exceptions import MediaDownloadError
from vidlink.fetch.broker import request_headers
from vidlink.models.result import ExtractionResult

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


async def download_media(
    result: ExtractionResult,
    dest: Path,
    *,
    quality: str = "hd",
    client: httpx.AsyncClient | None = None,
    user_agent: str = USER_AGENT,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> Path:
    """Stream the resolved media file to ``dest``.

    Args:
        result: A successful resolution result.
        dest: File to write. Parent directories are created.
        quality: "hd" or "sd"; the other tier is used if this one is missing.
        client: Async HTTP client. A temporary one is used when omitted.
        user_agent: User-Agent header for the CDN request.
        timeout: Overall HTTP timeout in seconds.

    Returns:
        Path to the written file.

    Raises:
        MediaDownloadError: If there is no link or the transfer fails.
    """
    if quality not in ("hd", "sd"):
        raise ValueError(f"quality must be 'hd' or 'sd', got {quality!r}")

    url = result.best(quality)
    if not url:
        raise MediaDownloadError("Result has no media link to download")

    dest = Path(dest)
    partial = dest.with_name(dest.name + ".part")

    owns_client = client is None
    http = client or httpx.AsyncClient(follow_redirects=True, timeout=timeout)
    written = 0
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        async with http.stream("GET", url, headers=request_headers(user_agent)) as response:
            response.raise_for_status()
            with open(partial, "wb") as f:
                async for chunk in response.aiter_bytes(CHUNK_SIZE):
                    f.write(chunk)
                    written += len(chunk)
        if written == 0:
            raise MediaDownloadError("Server returned an empty file", url=url)
        partial.replace(dest)
    except httpx.HTTPStatusError as e:
        raise MediaDownloadError(
            f"HTTP {e.response.status_code} while downloading media",
            url=url,
            details={"status_code": e.response.status_code},
        ) from e
    except httpx.HTTPError as e:
        raise MediaDownloadError(f"Download failed: {e}", url=url) from e
    except OSError as e:
        raise MediaDownloadError(f"Could not write {dest}: {e}", url=url) from e
    finally:
        # Gone after a successful replace; otherwise a leftover of a failure
        partial.unlink(missing_ok=True)
        if owns_client:
            await http.aclose()

    logger.info(f"Saved {written / 1_048_576:.1f}MB to {dest}")
    return dest
