"""
Video link resolution - orchestrates variants, the fetch race, extraction,
and result assembly.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from vidlink.config.loader import ResolverConfig, get_config
from vidlink.exceptions import (
    AllAttemptsExhausted,
    NoPatternMatch,
    ResolutionError,
)
from vidlink.extraction.metadata import extract_thumbnail, extract_title
from vidlink.extraction.strategies import run_pipeline
from vidlink.fetch.broker import build_attempts, fetch_document
from vidlink.fetch.race import AttemptHook, race
from vidlink.models.address import ResourceAddress
from vidlink.models.channel import RetrievalAttempt
from vidlink.models.result import ExtractionResult
from vidlink.utils.logging import log_timed

logger = logging.getLogger(__name__)


def assemble_result(body: str) -> ExtractionResult:
    """Build the result for a validated document body.

    Raises:
        NoPatternMatch: If no extraction strategy produced a link.
    """
    match = run_pipeline(body)
    if match is None:
        raise NoPatternMatch(details={"body_length": len(body)})

    strategy, candidate = match
    logger.info(f"Extracted via {strategy}: hd={bool(candidate.hd)} sd={bool(candidate.sd)}")
    return ExtractionResult(
        sd=candidate.sd,
        hd=candidate.hd,
        thumbnail=extract_thumbnail(body),
        title=extract_title(body),
    )


async def resolve(
    address: str,
    *,
    config: ResolverConfig | None = None,
    client: httpx.AsyncClient | None = None,
    on_event: AttemptHook | None = None,
) -> ExtractionResult:
    """Resolve a shared video page address into direct media links.

    Args:
        address: Page address as pasted by the user.
        config: Resolver settings. Defaults to get_config().
        client: Async HTTP client to fetch with. When omitted, one is created
            for this call and closed afterwards, which also ends any attempts
            still in flight.
        on_event: Optional diagnostic hook, called once per settled attempt.

    Returns:
        ExtractionResult with at least one of hd/sd set.

    Raises:
        InvalidAddressError: If the address is blank.
        AllAttemptsExhausted: If every retrieval attempt failed.
        NoPatternMatch: If the winning page held no recognizable link.
    """
    t0 = time.time()
    config = config or get_config()
    resource = ResourceAddress.parse(address)

    variants = resource.variants()
    attempts = build_attempts(variants, config.channels)
    log_timed(
        f"Resolving {resource.url}: {len(variants)} variant(s) x "
        f"{len(config.channels)} channel(s)",
        t0,
    )

    owns_client = client is None
    http = client or httpx.AsyncClient(follow_redirects=True)

    async def fetch(attempt: RetrievalAttempt) -> str:
        return await fetch_document(http, attempt, config)

    try:
        winner, body = await race(attempts, fetch, on_event=on_event)
    except AllAttemptsExhausted:
        log_timed(f"All {len(attempts)} attempts failed", t0, level=logging.WARNING)
        raise
    finally:
        if owns_client:
            await http.aclose()

    log_timed(
        f"Attempt {winner.index} won via {winner.channel.name} ({winner.variant})",
        t0,
    )
    result = assemble_result(body)
    log_timed("Resolution complete", t0)
    return result


async def resolve_video(address: str, **kwargs: Any) -> dict[str, str]:
    """Resolve an address into the caller-facing dict contract.

    Returns:
        ``{"sd"?, "hd"?, "thumbnail"?, "title"?}`` on success, or
        ``{"error": message}`` on failure. Never raises ResolutionError.
    """
    try:
        result = await resolve(address, **kwargs)
    except ResolutionError as e:
        logger.warning(f"Resolution failed ({e.category}): {e.details}")
        return e.to_dict()
    return result.to_dict()


def resolve_video_sync(address: str, **kwargs: Any) -> dict[str, str]:
    """Blocking wrapper around resolve_video() for scripts and the CLI."""
    return asyncio.run(resolve_video(address, **kwargs))
