"""
Channel broker: pairs every address variant with every channel, and
retrieves one pairing over HTTP.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from vidlink.config.defaults import ACCEPT_HEADER, ACCEPT_LANGUAGE
from vidlink.config.loader import ResolverConfig
from vidlink.exceptions import TransportFailure
from vidlink.fetch.validator import validate_body
from vidlink.models.channel import Channel, RetrievalAttempt

logger = logging.getLogger(__name__)


def build_attempts(
    variants: Sequence[str], channels: Sequence[Channel]
) -> list[RetrievalAttempt]:
    """Cross every variant with every channel, variant-major."""
    attempts = []
    for variant in variants:
        for channel in channels:
            attempts.append(
                RetrievalAttempt(index=len(attempts), variant=variant, channel=channel)
            )
    return attempts


def request_headers(user_agent: str) -> dict[str, str]:
    """Headers that make the request look like a desktop browser."""
    return {
        "User-Agent": user_agent,
        "Accept": ACCEPT_HEADER,
        "Accept-Language": ACCEPT_LANGUAGE,
    }


async def fetch_document(
    client: httpx.AsyncClient,
    attempt: RetrievalAttempt,
    config: ResolverConfig,
) -> str:
    """Retrieve one attempt's target and validate the body.

    Args:
        client: Shared async HTTP client.
        attempt: The (variant, channel) pairing to fetch.
        config: Supplies user agent, deadline and minimum body length.

    Returns:
        The validated document body.

    Raises:
        TransportFailure: Network error, non-2xx status, or deadline elapsed.
        ValidationFailure: Body rejected by the validator.
    """
    target = attempt.target
    try:
        response = await asyncio.wait_for(
            client.get(target, headers=request_headers(config.user_agent)),
            timeout=config.attempt_timeout,
        )
        response.raise_for_status()
    except asyncio.TimeoutError as e:
        raise TransportFailure(
            f"No response within {config.attempt_timeout}s from {attempt.channel.name}",
            timed_out=True,
        ) from e
    except httpx.HTTPStatusError as e:
        raise TransportFailure(
            f"HTTP {e.response.status_code} from {attempt.channel.name}",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise TransportFailure(
            f"{type(e).__name__} from {attempt.channel.name}: {e}"
        ) from e

    return validate_body(response.text, config.min_body_length)
