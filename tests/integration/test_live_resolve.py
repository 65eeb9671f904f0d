"""Integration tests against live relay channels.

These make real network requests through the public relays and need a
publicly shared video page to resolve.

Run with: VIDLINK_TEST_URL=<page url> pytest tests/integration --run-integration
"""

from __future__ import annotations

import os

import pytest

from vidlink.config.defaults import BUILTIN_CHANNELS
from vidlink.config.loader import ResolverConfig
from vidlink.exceptions import NOT_FOUND_MESSAGE
from vidlink.operations.resolve import resolve_video

pytestmark = pytest.mark.integration


@pytest.fixture
def live_url():
    url = os.environ.get("VIDLINK_TEST_URL")
    if not url:
        pytest.skip("VIDLINK_TEST_URL not set")
    return url


class TestLiveResolve:
    @pytest.mark.asyncio
    async def test_public_video_resolves(self, live_url):
        result = await resolve_video(live_url)
        assert "error" not in result, result
        assert result.get("hd") or result.get("sd")
        for key in ("hd", "sd"):
            if key in result:
                assert result[key].startswith("https://")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["corsproxy", "allorigins", "codetabs", "direct"])
    async def test_single_channel(self, live_url, name):
        """Each relay on its own either resolves or fails with the standard message."""
        config = ResolverConfig(channels=(BUILTIN_CHANNELS[name],))
        result = await resolve_video(live_url, config=config)
        assert result == {"error": NOT_FOUND_MESSAGE} or result.get("hd") or result.get("sd")
