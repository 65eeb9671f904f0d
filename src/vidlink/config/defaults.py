"""
Default configuration values for vidlink.

Note: These are overridable via config/loader.py which supports
environment variables, project config, and user config.
"""

from vidlink.models.channel import Channel

# Bodies shorter than this are relay error pages, not real content
MIN_BODY_LENGTH = 500

# Per-attempt deadline (seconds). A hanging relay must not stall the race.
ATTEMPT_TIMEOUT = 15.0

# Timeout for streaming a resolved media file to disk (seconds)
DOWNLOAD_TIMEOUT = 120.0

# The platform serves reduced markup to clients it does not recognize
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Built-in relay table. Over-provisioned: availability is outside our control.
BUILTIN_CHANNELS: dict[str, Channel] = {
    c.name: c
    for c in (
        Channel("corsproxy", "https://corsproxy.io/?{url}"),
        Channel("allorigins", "https://api.allorigins.win/raw?url={url}"),
        Channel("codetabs", "https://api.codetabs.com/v1/proxy?quest={url}"),
        Channel("thingproxy", "https://thingproxy.freeboard.io/fetch/{url}", encode=False),
        Channel("direct", "{url}", encode=False),
    )
}

DEFAULT_CHANNELS: tuple[Channel, ...] = tuple(BUILTIN_CHANNELS.values())
