"""
Channel and RetrievalAttempt models.

A Channel wraps a target address in an indirect retrieval relay: a public
endpoint that fetches the page on the caller's behalf.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

URL_PLACEHOLDER = "{url}"


@dataclass(frozen=True)
class Channel:
    """An indirect retrieval path.

    Attributes:
        name: Short identifier used in config and diagnostics.
        template: Relay address with a ``{url}`` placeholder.
        encode: Percent-encode the wrapped address before substitution.
    """

    name: str
    template: str
    encode: bool = True

    def wrap(self, address: str) -> str:
        """Return ``address`` routed through this channel."""
        target = quote(address, safe="") if self.encode else address
        return self.template.replace(URL_PLACEHOLDER, target)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RetrievalAttempt:
    """One variant paired with one channel."""

    index: int
    variant: str
    channel: Channel

    @property
    def target(self) -> str:
        return self.channel.wrap(self.variant)


@dataclass(frozen=True)
class AttemptEvent:
    """Diagnostic record emitted once per settled retrieval attempt.

    Attributes:
        index: Position of the attempt in the attempt list.
        variant: The address variant that was fetched.
        channel: Name of the channel used.
        outcome: "success", "transport_error", "invalid" or "timeout".
        detail: Short description of the failure, empty on success.
        elapsed: Seconds from dispatch to settlement.
    """

    index: int
    variant: str
    channel: str
    outcome: str
    detail: str = ""
    elapsed: float = 0.0
