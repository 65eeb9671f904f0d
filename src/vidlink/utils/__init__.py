"""Shared utilities."""

from vidlink.utils.logging import configure_logging, log_timed

__all__ = ["configure_logging", "log_timed"]
