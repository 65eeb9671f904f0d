"""
Configuration for vidlink.

Contains the built-in channel table, resolver defaults and the config loader.
"""

from vidlink.config.defaults import (
    ATTEMPT_TIMEOUT,
    BUILTIN_CHANNELS,
    DEFAULT_CHANNELS,
    MIN_BODY_LENGTH,
    USER_AGENT,
)
from vidlink.config.loader import (
    ConfigSource,
    ConfigValidationResult,
    ResolverConfig,
    clear_config_cache,
    get_config,
    validate_config,
)

__all__ = [
    "ATTEMPT_TIMEOUT",
    "BUILTIN_CHANNELS",
    "DEFAULT_CHANNELS",
    "MIN_BODY_LENGTH",
    "USER_AGENT",
    # Config loader
    "ConfigSource",
    "ConfigValidationResult",
    "ResolverConfig",
    "clear_config_cache",
    "get_config",
    "validate_config",
]
