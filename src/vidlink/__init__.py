"""
vidlink - Resolve shared social video pages into direct media links.

Given a page address on a platform with no public API:
1. Derive address variants served with lighter or heavier markup
2. Race every variant through every relay channel, first valid page wins
3. Run ordered extraction strategies to recover HD/SD links, title, thumbnail
"""

# Config
from vidlink.config.loader import (
    ConfigSource,
    ResolverConfig,
    clear_config_cache,
    get_config,
)

# Exceptions
from vidlink.exceptions import (
    AllAttemptsExhausted,
    AttemptError,
    InvalidAddressError,
    MediaDownloadError,
    NoPatternMatch,
    ResolutionError,
    TransportFailure,
    ValidationFailure,
    VidlinkError,
)

# Building blocks
from vidlink.extraction.sanitize import sanitize_url
from vidlink.extraction.strategies import STRATEGIES, ExtractionStrategy, run_pipeline
from vidlink.fetch.race import first_success

# Models
from vidlink.models.address import ResourceAddress
from vidlink.models.channel import AttemptEvent, Channel, RetrievalAttempt
from vidlink.models.result import ExtractionResult, MediaCandidate

# Core operations
from vidlink.operations.download import download_media
from vidlink.operations.resolve import resolve, resolve_video, resolve_video_sync
from vidlink.parsing.variants import generate_variants

__version__ = "1.0.0rc1"

__all__ = [
    # Core functions
    "resolve",
    "resolve_video",
    "resolve_video_sync",
    "download_media",
    # Building blocks
    "first_success",
    "generate_variants",
    "run_pipeline",
    "sanitize_url",
    "STRATEGIES",
    "ExtractionStrategy",
    # Models
    "AttemptEvent",
    "Channel",
    "ExtractionResult",
    "MediaCandidate",
    "ResourceAddress",
    "RetrievalAttempt",
    # Config
    "ConfigSource",
    "ResolverConfig",
    "clear_config_cache",
    "get_config",
    # Exceptions
    "VidlinkError",
    "AttemptError",
    "TransportFailure",
    "ValidationFailure",
    "ResolutionError",
    "InvalidAddressError",
    "NoPatternMatch",
    "AllAttemptsExhausted",
    "MediaDownloadError",
]
