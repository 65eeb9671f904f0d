"""Address parsing and variant generation."""

from vidlink.parsing.variants import (
    FULL_HOST,
    LIGHTWEIGHT_HOST,
    generate_variants,
    is_platform_address,
)

__all__ = [
    "FULL_HOST",
    "LIGHTWEIGHT_HOST",
    "generate_variants",
    "is_platform_address",
]
