"""
ResourceAddress Pydantic model for user-supplied page addresses.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vidlink.exceptions import InvalidAddressError
from vidlink.parsing.variants import generate_variants, is_platform_address


class ResourceAddress(BaseModel):
    """A shared video page address, immutable once accepted."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Page address (normalized)")

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Normalize URL - strip whitespace, ensure scheme."""
        if not isinstance(v, str):
            raise ValueError("URL must be a string")
        v = v.strip()
        if not v:
            raise ValueError("URL cannot be empty")
        if not v.lower().startswith(("http://", "https://")):
            v = "https://" + v
        return v

    @classmethod
    def parse(cls, url: str) -> ResourceAddress:
        """Accept a raw address string.

        Raises:
            InvalidAddressError: If the address is blank or not a string.
        """
        try:
            return cls(url=url)
        except ValidationError as e:
            raise InvalidAddressError(details={"input": repr(url), "reason": str(e)}) from e

    @classmethod
    def try_parse(cls, url: str) -> ResourceAddress | None:
        """Try to parse an address, returning None on failure instead of raising."""
        try:
            return cls.parse(url)
        except InvalidAddressError:
            return None

    @property
    def host(self) -> str:
        return (urlsplit(self.url).hostname or "").lower()

    @property
    def is_platform(self) -> bool:
        """True if the address belongs to the platform's domain family."""
        return is_platform_address(self.url)

    def variants(self) -> list[str]:
        """Alternate forms of this address; never empty."""
        return generate_variants(self.url)

    def __str__(self) -> str:
        return self.url
