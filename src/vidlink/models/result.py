"""
Extraction result dataclasses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MediaCandidate:
    """Media links produced by one extraction strategy."""

    hd: str | None = None
    sd: str | None = None

    def __bool__(self) -> bool:
        return bool(self.hd or self.sd)


@dataclass
class ExtractionResult:
    """Result of resolving a page address.

    A result is only a success when at least one of ``sd``/``hd`` is set.
    ``thumbnail`` and ``title`` are best-effort and never gate success.
    """

    sd: str | None = None
    hd: str | None = None
    thumbnail: str | None = None
    title: str | None = None

    @property
    def success(self) -> bool:
        return bool(self.sd or self.hd)

    def best(self, quality: str = "hd") -> str | None:
        """The link for ``quality``, falling back to the other tier."""
        if quality == "sd":
            return self.sd or self.hd
        return self.hd or self.sd

    def to_dict(self) -> dict[str, str]:
        """Fields that are present, as the caller-facing success contract."""
        return {k: v for k, v in asdict(self).items() if v is not None}
