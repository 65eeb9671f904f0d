"""Extraction of media links and page metadata from document bodies."""

from vidlink.extraction.metadata import extract_thumbnail, extract_title, meta_content
from vidlink.extraction.sanitize import is_absolute_url, sanitize_url
from vidlink.extraction.strategies import (
    STRATEGIES,
    ExtractionStrategy,
    data_blob,
    find_media_urls,
    media_scan,
    open_graph,
    redirect_link,
    run_pipeline,
    structured_fields,
)

__all__ = [
    "STRATEGIES",
    "ExtractionStrategy",
    "data_blob",
    "extract_thumbnail",
    "extract_title",
    "find_media_urls",
    "is_absolute_url",
    "media_scan",
    "meta_content",
    "open_graph",
    "redirect_link",
    "run_pipeline",
    "sanitize_url",
    "structured_fields",
]
