"""
High-level resolution operations.
"""

from vidlink.operations.download import download_media
from vidlink.operations.resolve import (
    assemble_result,
    resolve,
    resolve_video,
    resolve_video_sync,
)

__all__ = [
    "assemble_result",
    "download_media",
    "resolve",
    "resolve_video",
    "resolve_video_sync",
]
