"""
Data models for vidlink.
"""

from vidlink.models.address import ResourceAddress
from vidlink.models.channel import AttemptEvent, Channel, RetrievalAttempt
from vidlink.models.result import ExtractionResult, MediaCandidate

__all__ = [
    "AttemptEvent",
    "Channel",
    "ExtractionResult",
    "MediaCandidate",
    "ResourceAddress",
    "RetrievalAttempt",
]
