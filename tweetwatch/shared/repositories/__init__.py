"""Shared repository layer for tweetwatch."""

from .brain import MemoryBrain, PostgresBrain

__all__ = [
    "MemoryBrain",
    "PostgresBrain",
]
