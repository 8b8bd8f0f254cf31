"""Storage backends for Boardroom.

- MarkdownFileStore / JsonTrustStore: local files (default)
- InMemoryTextStore / InMemoryTrustStore: process memory
"""

from .flat_files import JsonTrustStore, MarkdownFileStore
from .memory import InMemoryTextStore, InMemoryTrustStore

__all__ = [
    "MarkdownFileStore",
    "JsonTrustStore",
    "InMemoryTextStore",
    "InMemoryTrustStore",
]
