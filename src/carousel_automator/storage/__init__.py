"""Persistent stores for jobs and slide images."""

from .base import ContentStore
from .file_store import FileContentStore
from .memory import InMemoryContentStore

__all__ = [
    "ContentStore",
    "FileContentStore",
    "InMemoryContentStore",
]
