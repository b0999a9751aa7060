"""Adapters - I/O implementations of ports."""

from .file_store import FileBlobStore
from .memory_store import MemoryBlobStore

__all__ = [
    "FileBlobStore",
    "MemoryBlobStore",
]
