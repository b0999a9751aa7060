"""Ports - interfaces/protocols for external dependencies."""

from .blob_store import BlobStore

__all__ = [
    "BlobStore",
]
