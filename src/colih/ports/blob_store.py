"""Key-value blob storage interface."""

from typing import Protocol


class BlobStore(Protocol):
    """Interface for storing string blobs under fixed string keys."""

    def get(self, key: str) -> str | None:
        """Read the blob for a key. Returns None if not found."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the blob for a key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the blob for a key. Missing keys are ignored."""
        ...
