"""In-memory blob storage adapter."""


class MemoryBlobStore:
    """
    Volatile blob storage that lives as long as the process.

    Implements BlobStore protocol.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def delete(self, key: str) -> None:
        self._blobs.pop(key, None)
