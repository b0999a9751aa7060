"""File-based blob storage adapter."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileBlobStore:
    """
    File-based blob storage.

    Implements BlobStore protocol. Each key gets a JSON file in `store_dir`.
    """

    def __init__(self, store_dir: Path | str):
        self.store_dir = Path(store_dir).expanduser()
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        return self.store_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Read the blob for a key. Returns None if not found."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the blob for a key."""
        path = self._path_for_key(key)
        # Atomic replace
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        logger.debug(f"Wrote {len(value)} chars to {path}")

    def delete(self, key: str) -> None:
        """Remove the blob for a key. Missing keys are ignored."""
        self._path_for_key(key).unlink(missing_ok=True)
