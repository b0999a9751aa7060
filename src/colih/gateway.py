"""Session and persistence gateway - JSON blobs over injected stores."""

import json
import logging

from .core.errors import MalformedStorage
from .core.records import AttendanceRecord, User
from .ports.blob_store import BlobStore

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "session-user"
RECORDS_KEY = "attendance-records"


def decode_user(blob: str) -> User:
    """Parse a serialized User. Raises MalformedStorage on any problem."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise MalformedStorage(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedStorage("Stored user is not an object")
    return User.from_dict(data)


def decode_records(blob: str) -> list[AttendanceRecord]:
    """Parse a serialized record list. Raises MalformedStorage on any problem."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise MalformedStorage(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedStorage("Stored records are not a list")
    return [AttendanceRecord.from_dict(item) for item in data]


def encode_records(records: list[AttendanceRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)


class Gateway:
    """
    Loads and saves the session identity and the record collection.

    The session store is volatile (cleared on logout); the durable store
    survives restarts. Absent or malformed blobs read as "no data".
    """

    def __init__(self, session_store: BlobStore, durable_store: BlobStore):
        self.session_store = session_store
        self.durable_store = durable_store

    def load_user(self) -> User | None:
        """Current session user, or None if logged out."""
        blob = self.session_store.get(SESSION_USER_KEY)
        if blob is None:
            return None
        try:
            return decode_user(blob)
        except MalformedStorage as e:
            logger.warning(f"Ignoring malformed session: {e}")
            return None

    def save_user(self, user: User) -> None:
        self.session_store.set(SESSION_USER_KEY, json.dumps(user.to_dict(), ensure_ascii=False))

    def clear_user(self) -> None:
        self.session_store.delete(SESSION_USER_KEY)

    def load_records(self) -> list[AttendanceRecord]:
        """Full record collection, or an empty list if none is stored."""
        blob = self.durable_store.get(RECORDS_KEY)
        if blob is None:
            return []
        try:
            return decode_records(blob)
        except MalformedStorage as e:
            logger.warning(f"Ignoring malformed record store: {e}")
            return []

    def save_records(self, records: list[AttendanceRecord]) -> None:
        self.durable_store.set(RECORDS_KEY, encode_records(records))
        logger.info(f"Saved {len(records)} records")
