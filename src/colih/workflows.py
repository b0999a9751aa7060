"""Shared workflow layer between the CLI and any other front-end.

Each function loads state through the gateway, runs the pure core, and
persists the result. Access checks happen here, before the reducer.
"""

import logging
from dataclasses import dataclass, replace

from .adapters.file_store import FileBlobStore
from .config import Config
from .core.access import require_create, require_edit
from .core.classify import Classification, classify, count_by_classification
from .core.errors import AmbiguousRecordId, RecordNotFound
from .core.filters import visible_records
from .core.records import AttendanceRecord, FilterCriteria, User
from .core.reducer import find_record, save_record
from .core.validation import validate_input
from .gateway import Gateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedRecord:
    """A visible record paired with its display classification."""

    record: AttendanceRecord
    classification: Classification


@dataclass
class SaveResult:
    """Outcome of a save action."""

    records: list[AttendanceRecord]
    record: AttendanceRecord | None = None
    notice: str | None = None

    @property
    def saved(self) -> bool:
        return self.record is not None


def get_gateway(config: Config) -> Gateway:
    """Resolve file-backed session and durable stores from config."""
    return Gateway(
        session_store=FileBlobStore(config.session_path),
        durable_store=FileBlobStore(config.data_path),
    )


def login(gateway: Gateway, config: Config, user_id: str) -> User:
    """Start a session as a user from the configured directory."""
    user = config.find_user(user_id)
    gateway.save_user(user)
    logger.info(f"Logged in as {user.id} ({user.role.value})")
    return user


def logout(gateway: Gateway) -> None:
    gateway.clear_user()


def list_records(
    gateway: Gateway,
    user: User,
    criteria: FilterCriteria | None = None,
) -> list[ClassifiedRecord]:
    """Visible, filtered, ordered records with their classification."""
    records = visible_records(gateway.load_records(), user, criteria)
    return [ClassifiedRecord(r, classify(r)) for r in records]


def get_record(gateway: Gateway, user: User, record_id: str) -> AttendanceRecord:
    """
    Fetch one record the user is allowed to see.

    Accepts a full id or an unambiguous prefix. Records outside a member's
    group are reported as not found; a prefix shared by several records
    raises AmbiguousRecordId.
    """
    visible = visible_records(gateway.load_records(), user)
    record = find_record(visible, record_id)
    if record is not None:
        return record
    matches = [r for r in visible if r.id.startswith(record_id)] if record_id else []
    if not matches:
        raise RecordNotFound(record_id)
    if len(matches) > 1:
        raise AmbiguousRecordId(record_id, [r.id for r in matches])
    return matches[0]


def save(
    gateway: Gateway,
    user: User,
    raw: dict,
    editing_id: str | None = None,
    now: int | None = None,
) -> SaveResult:
    """
    Validate, authorize, reduce and persist a save action.

    Raises:
        ValidationError: required fields missing or invalid.
        PermissionDenied: user may not create, or may not edit the target.

    Members editing a record keep its responsible member unchanged.
    A missing edit target is not fatal: the collection is left unchanged and
    the result carries a notice instead.
    """
    data = validate_input(raw)
    records = gateway.load_records()

    if editing_id is None:
        require_create(user)
    else:
        existing = find_record(records, editing_id)
        if existing is None:
            logger.warning(f"Edit target {editing_id} not found, nothing saved")
            return SaveResult(records=records, notice=f"Atendimento {editing_id} não encontrado.")
        require_edit(user, existing)
        if not user.is_manager and data.responsible_member != existing.responsible_member:
            # Members cannot reassign a record they are editing
            logger.info(f"Keeping responsible member of {editing_id} for {user.id}")
            data = replace(data, responsible_member=existing.responsible_member)

    updated = save_record(records, data, user, editing_id=editing_id, now=now)
    gateway.save_records(updated)
    if editing_id is None:
        record = updated[-1]
        logger.info(f"Created record {record.id} in {record.group.value}")
    else:
        record = find_record(updated, editing_id)
        logger.info(f"Updated record {record.id}")
    return SaveResult(records=updated, record=record)


def summarize(gateway: Gateway, user: User) -> dict[Classification, int]:
    """Counts per classification over everything the user can see."""
    return count_by_classification(visible_records(gateway.load_records(), user))
