"""Create/update reducer for the record collection - no I/O dependencies."""

import time
import uuid

from .errors import PermissionDenied, RecordNotFound
from .records import AttendanceRecord, RecordInput, User


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_record_id() -> str:
    """Collision-resistant record id."""
    return uuid.uuid4().hex


def find_record(records: list[AttendanceRecord], record_id: str) -> AttendanceRecord | None:
    return next((r for r in records if r.id == record_id), None)


def create_record(
    records: list[AttendanceRecord],
    data: RecordInput,
    current_user: User,
    now: int,
    record_id: str,
) -> list[AttendanceRecord]:
    """Append a new record owned by the user's group."""
    if current_user.group is None:
        raise PermissionDenied(f"User {current_user.id} has no group to create records in")

    record = AttendanceRecord(
        id=record_id,
        group=current_user.group,
        responsible_member=data.responsible_member,
        patient_initials=data.patient_initials,
        hospital=data.hospital,
        status=data.status,
        hlc7_finalized=data.hlc7_finalized,
        hlc7_sent=data.hlc7_sent,
        observations=data.observations,
        created_at=now,
        updated_at=now,
        created_by_user_id=current_user.id,
    )
    return [*records, record]


def update_record(
    records: list[AttendanceRecord],
    data: RecordInput,
    editing_id: str,
    now: int,
) -> list[AttendanceRecord]:
    """Replace the mutable fields of one record, keeping its position."""
    existing = find_record(records, editing_id)
    if existing is None:
        raise RecordNotFound(editing_id)

    # updated_at never moves backwards, even under clock skew
    updated = existing.with_input(data, updated_at=max(now, existing.updated_at))
    return [updated if r.id == editing_id else r for r in records]


def save_record(
    records: list[AttendanceRecord],
    data: RecordInput,
    current_user: User,
    editing_id: str | None = None,
    now: int | None = None,
    record_id: str | None = None,
) -> list[AttendanceRecord]:
    """
    Create or update a record, returning a new collection.

    The input list is never mutated. Validation and ownership checks are the
    caller's job; only a missing group on create is rejected here.

    Raises:
        PermissionDenied: create attempted by a user without a group.
        RecordNotFound: `editing_id` does not match any record.
    """
    now = now if now is not None else now_ms()
    if editing_id is None:
        return create_record(records, data, current_user, now, record_id or new_record_id())
    return update_record(records, data, editing_id, now)
