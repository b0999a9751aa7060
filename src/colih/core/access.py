"""Role-based access policy - no I/O dependencies."""

from .errors import PermissionDenied
from .records import AttendanceRecord, Role, User


def can_create(user: User) -> bool:
    """Only group members create records; managers only review."""
    return user.role == Role.MEMBER and user.group is not None


def can_edit(user: User, record: AttendanceRecord) -> bool:
    """Managers edit anything; members edit only records they created."""
    return user.role == Role.MANAGER or record.created_by_user_id == user.id


def require_create(user: User) -> None:
    if not can_create(user):
        raise PermissionDenied(f"User {user.id} cannot create records")


def require_edit(user: User, record: AttendanceRecord) -> None:
    if not can_edit(user, record):
        raise PermissionDenied(f"User {user.id} cannot edit record {record.id}")
