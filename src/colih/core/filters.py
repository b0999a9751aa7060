"""Pure record visibility, filtering and ordering - no I/O dependencies."""

from .records import AttendanceRecord, FilterCriteria, Role, Status, User


def filter_by_access(records: list[AttendanceRecord], user: User) -> list[AttendanceRecord]:
    """Members see only their own group's records; managers see everything."""
    match user.role:
        case Role.MANAGER:
            return list(records)
        case Role.MEMBER:
            return [r for r in records if r.group == user.group]


def _contains(value: str, needle: str) -> bool:
    return needle.lower() in value.lower()


def filter_by_criteria(
    records: list[AttendanceRecord],
    criteria: FilterCriteria,
) -> list[AttendanceRecord]:
    """
    Apply every non-empty criterion as an AND-combined predicate.

    Pure function - no I/O.
    """
    result = list(records)
    member = criteria.responsible_member.strip()
    patient = criteria.patient_initials.strip()
    hospital = criteria.hospital.strip()
    if member:
        result = [r for r in result if _contains(r.responsible_member, member)]
    if patient:
        result = [r for r in result if _contains(r.patient_initials, patient)]
    if hospital:
        result = [r for r in result if _contains(r.hospital, hospital)]
    if criteria.status is not None:
        result = [r for r in result if r.status == criteria.status]
    if criteria.hlc7_finalized is not None:
        result = [r for r in result if r.hlc7_finalized == criteria.hlc7_finalized]
    if criteria.hlc7_sent is not None:
        result = [r for r in result if r.hlc7_sent == criteria.hlc7_sent]
    return result


def sort_records(records: list[AttendanceRecord]) -> list[AttendanceRecord]:
    """
    Sort in-progress records before finalized ones, newest first within each.

    Pure function - no I/O. Finalized work always sinks to the bottom.
    """

    def sort_key(r: AttendanceRecord) -> tuple[int, int]:
        # Negative created_at for descending sort
        return (0 if r.status == Status.IN_PROGRESS else 1, -r.created_at)

    return sorted(records, key=sort_key)


def visible_records(
    records: list[AttendanceRecord],
    user: User,
    criteria: FilterCriteria | None = None,
) -> list[AttendanceRecord]:
    """
    Records the user may see, narrowed by criteria and ordered for display.

    Returns a fresh list; `records` is never mutated.
    """
    result = filter_by_access(records, user)
    if criteria is not None and not criteria.is_empty:
        result = filter_by_criteria(result, criteria)
    return sort_records(result)
