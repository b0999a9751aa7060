"""Functional core - pure business logic with no I/O."""

from .records import (
    AttendanceRecord,
    FilterCriteria,
    Group,
    RecordInput,
    Role,
    Status,
    User,
    YesNo,
)
from .filters import visible_records, filter_by_access, filter_by_criteria, sort_records
from .classify import Classification, classify, count_by_classification
from .reducer import save_record, find_record
from .access import can_create, can_edit, require_create, require_edit
from .validation import REQUIRED_FIELDS, validate_input, default_input, input_from_record
from .errors import (
    AmbiguousRecordId,
    ColihError,
    MalformedStorage,
    PermissionDenied,
    RecordNotFound,
    UnknownUser,
    ValidationError,
)

__all__ = [
    # Records
    "AttendanceRecord",
    "FilterCriteria",
    "Group",
    "RecordInput",
    "Role",
    "Status",
    "User",
    "YesNo",
    # Filters
    "visible_records",
    "filter_by_access",
    "filter_by_criteria",
    "sort_records",
    # Classification
    "Classification",
    "classify",
    "count_by_classification",
    # Reducer
    "save_record",
    "find_record",
    # Access
    "can_create",
    "can_edit",
    "require_create",
    "require_edit",
    # Validation
    "REQUIRED_FIELDS",
    "validate_input",
    "default_input",
    "input_from_record",
    # Errors
    "AmbiguousRecordId",
    "ColihError",
    "MalformedStorage",
    "PermissionDenied",
    "RecordNotFound",
    "UnknownUser",
    "ValidationError",
]
