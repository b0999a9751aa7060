"""Save-form validation and defaults - no I/O dependencies."""

from enum import Enum

from .errors import ValidationError
from .records import AttendanceRecord, RecordInput, Role, Status, User, YesNo

REQUIRED_FIELDS = (
    "responsibleMember",
    "patientInitials",
    "hospital",
    "status",
    "hlc7Finalized",
    "hlc7Sent",
)

REQUIRED_MESSAGE = "Campo obrigatório"
PATIENT_INITIALS_MAX = 5


def _parse_choice(enum_cls: type[Enum], value) -> Enum | None:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _is_blank(value) -> bool:
    if isinstance(value, str):
        return not value.strip()
    # Non-string text is as good as missing; enums pass through
    return not isinstance(value, Enum)


def validate_input(raw: dict) -> RecordInput:
    """
    Validate raw form values (camelCase keys) into a RecordInput.

    Collects every problem before raising, so the caller can flag all
    offending fields at once. `observations` is optional.

    Raises:
        ValidationError: with a message per offending field.
    """
    errors: dict[str, str] = {}

    for name in REQUIRED_FIELDS:
        if _is_blank(raw.get(name)):
            errors[name] = REQUIRED_MESSAGE

    status = None
    if "status" not in errors:
        status = _parse_choice(Status, raw["status"])
        if status is None:
            errors["status"] = f"Valor inválido: {raw['status']}"

    checkpoints = {}
    for name in ("hlc7Finalized", "hlc7Sent"):
        if name in errors:
            continue
        checkpoints[name] = _parse_choice(YesNo, raw[name])
        if checkpoints[name] is None:
            errors[name] = f"Valor inválido: {raw[name]}"

    initials = raw.get("patientInitials")
    if "patientInitials" not in errors and len(initials.strip()) > PATIENT_INITIALS_MAX:
        errors["patientInitials"] = f"Máximo de {PATIENT_INITIALS_MAX} caracteres"

    if errors:
        raise ValidationError(errors)

    return RecordInput(
        responsible_member=raw["responsibleMember"].strip(),
        patient_initials=initials.strip(),
        hospital=raw["hospital"].strip(),
        status=status,
        hlc7_finalized=checkpoints["hlc7Finalized"],
        hlc7_sent=checkpoints["hlc7Sent"],
        observations=str(raw.get("observations") or "").strip(),
    )


def default_input(user: User) -> dict:
    """Pre-filled values for a new record form."""
    return {
        "responsibleMember": user.name if user.role == Role.MEMBER else "",
        "patientInitials": "",
        "hospital": "",
        "status": Status.IN_PROGRESS.value,
        "hlc7Finalized": YesNo.NO.value,
        "hlc7Sent": YesNo.NO.value,
        "observations": "",
    }


def input_from_record(record: AttendanceRecord) -> dict:
    """Pre-filled values for editing an existing record."""
    return {
        "responsibleMember": record.responsible_member,
        "patientInitials": record.patient_initials,
        "hospital": record.hospital,
        "status": record.status.value,
        "hlc7Finalized": record.hlc7_finalized.value,
        "hlc7Sent": record.hlc7_sent.value,
        "observations": record.observations,
    }
