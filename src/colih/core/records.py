"""Pure attendance record domain types - no I/O dependencies."""

from dataclasses import dataclass, replace
from enum import Enum

from .errors import MalformedStorage


class Group(Enum):
    """Regional groups a Member belongs to and a record is scoped to."""

    GRUPO_A = "Grupo A"
    GRUPO_B = "Grupo B"
    GRUPO_C = "Grupo C"
    GRUPO_D = "Grupo D"
    GRUPO_E = "Grupo E"
    CAMACARI = "Grupo Camaçari"
    ITAPARICA = "Grupo Itaparica"
    SAJ = "Grupo SAJ"
    VALENCA = "Grupo Valença"
    ALAGOINHAS = "Grupo Alagoinhas"


class Role(Enum):
    MANAGER = "Manager"
    MEMBER = "Member"


class Status(Enum):
    """Coarse workflow status of an attendance."""

    IN_PROGRESS = "Em andamento"
    FINALIZED = "Finalizado"


class YesNo(Enum):
    YES = "Sim"
    NO = "Não"


def _enum_value(enum_cls: type[Enum], value):
    try:
        return enum_cls(value)
    except ValueError:
        raise MalformedStorage(f"Unknown {enum_cls.__name__} value: {value!r}")


def _text_value(data: dict, key: str, default: str | None = None) -> str:
    value = data.get(key, default) if default is not None else data[key]
    if value is None and default is not None:
        return default
    if not isinstance(value, str):
        raise MalformedStorage(f"Field {key} is not text: {value!r}")
    return value


@dataclass(frozen=True)
class User:
    """A logged-in user. Members always carry a group."""

    id: str
    name: str
    role: Role
    group: Group | None = None

    def __post_init__(self):
        if self.role == Role.MEMBER and self.group is None:
            raise ValueError(f"Member {self.id!r} must belong to a group")

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    @property
    def scope_label(self) -> str:
        """Header label: the member's group, or the global view for managers."""
        if self.group is None:
            return "Gestão Geral"
        return self.group.value

    def to_dict(self) -> dict:
        data = {"id": self.id, "name": self.name, "role": self.role.value}
        if self.group is not None:
            data["group"] = self.group.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create User from its stored JSON shape."""
        try:
            group = data.get("group")
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                role=_enum_value(Role, data["role"]),
                group=_enum_value(Group, group) if group else None,
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise MalformedStorage(f"Invalid user: {e}") from e


@dataclass(frozen=True)
class RecordInput:
    """The user-editable fields of a record, as supplied by a save action."""

    responsible_member: str
    patient_initials: str
    hospital: str
    status: Status
    hlc7_finalized: YesNo
    hlc7_sent: YesNo
    observations: str = ""


@dataclass(frozen=True)
class AttendanceRecord:
    """A single patient attendance ("atendimento") tracked by a group."""

    id: str
    group: Group
    responsible_member: str
    patient_initials: str
    hospital: str
    status: Status
    hlc7_finalized: YesNo
    hlc7_sent: YesNo
    observations: str
    created_at: int
    updated_at: int
    created_by_user_id: str

    @property
    def is_finalized(self) -> bool:
        return self.status == Status.FINALIZED

    def with_input(self, data: RecordInput, updated_at: int) -> "AttendanceRecord":
        """Copy with mutable fields replaced. Identity and ownership are kept."""
        return replace(
            self,
            responsible_member=data.responsible_member,
            patient_initials=data.patient_initials,
            hospital=data.hospital,
            status=data.status,
            hlc7_finalized=data.hlc7_finalized,
            hlc7_sent=data.hlc7_sent,
            observations=data.observations,
            updated_at=updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "group": self.group.value,
            "responsibleMember": self.responsible_member,
            "patientInitials": self.patient_initials,
            "hospital": self.hospital,
            "status": self.status.value,
            "hlc7Finalized": self.hlc7_finalized.value,
            "hlc7Sent": self.hlc7_sent.value,
            "observations": self.observations,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "createdByUserId": self.created_by_user_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        """Create AttendanceRecord from its stored JSON shape."""
        try:
            return cls(
                id=str(data["id"]),
                group=_enum_value(Group, data["group"]),
                responsible_member=_text_value(data, "responsibleMember"),
                patient_initials=_text_value(data, "patientInitials"),
                hospital=_text_value(data, "hospital"),
                status=_enum_value(Status, data["status"]),
                hlc7_finalized=_enum_value(YesNo, data["hlc7Finalized"]),
                hlc7_sent=_enum_value(YesNo, data["hlc7Sent"]),
                observations=_text_value(data, "observations", default=""),
                created_at=int(data["createdAt"]),
                updated_at=int(data["updatedAt"]),
                created_by_user_id=str(data["createdByUserId"]),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise MalformedStorage(f"Invalid record: {e}") from e


@dataclass(frozen=True)
class FilterCriteria:
    """
    Ephemeral list filters.

    Text fields match case-insensitive substrings; enum fields match exactly.
    Empty values disable the corresponding filter.
    """

    responsible_member: str = ""
    patient_initials: str = ""
    hospital: str = ""
    status: Status | None = None
    hlc7_finalized: YesNo | None = None
    hlc7_sent: YesNo | None = None

    @property
    def is_empty(self) -> bool:
        return not (
            self.responsible_member.strip()
            or self.patient_initials.strip()
            or self.hospital.strip()
            or self.status is not None
            or self.hlc7_finalized is not None
            or self.hlc7_sent is not None
        )
