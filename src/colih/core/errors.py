"""Domain errors shared by the core, the gateway and the workflows."""


class ColihError(Exception):
    """Base class for all attendance-tracker errors."""

    pass


class ValidationError(ColihError):
    """Raised when a save action is missing required fields.

    `fields` maps each offending field name to a user-facing message.
    """

    def __init__(self, fields: dict[str, str]):
        self.fields = dict(fields)
        names = ", ".join(sorted(self.fields))
        super().__init__(f"Invalid fields: {names}")


class RecordNotFound(ColihError):
    """Raised when an update targets a record id that does not exist."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")


class PermissionDenied(ColihError):
    """Raised when a user attempts an action their role does not allow."""

    pass


class MalformedStorage(ColihError):
    """Raised when a persisted blob cannot be decoded."""

    pass


class UnknownUser(ColihError):
    """Raised when logging in with an id missing from the user directory."""

    pass


class AmbiguousRecordId(ColihError):
    """Raised when a short id matches more than one record."""

    def __init__(self, prefix: str, matches: list[str]):
        self.prefix = prefix
        self.matches = list(matches)
        super().__init__(f"Id prefix {prefix!r} matches {len(self.matches)} records; use more characters")
