"""Pure record classification - no I/O dependencies."""

from enum import Enum

from .records import AttendanceRecord, Status, YesNo


class Classification(Enum):
    """Visual/workflow category of a record."""

    NEEDS_ATTENTION = "needs_attention"  # Red: unsafe to consider closed
    COMPLETE = "complete"  # Green: finalized with both checkpoints done
    ACTIVE = "active"  # Blue: in progress and already sent

    @property
    def color(self) -> str:
        colors = {
            Classification.NEEDS_ATTENTION: "red",
            Classification.COMPLETE: "green",
            Classification.ACTIVE: "blue",
        }
        return colors[self]

    @property
    def label(self) -> str:
        labels = {
            Classification.NEEDS_ATTENTION: "Atenção",
            Classification.COMPLETE: "Concluído",
            Classification.ACTIVE: "Em andamento",
        }
        return labels[self]


def classify(record: AttendanceRecord) -> Classification:
    """
    Classify a record from its status and HLC-7 checkpoints.

    First match wins:
      NEEDS_ATTENTION: finalized without the HLC-7 form finalized,
                       or HLC-7 not sent to the secretary (any status)
      COMPLETE: finalized, HLC-7 finalized and sent
      ACTIVE: everything else (in progress and sent)
    """
    finalized = record.status == Status.FINALIZED
    form_finalized = record.hlc7_finalized == YesNo.YES
    sent = record.hlc7_sent == YesNo.YES

    if (finalized and not form_finalized) or not sent:
        return Classification.NEEDS_ATTENTION
    if finalized and form_finalized and sent:
        return Classification.COMPLETE
    return Classification.ACTIVE


def count_by_classification(records: list[AttendanceRecord]) -> dict[Classification, int]:
    """Count records per classification. Every category is present."""
    counts = {c: 0 for c in Classification}
    for r in records:
        counts[classify(r)] += 1
    return counts
