"""Terminal formatting for records and summaries."""

from datetime import datetime

import click

from .core.access import can_edit
from .core.classify import Classification
from .core.records import AttendanceRecord, User, YesNo
from .workflows import ClassifiedRecord

MARKERS = {
    Classification.NEEDS_ATTENTION: "!",
    Classification.COMPLETE: "✓",
    Classification.ACTIVE: "•",
}


def _check(value: YesNo) -> str:
    return "✓" if value == YesNo.YES else "✗"


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def format_row(item: ClassifiedRecord, user: User, color: bool = True) -> str:
    """One table line, coloured by classification. `*` marks editable rows."""
    r = item.record
    editable = "*" if can_edit(user, r) else " "
    line = (
        f"{MARKERS[item.classification]} {editable} "
        f"{r.id[:8]:8}  {_truncate(r.group.value, 16):16}  "
        f"{_truncate(r.responsible_member, 18):18}  {r.patient_initials:5}  "
        f"{_truncate(r.hospital, 18):18}  {r.status.value:12}  "
        f"{_check(r.hlc7_finalized):^4}  {_check(r.hlc7_sent):^4}  "
        f"{_truncate(r.observations, 30)}"
    )
    if color:
        return click.style(line, fg=item.classification.color)
    return line


def format_header() -> str:
    return (
        f"    {'ID':8}  {'Grupo':16}  {'Responsável':18}  {'Pac.':5}  "
        f"{'Hospital':18}  {'Status':12}  {'Fin.':^4}  {'Env.':^4}  Obs"
    )


def format_table(items: list[ClassifiedRecord], user: User, color: bool = True) -> str:
    if not items:
        return "Nenhum atendimento encontrado."
    lines = [format_header()]
    lines.extend(format_row(item, user, color) for item in items)
    return "\n".join(lines)


def format_detail(record: AttendanceRecord, classification: Classification) -> str:
    """Full multi-line view of a single record."""
    return "\n".join(
        [
            f"Atendimento {record.id}",
            f"  Classificação:       {classification.label}",
            f"  Grupo:               {record.group.value}",
            f"  Responsável:         {record.responsible_member}",
            f"  Paciente:            {record.patient_initials}",
            f"  Hospital:            {record.hospital}",
            f"  Status:              {record.status.value}",
            f"  HLC-7 finalizado:    {record.hlc7_finalized.value}",
            f"  Enviado secretário:  {record.hlc7_sent.value}",
            f"  Observações:         {record.observations or '-'}",
            f"  Criado em:           {format_timestamp(record.created_at)} por {record.created_by_user_id}",
            f"  Atualizado em:       {format_timestamp(record.updated_at)}",
        ]
    )


def format_summary(counts: dict[Classification, int]) -> str:
    total = sum(counts.values())
    lines = [f"Total: {total}"]
    for c in Classification:
        lines.append(f"  {MARKERS[c]} {c.label:14} {counts.get(c, 0)}")
    return "\n".join(lines)


def record_to_json(item: ClassifiedRecord) -> dict:
    data = item.record.to_dict()
    data["classification"] = item.classification.value
    return data
