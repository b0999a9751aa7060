"""Colih CLI - attendance tracking for regional groups."""

import json
import logging
import sys

import click

from .config import load_config
from .core.access import can_create
from .core.classify import classify
from .core.errors import (
    AmbiguousRecordId,
    PermissionDenied,
    RecordNotFound,
    UnknownUser,
    ValidationError,
)
from .core.records import FilterCriteria, Status, User, YesNo
from .core.validation import default_input, input_from_record
from .format import format_detail, format_summary, format_table, record_to_json
from .gateway import Gateway
from .workflows import get_gateway, get_record, list_records, login, logout, save, summarize

logger = logging.getLogger(__name__)

STATUS_CHOICES = click.Choice([s.value for s in Status])
YES_NO_CHOICES = click.Choice([v.value for v in YesNo])

FIELD_LABELS = {
    "responsibleMember": "Membro responsável",
    "patientInitials": "Paciente (iniciais)",
    "hospital": "Hospital",
    "status": "Status",
    "hlc7Finalized": "HLC-7 finalizado",
    "hlc7Sent": "HLC-7 enviado ao secretário",
}


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _session() -> tuple[Gateway, User]:
    """Gateway plus the logged-in user; exits if nobody is logged in."""
    gateway = get_gateway(load_config())
    user = gateway.load_user()
    if user is None:
        _fail("Not logged in. Run 'colih login USER_ID' first.")
    return gateway, user


def _report_validation(e: ValidationError) -> None:
    click.echo("Error: please fix the following fields:", err=True)
    for name, message in e.fields.items():
        click.echo(f"  {FIELD_LABELS.get(name, name)}: {message}", err=True)
    sys.exit(1)


def _record_options(func):
    """Shared form options for add/edit."""
    options = [
        click.option("--responsible", "responsibleMember", default=None, help="Responsible member"),
        click.option("--patient", "patientInitials", default=None, help="Patient initials (max 5)"),
        click.option("--hospital", "hospital", default=None, help="Hospital"),
        click.option("--status", "status", type=STATUS_CHOICES, default=None, help="Workflow status"),
        click.option("--hlc7-finalized", "hlc7Finalized", type=YES_NO_CHOICES, default=None,
                     help="HLC-7 form finalized?"),
        click.option("--hlc7-sent", "hlc7Sent", type=YES_NO_CHOICES, default=None,
                     help="HLC-7 sent to the secretary?"),
        click.option("--obs", "observations", default=None, help="Observations"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _merge(base: dict, overrides: dict) -> dict:
    return {**base, **{k: v for k, v in overrides.items() if v is not None}}


class ColihGroup(click.Group):
    """Command group that reports storage I/O failures as CLI errors."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except OSError as e:
            logger.debug("Storage failure", exc_info=True)
            _fail(f"Storage error: {e}")


@click.group(cls=ColihGroup)
@click.version_option(package_name="colih")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Colih - attendance tracking CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
def users():
    """List users available for login."""
    config = load_config()
    for u in config.users:
        scope = u.group.value if u.group else "Gestão Geral"
        click.echo(f"{u.id:8} {u.name:24} {u.role.value:8} {scope}")


@main.command("login")
@click.argument("user_id")
def login_cmd(user_id: str):
    """Start a session as USER_ID."""
    config = load_config()
    try:
        user = login(get_gateway(config), config, user_id)
    except UnknownUser as e:
        _fail(f"{e}. Run 'colih users' to see the directory.")
    click.echo(f"Logged in as {user.name} ({user.scope_label})")


@main.command("logout")
def logout_cmd():
    """End the current session."""
    logout(get_gateway(load_config()))
    click.echo("Logged out.")


@main.command()
def whoami():
    """Show the logged-in user."""
    _, user = _session()
    click.echo(f"{user.name} [{user.id}] - {user.role.value}, {user.scope_label}")


@main.command("list")
@click.option("--responsible", default="", help="Filter by responsible member (substring)")
@click.option("--patient", default="", help="Filter by patient initials (substring)")
@click.option("--hospital", default="", help="Filter by hospital (substring)")
@click.option("--status", type=STATUS_CHOICES, default=None, help="Filter by status")
@click.option("--hlc7-finalized", type=YES_NO_CHOICES, default=None, help="Filter by HLC-7 finalized")
@click.option("--hlc7-sent", type=YES_NO_CHOICES, default=None, help="Filter by HLC-7 sent")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-color", is_flag=True, help="Disable coloured rows")
def list_cmd(
    responsible: str,
    patient: str,
    hospital: str,
    status: str | None,
    hlc7_finalized: str | None,
    hlc7_sent: str | None,
    as_json: bool,
    no_color: bool,
):
    """List visible attendances, in-progress first."""
    gateway, user = _session()
    criteria = FilterCriteria(
        responsible_member=responsible,
        patient_initials=patient,
        hospital=hospital,
        status=Status(status) if status else None,
        hlc7_finalized=YesNo(hlc7_finalized) if hlc7_finalized else None,
        hlc7_sent=YesNo(hlc7_sent) if hlc7_sent else None,
    )
    items = list_records(gateway, user, criteria)

    if as_json:
        click.echo(json.dumps([record_to_json(i) for i in items], ensure_ascii=False, indent=2))
        return

    title = "Visão Geral" if user.is_manager else f"Atendimentos - {user.scope_label}"
    click.echo(f"{title} ({len(items)})\n")
    click.echo(format_table(items, user, color=not no_color))


@main.command()
@click.argument("record_id")
def show(record_id: str):
    """Show one attendance in full."""
    gateway, user = _session()
    try:
        record = get_record(gateway, user, record_id)
    except (RecordNotFound, AmbiguousRecordId) as e:
        _fail(str(e))
    click.echo(format_detail(record, classify(record)))


@main.command()
@_record_options
def add(**fields):
    """Create an attendance in your group."""
    gateway, user = _session()
    if not can_create(user):
        _fail("Only group members can create attendances.")

    raw = _merge(default_input(user), fields)
    try:
        result = save(gateway, user, raw)
    except ValidationError as e:
        _report_validation(e)
    except PermissionDenied as e:
        _fail(str(e))
    click.echo(f"✓ Created {result.record.id}")


@main.command()
@click.argument("record_id")
@_record_options
def edit(record_id: str, **fields):
    """Update an attendance you created (managers may edit any)."""
    gateway, user = _session()
    try:
        existing = get_record(gateway, user, record_id)
    except (RecordNotFound, AmbiguousRecordId) as e:
        _fail(str(e))

    raw = _merge(input_from_record(existing), fields)
    try:
        result = save(gateway, user, raw, editing_id=existing.id)
    except ValidationError as e:
        _report_validation(e)
    except PermissionDenied as e:
        _fail(str(e))

    if result.notice:
        click.echo(result.notice)
        return
    click.echo(f"✓ Updated {result.record.id}")


@main.command()
def status():
    """Quick count of attendances per classification."""
    gateway, user = _session()
    click.echo(format_summary(summarize(gateway, user)))


if __name__ == "__main__":
    main()
