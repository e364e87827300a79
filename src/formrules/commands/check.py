"""Command: validate a record against a configured form."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from formrules.commands._base import FormrulesCommand

if TYPE_CHECKING:
    from formrules.commands._context import AppContext
    from formrules.services.result import ServiceResult


def _parse_assignment(raw: str) -> tuple[str, Any]:
    """Split ``field=value``; the value is kept as text."""
    field, sep, value = raw.partition("=")
    if not sep or not field:
        msg = f"Expected field=value, got {raw!r}"
        raise click.BadParameter(msg, param_hint="--set")
    return field, value


def _invalid_input(message: str) -> ServiceResult:
    from formrules.services.result import ServiceError, ServiceResult

    return ServiceResult(
        ok=False,
        op="check",
        error=ServiceError(code="INVALID_INPUT", message=message),
    )


@click.command(
    cls=FormrulesCommand,
    examples="""\
  formrules check signup --set email=ada@example.com --set password=hunter22
  formrules check signup --data submission.json
  cat submission.json | formrules --json check signup --data -
  formrules -q check product --set price=-3""",
)
@click.argument("form")
@click.option(
    "--data",
    "data_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="JSON object with field values ('-' for stdin).",
)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    help="Field value as field=value, kept as text (repeatable; applied after --data).",
)
@click.pass_obj
def check(app: AppContext, form: str, data_file: Any, assignments: tuple[str, ...]) -> None:
    """Validate a record against FORM and report every failing rule."""
    record: dict[str, Any] = {}
    if data_file is not None:
        source = getattr(data_file, "name", "<stdin>")
        try:
            loaded = json.load(data_file)
        except json.JSONDecodeError as exc:
            app.emit(_invalid_input(f"Error reading {source}: {exc}"))
            return
        if not isinstance(loaded, dict):
            app.emit(_invalid_input("JSON input must contain a top-level object."))
            return
        record.update(loaded)

    for raw in assignments:
        field, value = _parse_assignment(raw)
        record[field] = value

    app.emit(app.forms.check(form, record))
