"""Command: list configured forms or describe one."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from formrules.commands._base import FormrulesCommand

if TYPE_CHECKING:
    from formrules.commands._context import AppContext


@click.command(
    cls=FormrulesCommand,
    examples="""\
  formrules forms
  formrules forms signup
  formrules --json forms signup""",
)
@click.argument("name", required=False)
@click.pass_obj
def forms(app: AppContext, name: str | None) -> None:
    """List configured forms, or show the rules of form NAME."""
    if name:
        app.emit(app.forms.describe(name))
    else:
        app.emit(app.forms.list_forms())
