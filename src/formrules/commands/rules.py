"""Command: show the built-in rule catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from formrules.commands._base import FormrulesCommand

if TYPE_CHECKING:
    from formrules.commands._context import AppContext


@click.command(
    cls=FormrulesCommand,
    examples="""\
  formrules rules
  formrules --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List the built-in rules and the parameters they take."""
    app.emit(app.forms.catalog())
