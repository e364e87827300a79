"""Subcommand modules for formrules.

Provides register_commands() which uses deferred imports to keep
``formrules --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from formrules.commands.check import check
    from formrules.commands.forms import forms
    from formrules.commands.rules import rules

    cli.add_command(check)
    cli.add_command(forms)
    cli.add_command(rules)
