"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from formrules.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from formrules.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, width: int | None = None) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        lines = [f"ERROR: {result.op} — {msg}"]
        if result.error and result.error.code == "INVALID_RECORD":
            for field, messages in result.error.detail.get("errors", {}).items():
                lines.extend(f"{field}: {m}" for m in messages)
        return "\n".join(lines)

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name") or item.get("rule", "")) for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="fr.ok")
    op = Text(f"  {result.op}", style="fr.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="fr.key")
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"), default=str)
    console.print(k, Text(str(value)), sep="", end="")
    console.print()


def _field_table(fields: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a field status table for check results."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="fr.field", no_wrap=True)
    table.add_column("Status")
    table.add_column("Messages")
    if verbose:
        table.add_column("Touched", style="dim")

    for report in fields:
        status = str(report.get("status", ""))
        row: list[Any] = [
            str(report.get("field", "")),
            Text(status, style=style_for_status(status)),
            "\n".join(report.get("errors", [])),
        ]
        if verbose:
            row.append("yes" if report.get("touched") else "no")
        table.add_row(*row)
    return table


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="fr.warning"), warning)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="fr.error")
    op = Text(f"  {result.op}", style="fr.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err and err.code == "INVALID_RECORD":
        console.print(_field_table(err.detail.get("fields", []), verbose=verbose))
        _render_warnings(console, result)
        return

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a passing check as a field table."""
    _status_line(console, result)
    console.print(_field_table(result.data.get("fields", []), verbose=verbose))
    _render_warnings(console, result)
    if verbose:
        _field(console, "values", result.data.get("values", {}))


def _render_describe(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a form's fields and their ordered rules."""
    _status_line(console, result)
    _field(console, "form", result.data.get("form", ""))
    if result.data.get("description"):
        _field(console, "description", result.data["description"])
    if verbose:
        _field(console, "initial", result.data.get("initial", {}))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="fr.field", no_wrap=True)
    table.add_column("Rule", style="fr.rule")
    table.add_column("Params")
    table.add_column("Message")
    for entry in result.data.get("fields", []):
        field = str(entry.get("field", ""))
        for rule in entry.get("rules", []):
            params = ", ".join(f"{k}={v}" for k, v in rule.get("params", {}).items())
            table.add_row(field, str(rule.get("rule", "")), params, str(rule.get("message", "")))
            field = ""
    console.print(table)


def _render_list_forms(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No forms configured.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Form", style="fr.field", no_wrap=True)
    table.add_column("Fields", justify="right")
    table.add_column("Description")
    for item in items:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("field_count", 0)),
            str(item.get("description", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} forms")


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="fr.rule", no_wrap=True)
    table.add_column("Params")
    table.add_column("Empty input")
    table.add_column("Aliases", style="dim")
    for item in result.data.get("items", []):
        table.add_row(
            str(item.get("rule", "")),
            ", ".join(item.get("params", [])),
            "passes" if item.get("skips_empty") else "rejected",
            ", ".join(item.get("aliases", [])),
        )
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "check": _render_check,
    "describe_form": _render_describe,
    "list_forms": _render_list_forms,
    "rules": _render_catalog,
}
