"""Rich Console factory and theme for formrules output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

FORMRULES_THEME = Theme(
    {
        "fr.ok": "bold green",
        "fr.error": "bold red",
        "fr.warning": "bold yellow",
        "fr.op": "bold cyan",
        "fr.key": "dim",
        "fr.field": "bold blue",
        "fr.rule": "magenta",
        "fr.skipped": "dim yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "ok": "fr.ok",
    "invalid": "fr.error",
    "skipped": "fr.skipped",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=FORMRULES_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a field status."""
    return _STATUS_STYLES.get(status, "")
