"""Rich Console factory and theme for mailgate output.

Consoles render into a StringIO buffer so renderers keep a
``str``-returning contract. In non-TTY environments (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MAILGATE_THEME = Theme(
    {
        "mg.ok": "bold green",
        "mg.error": "bold red",
        "mg.warning": "bold yellow",
        "mg.op": "bold cyan",
        "mg.key": "dim",
        "mg.address": "bold",
        "mg.valid": "green",
        "mg.invalid": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=MAILGATE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_verdict(valid: bool) -> str:
    return "mg.valid" if valid else "mg.invalid"
