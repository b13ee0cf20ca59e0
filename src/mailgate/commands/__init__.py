"""Subcommand modules for mailgate.

Provides register_commands() which uses deferred imports to keep
``mailgate --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from mailgate.commands.demo import demo
    from mailgate.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(demo)
