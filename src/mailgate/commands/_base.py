"""Shared option decorators for mailgate subcommands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click


def with_examples(examples: str) -> Callable[[Any], Any]:
    """Add an eager ``--examples`` flag that prints *examples* and exits.

    Used like any other ``click.option`` decorator, beneath ``@click.command()``.
    """

    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_print_examples,
        help="Show usage examples and exit.",
    )
