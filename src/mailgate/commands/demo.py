"""Command: run the built-in sample batch."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mailgate.commands._base import with_examples

if TYPE_CHECKING:
    from mailgate.commands._context import AppContext


@click.command()
@with_examples("  mailgate demo\n  mailgate --json demo")
@click.pass_obj
def demo(app: AppContext) -> None:
    """Validate four sample addresses against empresa.com."""
    from mailgate.services.validate import ValidateService, build_sample_verifier

    app.emit(ValidateService(build_sample_verifier()).demo())
