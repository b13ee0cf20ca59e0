"""Command: validate addresses from arguments, a file, or stdin."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from mailgate.commands._base import with_examples

if TYPE_CHECKING:
    from mailgate.commands._context import AppContext


def _read_lines(source: TextIO) -> list[str]:
    """One address per line.

    Empty lines are separators and are skipped. A line holding only
    whitespace is kept as an address and reported invalid.
    """
    lines = (line.rstrip("\r\n") for line in source)
    return [line for line in lines if line]


@click.command()
@with_examples(
    """\
  mailgate validate contato@empresa.com hacker@gmail.com
  mailgate validate --domain empresa.com contato@empresa.com
  mailgate validate --file addresses.txt --workers 8
  cat addresses.txt | mailgate -q validate --file - --valid-only
  mailgate --json validate diretoria@empresa.com"""
)
@click.argument("addresses", nargs=-1)
@click.option(
    "-f",
    "--file",
    "source",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help=(
        "Read one address per line ('-' for stdin). Empty lines are skipped; "
        "whitespace-only lines are validated and reported invalid."
    ),
)
@click.option("--domain", default=None, help="Require addresses to end in @DOMAIN.")
@click.option("--valid-only", is_flag=True, help="Only list addresses that pass.")
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Thread pool size for large batches.",
)
@click.pass_obj
def validate(
    app: AppContext,
    addresses: tuple[str, ...],
    source: TextIO | None,
    domain: str | None,
    valid_only: bool,
    workers: int | None,
) -> None:
    """Validate email addresses against the pattern and domain rules."""
    from mailgate.services.validate import ValidateService

    batch = list(addresses)
    if source is not None:
        batch.extend(_read_lines(source))

    verifier = app.build_verifier(domain=domain, max_workers=workers)
    app.emit(ValidateService(verifier).validate(batch, valid_only=valid_only))
